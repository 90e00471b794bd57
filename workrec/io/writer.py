"""
Recommendation Writers.

Serializes final recommendations, order-preserving:
- JSON: {"recommendations": [{"id": ..., "score": ...}, ...]}
- CSV: rank,id,score (via pandas)
"""

from typing import List, Sequence, TextIO
import json

import pandas as pd

from workrec.models import ScoredItem

OUTPUT_FORMATS = ('json', 'csv')


def render_json(items: Sequence[ScoredItem], indent: int = 2) -> str:
    """Render recommendations as JSON text."""
    payload = {'recommendations': [item.to_dict() for item in items]}
    return json.dumps(payload, indent=indent, ensure_ascii=False)


def recommendations_to_frame(items: Sequence[ScoredItem]) -> pd.DataFrame:
    """
    Tabular view of recommendations.

    Returns:
        DataFrame with columns rank (1-based output position), id, score
    """
    rows: List[dict] = [
        {'rank': i + 1, 'id': item.work_id, 'score': float(item.score)}
        for i, item in enumerate(items)
    ]
    return pd.DataFrame(rows, columns=['rank', 'id', 'score'])


def write_output(items: Sequence[ScoredItem], stream: TextIO, fmt: str = 'json') -> None:
    """
    Write recommendations to an open text stream.

    Raises:
        ValueError: If fmt is not 'json' or 'csv'
    """
    if fmt == 'json':
        stream.write(render_json(items))
        stream.write('\n')
    elif fmt == 'csv':
        recommendations_to_frame(items).to_csv(stream, index=False)
    else:
        raise ValueError(f"Unknown output format '{fmt}', expected one of {OUTPUT_FORMATS}")
