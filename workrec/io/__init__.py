"""
I/O Adapters.

Thin format adapters around the scoring core:
- reader: section-tagged snapshot text -> RecommendationRequest
- writer: recommendations -> JSON / CSV
"""

from .reader import InputFormatError, parse_request, read_request
from .writer import OUTPUT_FORMATS, recommendations_to_frame, render_json, write_output

__all__ = [
    'InputFormatError',
    'parse_request',
    'read_request',
    'OUTPUT_FORMATS',
    'recommendations_to_frame',
    'render_json',
    'write_output',
]
