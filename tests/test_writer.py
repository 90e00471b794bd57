"""Tests for recommendation output writers."""

import io
import json

import pytest

from workrec.io.writer import recommendations_to_frame, render_json, write_output
from workrec.models import ScoredItem


ITEMS = [ScoredItem("B", 0.4), ScoredItem("A", 0.5), ScoredItem("C", -0.1)]


def test_render_json_shape_and_order():
    payload = json.loads(render_json(ITEMS))
    assert payload == {
        "recommendations": [
            {"id": "B", "score": 0.4},
            {"id": "A", "score": 0.5},
            {"id": "C", "score": -0.1},
        ]
    }


def test_render_json_empty():
    assert json.loads(render_json([])) == {"recommendations": []}


def test_frame_columns():
    frame = recommendations_to_frame(ITEMS)
    assert list(frame.columns) == ["rank", "id", "score"]
    assert frame["id"].tolist() == ["B", "A", "C"]
    assert frame["rank"].tolist() == [1, 2, 3]


def test_frame_empty():
    frame = recommendations_to_frame([])
    assert frame.empty
    assert list(frame.columns) == ["rank", "id", "score"]


def test_write_json():
    buffer = io.StringIO()
    write_output(ITEMS, buffer, fmt="json")
    assert json.loads(buffer.getvalue())["recommendations"][0]["id"] == "B"


def test_write_csv():
    buffer = io.StringIO()
    write_output(ITEMS, buffer, fmt="csv")
    lines = buffer.getvalue().splitlines()
    assert lines[0] == "rank,id,score"
    assert lines[1] == "1,B,0.4"
    assert len(lines) == 4


def test_unknown_format():
    with pytest.raises(ValueError, match="xml"):
        write_output(ITEMS, io.StringIO(), fmt="xml")
