"""Tests for JSON extraction from model replies."""

from coachflow.utils import extract_json_object


def test_extracts_object_surrounded_by_prose():
    reply = (
        'Sure! Here it is: {"arcName": "The Builder", "aspirationSentence": "x", '
        '"nextSmallStep": "y"} Hope that helps.'
    )
    assert extract_json_object(reply) == {
        "arcName": "The Builder",
        "aspirationSentence": "x",
        "nextSmallStep": "y",
    }


def test_nested_objects_span_first_to_last_brace():
    reply = 'Scores: {"scores": {"depth": 2}, "total_score": 9}'
    assert extract_json_object(reply)["total_score"] == 9


def test_non_object_or_invalid_returns_none():
    assert extract_json_object("") is None
    assert extract_json_object("no json here") is None
    assert extract_json_object("[1, 2, 3]") is None
    assert extract_json_object('{"broken": ') is None
