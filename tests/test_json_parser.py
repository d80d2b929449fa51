"""Tests for JSON extraction from model replies."""

import pytest

from refinelab.utils.json_parser import extract_json


class TestExtractJson:
    def test_plain_object(self):
        assert extract_json('{"a": 1}') == {"a": 1}

    def test_plain_array(self):
        assert extract_json("[1, 2]") == [1, 2]

    def test_fenced_block(self):
        assert extract_json('```json\n{"a": 1}\n```') == {"a": 1}

    def test_fence_without_language(self):
        assert extract_json('```\n["x"]\n```') == ["x"]

    def test_object_inside_prose(self):
        text = 'Here is the analysis:\n{"score": 0.5, "tags": ["a"]}\nHope this helps.'
        assert extract_json(text) == {"score": 0.5, "tags": ["a"]}

    def test_array_inside_prose(self):
        assert extract_json('Suggestions: ["one", "two"] done') == ["one", "two"]

    def test_not_json(self):
        with pytest.raises(ValueError):
            extract_json("this is plain text")

    def test_empty(self):
        with pytest.raises(ValueError):
            extract_json("")
