"""
Tests for the command-line entry point.
"""

import json

import pytest

from Transcript.run_transcript import main


@pytest.fixture
def saved_response(tmp_path):
    data = {
        "label": "[page: Groceries]\n  eggs\n  milk",
        "words": [
            {"label": "[page:", "bounding-box": {"x": 0, "y": 0, "width": 50, "height": 20}},
            {"label": "Groceries]", "bounding-box": {"x": 60, "y": 0, "width": 90, "height": 20}},
            {"label": "eggs", "bounding-box": {"x": 40, "y": 40, "width": 40, "height": 20}},
            {"label": "milk", "bounding-box": {"x": 40, "y": 80, "width": 40, "height": 20}},
        ],
    }
    path = tmp_path / "response.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestMain:
    def test_default_report(self, saved_response, capsys):
        assert main([str(saved_response)]) == 0
        out = capsys.readouterr().out
        assert "Lines: 3" in out
        assert "Command page: Groceries (lines [0, 1, 2])" in out

    def test_outline(self, saved_response, capsys):
        assert main([str(saved_response), "--outline"]) == 0
        out = capsys.readouterr().out
        assert out.strip() == "- [page: Groceries]\n\t- eggs\n\t- milk"

    def test_json(self, saved_response, capsys):
        assert main([str(saved_response), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [l["indent_level"] for l in data["lines"]] == [0, 1, 1]

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.json")]) == 1
        assert "Error" in capsys.readouterr().err
