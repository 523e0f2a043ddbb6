"""
Tests for line segmentation and word assignment.
"""

import logging

from Transcript.config import StructuringConfig
from Transcript.schemas import BoundingBox, Word
from Transcript.segmenter import (
    assign_words,
    build_line,
    cluster_by_baseline,
    match_by_content,
    pick_cluster,
    segment_lines,
    split_label,
)


def _make_word(text, x, y, index, width=40.0, height=20.0):
    return Word(
        text=text,
        bounding_box=BoundingBox(x=x, y=y, width=width, height=height),
        baseline=y + height,
        index=index,
    )


class TestSplitLabel:
    def test_drops_blank_segments(self):
        assert split_label("a\n\n  \nb") == ["a", "b"]

    def test_mixed_line_breaks(self):
        assert split_label("a\r\nb\rc\nd") == ["a", "b", "c", "d"]

    def test_segments_kept_verbatim(self):
        assert split_label("top\n  nested ") == ["top", "  nested "]

    def test_empty_label(self):
        assert split_label("") == []


class TestMatchByContent:
    def test_case_insensitive_substring(self):
        pool = [_make_word("Meeting", 0, 0, 0), _make_word("other", 0, 40, 1)]
        matched = match_by_content("meeting notes", pool)
        assert [w.text for w in matched] == ["Meeting"]

    def test_recurring_word_matches_every_copy(self):
        pool = [_make_word("notes", 0, 0, 0), _make_word("notes", 0, 40, 1)]
        assert len(match_by_content("notes", pool)) == 2


class TestClusterByBaseline:
    def test_splits_on_large_gap(self):
        words = [
            _make_word("a", 0, 0, 0),
            _make_word("b", 50, 2, 1),
            _make_word("c", 0, 40, 2),
            _make_word("d", 50, 41, 3),
        ]
        clusters = cluster_by_baseline(words)
        assert [[w.text for w in c] for c in clusters] == [["a", "b"], ["c", "d"]]

    def test_clusters_ordered_top_to_bottom(self):
        words = [_make_word("low", 0, 80, 0), _make_word("high", 0, 0, 1)]
        clusters = cluster_by_baseline(words)
        assert clusters[0][0].text == "high"

    def test_gap_ratio_from_config(self):
        words = [_make_word("a", 0, 0, 0), _make_word("b", 0, 15, 1)]
        assert len(cluster_by_baseline(words)) == 2
        loose = StructuringConfig(cluster_gap_ratio=1.0)
        assert len(cluster_by_baseline(words, loose)) == 1

    def test_empty(self):
        assert cluster_by_baseline([]) == []


class TestPickCluster:
    def test_closest_size_wins(self):
        a = [_make_word("a", 0, 0, 0)]
        bc = [_make_word("b", 0, 40, 1), _make_word("c", 50, 40, 2)]
        assert pick_cluster([a, bc], expected=2) == bc

    def test_tie_goes_to_topmost(self):
        top = [_make_word("top", 0, 0, 0)]
        bottom = [_make_word("bottom", 0, 40, 1)]
        assert pick_cluster([top, bottom], expected=1) == top

    def test_no_clusters(self):
        assert pick_cluster([], expected=3) == []


class TestAssignWords:
    def test_content_match_kept_within_threshold(self):
        pool = [_make_word("Meeting", 0, 0, 0), _make_word("notes", 90, 0, 1)]
        assert len(assign_words("Meeting notes", pool)) == 2

    def test_overmatch_falls_back_to_geometry(self):
        pool = [
            _make_word("notes", 100, 40, 0),
            _make_word("notes", 0, 0, 1),
        ]
        chosen = assign_words("notes", pool)
        assert len(chosen) == 1
        assert chosen[0].index == 1


class TestBuildLine:
    def test_words_sorted_left_to_right(self):
        words = [_make_word("b", 60, 0, 0), _make_word("a", 10, 2, 1)]
        line = build_line("a b", words, 0)
        assert [w.text for w in line.words] == ["a", "b"]
        assert line.x == 10
        assert line.baseline == 21

    def test_fallback_without_words(self):
        line = build_line("ghost", [], 3)
        assert line.words == []
        assert line.x == 0
        assert line.baseline == 60
        assert line.line_index == 3


class TestSegmentLines:
    def test_one_line_per_segment(self):
        result = segment_lines("one\n\ntwo\nthree", [])
        assert [l.text for l in result.lines] == ["one", "two", "three"]
        assert [l.line_index for l in result.lines] == [0, 1, 2]

    def test_recurring_word_assigned_by_geometry(self):
        words = [
            _make_word("notes", 0, 0, 0),
            _make_word("review", 0, 40, 1),
            _make_word("notes", 100, 40, 2),
        ]
        result = segment_lines("notes\nreview notes", words)
        assert [w.index for w in result.lines[0].words] == [0]
        assert [w.index for w in result.lines[1].words] == [1, 2]
        assert result.unmatched == []

    def test_unmatched_words_reported(self, caplog):
        words = [_make_word("hello", 0, 0, 0), _make_word("xyz", 0, 40, 1)]
        with caplog.at_level(logging.WARNING, logger="Transcript.segmenter"):
            result = segment_lines("hello", words)
        assert [w.text for w in result.unmatched] == ["xyz"]
        assert "not matched" in caplog.text

    def test_word_conservation(self):
        words = [
            _make_word("alpha", 0, 0, 0),
            _make_word("beta", 60, 0, 1),
            _make_word("gamma", 0, 40, 2),
            _make_word("stray", 0, 80, 3),
        ]
        result = segment_lines("alpha beta\ngamma", words)
        matched = sum(len(l.words) for l in result.lines)
        assert matched + len(result.unmatched) == len(words)

    def test_word_claimed_only_once(self):
        words = [_make_word("same", 0, 0, 0)]
        result = segment_lines("same\nsame", words)
        assert len(result.lines[0].words) == 1
        assert result.lines[1].words == []
        assert result.lines[1].baseline == 20
