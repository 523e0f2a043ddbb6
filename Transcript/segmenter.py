"""
segmenter.py

Assigns recognized words to the lines of the recognizer label.

The label's line breaks are authoritative for content. Words are
matched to lines in two tiers:

1. Content match: the word's text occurs in the line text.
2. Baseline clustering: used when content matching claims clearly too
   many words (a word recurring across lines). Candidates are grouped
   by baseline and the cluster closest to the expected size wins.

Words left in the pool after every line is processed are reported as
unmatched rather than raising.
"""

import logging
import re
from typing import List, NamedTuple, Optional, Sequence

import numpy as np

from Transcript import config
from Transcript.config import StructuringConfig
from Transcript.schemas import Line, Word

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


class SegmentationResult(NamedTuple):
    lines: List[Line]
    unmatched: List[Word]


def split_label(label: str) -> List[str]:
    """Split the label on line breaks, dropping blank segments."""
    if not label:
        return []
    return [seg for seg in _LINE_BREAK_RE.split(label) if seg.strip()]


def expected_word_count(line_text: str) -> int:
    return len(line_text.split())


def match_by_content(line_text: str, pool: Sequence[Word]) -> List[Word]:
    """Tier 1: words whose lower-cased text occurs in the line text."""
    haystack = line_text.lower()
    return [w for w in pool if w.text.lower() in haystack]


def cluster_by_baseline(
    words: Sequence[Word], cfg: Optional[StructuringConfig] = None
) -> List[List[Word]]:
    """
    Tier 2: group words into rows by baseline.

    A new cluster starts whenever the gap to the previous word's
    baseline exceeds ``cluster_gap_ratio`` of the current word's height.
    Clusters come back ordered top to bottom.
    """
    cfg = cfg or config.default_config()
    if not words:
        return []

    ordered = sorted(words, key=lambda w: (w.baseline, w.bounding_box.x, w.index))
    clusters: List[List[Word]] = [[ordered[0]]]

    for prev, word in zip(ordered, ordered[1:]):
        gap = word.baseline - prev.baseline
        if gap > cfg.cluster_gap_ratio * word.bounding_box.height:
            clusters.append([word])
        else:
            clusters[-1].append(word)

    return clusters


def pick_cluster(clusters: Sequence[List[Word]], expected: int) -> List[Word]:
    """
    Pick the cluster whose size is closest to ``expected``.

    Ties go to the topmost cluster: lines are consumed top to bottom, so
    the highest remaining ink belongs to the current line.
    """
    if not clusters:
        return []
    best = min(
        range(len(clusters)),
        key=lambda i: (abs(len(clusters[i]) - expected), i),
    )
    return list(clusters[best])


def assign_words(
    line_text: str,
    pool: Sequence[Word],
    cfg: Optional[StructuringConfig] = None,
) -> List[Word]:
    """Select the words of one line from the available pool."""
    cfg = cfg or config.default_config()

    candidates = match_by_content(line_text, pool)
    expected = expected_word_count(line_text)

    if len(candidates) > cfg.overmatch_ratio * expected:
        clusters = cluster_by_baseline(candidates, cfg)
        chosen = pick_cluster(clusters, expected)
        logger.debug(
            "Line %r over-matched (%d words, expected %d); "
            "picked %d of %d baseline clusters",
            line_text,
            len(candidates),
            expected,
            len(chosen),
            len(clusters),
        )
        return chosen

    return candidates


def build_line(
    text: str,
    words: Sequence[Word],
    line_index: int,
    cfg: Optional[StructuringConfig] = None,
) -> Line:
    """Create a Line with reading-order words and its anchor position."""
    cfg = cfg or config.default_config()

    ordered = sorted(words, key=lambda w: (w.bounding_box.x, w.baseline, w.index))
    if ordered:
        x = min(w.bounding_box.x for w in ordered)
        baseline = float(np.mean([w.baseline for w in ordered]))
    else:
        x = 0.0
        baseline = line_index * cfg.fallback_line_spacing

    return Line(
        text=text,
        words=ordered,
        x=x,
        baseline=baseline,
        line_index=line_index,
    )


def segment_lines(
    label: str,
    words: Sequence[Word],
    cfg: Optional[StructuringConfig] = None,
) -> SegmentationResult:
    """
    Build one Line per non-blank label segment.

    Args:
        label: Recognizer label with line breaks.
        words: Normalized words.
        cfg: Heuristics; module defaults when None.

    Returns:
        SegmentationResult with the lines and the words no line claimed,
        in their original order.
    """
    cfg = cfg or config.default_config()

    pool: List[Word] = list(words)
    lines: List[Line] = []

    for line_index, text in enumerate(split_label(label)):
        chosen = assign_words(text, pool, cfg)
        taken = {w.index for w in chosen}
        pool = [w for w in pool if w.index not in taken]
        lines.append(build_line(text, chosen, line_index, cfg))

    if pool:
        logger.warning(
            "%d word(s) not matched to any line: %s",
            len(pool),
            ", ".join(repr(w.text) for w in pool),
        )

    return SegmentationResult(lines=lines, unmatched=pool)
