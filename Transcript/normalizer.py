"""
normalizer.py

Turns raw recogniser word records into validated Words.

Handles:
- Dropping empty, whitespace-only and line-break pseudo-words
- Collecting character records for each word (nested or flat export)
- Baseline estimation that ignores descender glyphs
"""

import logging
from typing import List, Optional, Sequence, Union

import numpy as np

from Transcript import config
from Transcript.config import StructuringConfig
from Transcript.schemas import BoundingBox, RawChar, RawWord, RecognitionResult, Word

logger = logging.getLogger(__name__)


def normalize_words(
    source: Union[RecognitionResult, Sequence[RawWord]],
    chars: Optional[Sequence[RawChar]] = None,
    cfg: Optional[StructuringConfig] = None,
) -> List[Word]:
    """
    Validate raw words and compute their baselines.

    Args:
        source: A RecognitionResult, or the raw word list on its own.
        chars: Flat character export. Taken from the result when omitted.
        cfg: Heuristics; module defaults when None.

    Returns:
        Words in raw order. Each keeps its raw list position as ``index``.
    """
    cfg = cfg or config.default_config()

    if isinstance(source, RecognitionResult):
        raw_words = list(source.words)
        if chars is None:
            chars = source.chars
    else:
        raw_words = list(source)
    flat_chars = list(chars or [])

    words: List[Word] = []
    dropped = 0

    for index, raw in enumerate(raw_words):
        if not is_content_label(raw.label):
            dropped += 1
            continue

        bbox = raw.bounding_box
        if bbox is None:
            logger.debug("Word %d (%r) has no bounding box", index, raw.label)
            bbox = BoundingBox()

        word_chars = chars_for_word(raw, index, flat_chars)
        words.append(
            Word(
                text=raw.label,
                bounding_box=bbox,
                baseline=compute_baseline(raw.label, bbox, word_chars, cfg),
                index=index,
            )
        )

    if dropped:
        logger.debug("Dropped %d empty or line-break words", dropped)

    return words


def is_content_label(label: Optional[str]) -> bool:
    """False for empty, whitespace-only and line-break labels."""
    if not label:
        return False
    if label in config.LINE_BREAK_MARKERS:
        return False
    return bool(label.strip())


def chars_for_word(
    raw: RawWord, index: int, flat_chars: Sequence[RawChar]
) -> List[RawChar]:
    """
    Collect the character records belonging to the word at ``index``.

    Nested chars without a word reference are assumed to belong to the
    word that carries them.
    """
    own = [
        c for c in raw.chars
        if c.word_index is None or c.word_index == index
    ]
    own.extend(c for c in flat_chars if c.word_index == index)
    return own


def is_descender(char: str, descenders: str = config.DESCENDERS) -> bool:
    return len(char) == 1 and char.lower() in descenders


def has_descender(text: str, descenders: str = config.DESCENDERS) -> bool:
    return any(is_descender(c, descenders) for c in text)


def compute_baseline(
    label: str,
    bbox: BoundingBox,
    chars: Sequence[RawChar],
    cfg: Optional[StructuringConfig] = None,
) -> float:
    """
    Estimate the visual baseline of a word.

    With character data: median bottom edge of the non-descender chars.
    Without it: ``top + ratio * height`` if the label has a descender,
    otherwise the box bottom.
    """
    cfg = cfg or config.default_config()

    bottoms = [
        c.bounding_box.bottom
        for c in chars
        if c.bounding_box is not None
        and c.label.strip()
        and not has_descender(c.label, cfg.descenders)
    ]
    if bottoms:
        return float(np.median(bottoms))

    if has_descender(label, cfg.descenders):
        return bbox.y + cfg.descender_baseline_ratio * bbox.height
    return bbox.bottom
