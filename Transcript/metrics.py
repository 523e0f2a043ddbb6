"""
metrics.py

Derives document-wide spatial constants from segmented lines.

Handwriting indentation is never pixel-exact, so the indent unit is
taken from the smallest meaningful horizontal jump in the data itself
and bounded by the median glyph height.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from Transcript import config
from Transcript.config import StructuringConfig
from Transcript.schemas import Line, LineMetrics

logger = logging.getLogger(__name__)


def median_word_height(
    lines: Sequence[Line], cfg: Optional[StructuringConfig] = None
) -> float:
    """Median word box height, or the configured default when unusable."""
    cfg = cfg or config.default_config()

    heights = [w.bounding_box.height for line in lines for w in line.words]
    if not heights:
        return cfg.default_median_height

    median = float(np.median(heights))
    if median <= 0:
        logger.debug("Non-positive median height %.2f, using default", median)
        return cfg.default_median_height
    return median


def estimate_indent_unit(
    lines: Sequence[Line],
    median_height: float,
    cfg: Optional[StructuringConfig] = None,
) -> float:
    """Smallest significant offset from the leftmost line, clamped."""
    cfg = cfg or config.default_config()

    unit = cfg.default_indent_ratio * median_height
    if lines:
        base_x = min(line.x for line in lines)
        noise = cfg.indent_noise_ratio * median_height
        offsets = sorted(
            line.x - base_x for line in lines if line.x - base_x > noise
        )
        if offsets:
            unit = offsets[0]

    low = cfg.min_indent_ratio * median_height
    high = cfg.max_indent_ratio * median_height
    return min(max(unit, low), high)


def estimate_line_metrics(
    lines: Sequence[Line], cfg: Optional[StructuringConfig] = None
) -> LineMetrics:
    """
    Compute LineMetrics for a document.

    Args:
        lines: Lines with words assigned.
        cfg: Heuristics; module defaults when None.

    Returns:
        LineMetrics. Empty input yields the documented defaults.
    """
    cfg = cfg or config.default_config()

    median_height = median_word_height(lines, cfg)
    metrics = LineMetrics(
        median_height=median_height,
        line_threshold=cfg.line_threshold_ratio * median_height,
        indent_unit=estimate_indent_unit(lines, median_height, cfg),
        baseline_variance=cfg.baseline_variance_ratio * median_height,
    )
    logger.debug(
        "Line metrics: median_height=%.2f indent_unit=%.2f",
        metrics.median_height,
        metrics.indent_unit,
    )
    return metrics
