"""
config.py

Configuration module for the transcript structuring engine.

Purpose:
--------
Contains every heuristic constant used to turn a flat recognition
result into structured lines: baseline estimation, line segmentation,
line metrics, indentation, plus file-loading limits and logging.

Design Principle:
-----------------
Configuration is isolated from business logic.
Each value can be overridden from the environment (TRANSCRIPT_*),
and callers that need per-call tuning pass a StructuringConfig
instead of editing the algorithm.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

# -----------------------------
# Word normalization
# -----------------------------
DESCENDERS = "gjpqy"
DESCENDER_BASELINE_RATIO: float = float(
    os.getenv("TRANSCRIPT_DESCENDER_BASELINE_RATIO", "0.8")
)
LINE_BREAK_MARKERS = ["\n", "\r\n", "\r"]

# -----------------------------
# Line segmentation
# -----------------------------
OVERMATCH_RATIO: float = float(os.getenv("TRANSCRIPT_OVERMATCH_RATIO", "1.5"))
CLUSTER_GAP_RATIO: float = float(os.getenv("TRANSCRIPT_CLUSTER_GAP_RATIO", "0.5"))
FALLBACK_LINE_SPACING: float = float(
    os.getenv("TRANSCRIPT_FALLBACK_LINE_SPACING", "20")
)

# -----------------------------
# Line metrics
# -----------------------------
DEFAULT_MEDIAN_HEIGHT: float = float(
    os.getenv("TRANSCRIPT_DEFAULT_MEDIAN_HEIGHT", "10")
)
LINE_THRESHOLD_RATIO = 0.6
BASELINE_VARIANCE_RATIO = 0.25
INDENT_NOISE_RATIO = 0.5
DEFAULT_INDENT_RATIO = 2.0
MIN_INDENT_RATIO = 1.0
MAX_INDENT_RATIO = 5.0

# -----------------------------
# Commands
# -----------------------------
COMMAND_PATTERN = r"\[(\w+):\s*([^\]]+)\]"

# -----------------------------
# Export
# -----------------------------
TREE_TEXT_MAX_CHARS = 40

# -----------------------------
# Security
# -----------------------------
MAX_FILE_SIZE_MB = int(os.getenv("TRANSCRIPT_MAX_FILE_SIZE_MB", "10"))
ALLOWED_EXTENSIONS = [".json"]

# -----------------------------
# Logging
# -----------------------------
LOG_LEVEL: str = os.getenv("TRANSCRIPT_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


class StructuringConfig(BaseModel):
    """Tunable heuristics for one structuring run.

    Every ratio is relative to the document's median word height, so the
    same defaults work across recogniser output scales.
    """

    descenders: str = Field(
        default=DESCENDERS, description="Letters that drop below the baseline"
    )
    descender_baseline_ratio: float = Field(
        default=DESCENDER_BASELINE_RATIO,
        description="Baseline as a fraction of box height for descender words without char data",
    )
    overmatch_ratio: float = Field(
        default=OVERMATCH_RATIO,
        description="Content matches above expected * ratio trigger geometric clustering",
    )
    cluster_gap_ratio: float = Field(
        default=CLUSTER_GAP_RATIO,
        description="Baseline gap (fraction of word height) that starts a new cluster",
    )
    fallback_line_spacing: float = Field(
        default=FALLBACK_LINE_SPACING,
        description="Baseline step for lines with no matched words",
    )
    default_median_height: float = Field(
        default=DEFAULT_MEDIAN_HEIGHT, gt=0, description="Median height with no usable words"
    )
    line_threshold_ratio: float = Field(default=LINE_THRESHOLD_RATIO)
    baseline_variance_ratio: float = Field(default=BASELINE_VARIANCE_RATIO)
    indent_noise_ratio: float = Field(
        default=INDENT_NOISE_RATIO,
        description="Horizontal offsets at or below this fraction are noise",
    )
    default_indent_ratio: float = Field(default=DEFAULT_INDENT_RATIO, gt=0)
    min_indent_ratio: float = Field(default=MIN_INDENT_RATIO, gt=0)
    max_indent_ratio: float = Field(default=MAX_INDENT_RATIO, gt=0)
    command_pattern: str = Field(default=COMMAND_PATTERN)


def default_config() -> StructuringConfig:
    """Build a StructuringConfig from the current module-level values."""
    return StructuringConfig(
        descenders=DESCENDERS,
        descender_baseline_ratio=DESCENDER_BASELINE_RATIO,
        overmatch_ratio=OVERMATCH_RATIO,
        cluster_gap_ratio=CLUSTER_GAP_RATIO,
        fallback_line_spacing=FALLBACK_LINE_SPACING,
        default_median_height=DEFAULT_MEDIAN_HEIGHT,
        line_threshold_ratio=LINE_THRESHOLD_RATIO,
        baseline_variance_ratio=BASELINE_VARIANCE_RATIO,
        indent_noise_ratio=INDENT_NOISE_RATIO,
        default_indent_ratio=DEFAULT_INDENT_RATIO,
        min_indent_ratio=MIN_INDENT_RATIO,
        max_indent_ratio=MAX_INDENT_RATIO,
        command_pattern=COMMAND_PATTERN,
    )
