"""
pipeline.py

Main orchestrator for the transcript structuring engine.

Coordinates the full pipeline:
normalize words -> segment lines -> line metrics -> indentation ->
hierarchy -> commands.

Every stage is pure, so concurrent calls on independent documents need
no coordination.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from Transcript import config
from Transcript.commands import extract_commands
from Transcript.config import StructuringConfig
from Transcript.hierarchy import build_hierarchy, classify_indentation
from Transcript.metrics import estimate_line_metrics
from Transcript.normalizer import normalize_words
from Transcript.schemas import (
    Line,
    RecognitionResult,
    StructuredTranscript,
    TranscriptSummary,
    Word,
)
from Transcript.segmenter import segment_lines
from Transcript.utils import (
    TranscriptFileError,
    TranscriptInputError,
    TranscriptSecurityError,
    load_recognition_result,
    parse_recognition_response,
)

logger = logging.getLogger(__name__)


def structure_recognition(
    result: Union[RecognitionResult, Dict[str, Any]],
    cfg: Optional[StructuringConfig] = None,
) -> StructuredTranscript:
    """
    Structure one recognition result into lines, hierarchy and commands.

    Args:
        result: Recognizer response, as a model or its dict form.
        cfg: Heuristics; module defaults when None.

    Returns:
        StructuredTranscript. Unmatched words and empty lines are
        reported in ``warnings`` rather than raised.

    Raises:
        TranscriptInputError: If a dict payload has the wrong shape.
    """
    cfg = cfg or config.default_config()
    recognition = parse_recognition_response(result)

    # 1. Normalize words
    words = normalize_words(recognition, cfg=cfg)

    # 2. Segment into lines
    segmentation = segment_lines(recognition.label, words, cfg)

    # 3. Line metrics
    metrics = estimate_line_metrics(segmentation.lines, cfg)

    # 4. Indentation
    lines = classify_indentation(segmentation.lines, metrics)

    # 5. Hierarchy
    lines = build_hierarchy(lines)

    # 6. Commands
    commands = extract_commands(recognition.label, lines, cfg)

    transcript = StructuredTranscript(
        text=recognition.label,
        lines=lines,
        commands=commands,
        line_metrics=metrics,
        words=words,
        unmatched_words=segmentation.unmatched,
        summary=summarize(lines, words, bool(commands)),
        warnings=_collect_warnings(lines, segmentation.unmatched),
    )

    logger.info(
        "Structured transcript: %d lines, %d words, %d commands, warnings=%d",
        transcript.summary.total_lines,
        transcript.summary.total_words,
        len(transcript.commands),
        len(transcript.warnings),
    )
    return transcript


def process_file(
    file_path: Union[str, Path], cfg: Optional[StructuringConfig] = None
) -> StructuredTranscript:
    """Load a saved recognizer response and structure it."""
    return structure_recognition(load_recognition_result(file_path), cfg)


def process_batch(
    file_paths: List[Union[str, Path]],
    cfg: Optional[StructuringConfig] = None,
) -> List[StructuredTranscript]:
    """
    Structure several saved responses.

    A file that fails to load yields an empty transcript whose warnings
    carry the failure, so one bad file never aborts the batch.
    """
    cfg = cfg or config.default_config()
    results: List[StructuredTranscript] = []

    for fp in file_paths:
        try:
            results.append(process_file(fp, cfg))
        except (TranscriptFileError, TranscriptSecurityError, TranscriptInputError) as e:
            logger.error("Failed to process %s: %s", fp, e)
            results.append(
                StructuredTranscript(
                    line_metrics=estimate_line_metrics([], cfg),
                    warnings=[f"Processing failed: {e}"],
                )
            )

    return results


def summarize(lines: List[Line], words: List[Word], has_commands: bool) -> TranscriptSummary:
    return TranscriptSummary(
        total_lines=len(lines),
        total_words=len(words),
        has_indentation=any(line.indent_level > 0 for line in lines),
        has_commands=has_commands,
    )


def _collect_warnings(lines: List[Line], unmatched: List[Word]) -> List[str]:
    warnings: List[str] = []

    if unmatched:
        warnings.append(
            f"{len(unmatched)} word(s) not matched to any line: "
            + ", ".join(f"'{w.text}'" for w in unmatched)
        )

    for line in lines:
        if not line.words:
            warnings.append(
                f"No words matched line {line.line_index}: '{line.text.strip()[:50]}'"
            )

    return warnings
