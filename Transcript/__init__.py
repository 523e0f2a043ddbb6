"""
Transcript Module

Rebuilds a structured document from a handwriting recognizer's flat
output: ordered lines, indentation levels, an outline tree and scoped
``[key: value]`` commands.

Public API:
    structure_recognition - Structure a single recognition result
    process_file          - Load a saved response and structure it
    process_batch         - Structure several saved responses
    StructuredTranscript  - Structured result model
    StructuringConfig     - Tunable heuristics
"""

from Transcript.config import StructuringConfig
from Transcript.pipeline import process_batch, process_file, structure_recognition
from Transcript.schemas import (
    Command,
    Line,
    LineMetrics,
    RecognitionResult,
    StructuredTranscript,
    Word,
)

__all__ = [
    "structure_recognition",
    "process_file",
    "process_batch",
    "StructuredTranscript",
    "StructuringConfig",
    "RecognitionResult",
    "Line",
    "LineMetrics",
    "Word",
    "Command",
]
