"""
schemas.py

Pydantic models for recogniser input and structured transcript output.

Inbound models accept the key spellings the recogniser emits
(``boundingBox``, ``bounding-box``, ``wordIndex``, ``word``) so raw
responses can be validated directly.
"""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class BoundingBox(BaseModel):
    """Axis-aligned box in the recogniser's pixel space.

    No sign constraints: degenerate boxes are passed through untouched.
    """

    model_config = ConfigDict(frozen=True)

    x: float = Field(default=0.0, description="Left edge")
    y: float = Field(default=0.0, description="Top edge")
    width: float = Field(default=0.0, description="Box width")
    height: float = Field(default=0.0, description="Box height")

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def right(self) -> float:
        return self.x + self.width


# ---------------------------------------------------------------------------
# Recogniser input
# ---------------------------------------------------------------------------

def _label_or_empty(value):
    # The recogniser sends null for strokes it could not read
    return "" if value is None else value


class RawChar(BaseModel):
    """Character-level record with a back-reference to its word."""

    label: str = Field(default="", description="Recognized character")
    bounding_box: Optional[BoundingBox] = Field(
        default=None,
        validation_alias=AliasChoices("bounding_box", "boundingBox", "bounding-box"),
    )
    word_index: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("word_index", "wordIndex", "word"),
        description="Index of the owning word in the raw word list",
    )

    @field_validator("label", mode="before")
    @classmethod
    def null_label_is_empty(cls, value):
        return _label_or_empty(value)


class RawWord(BaseModel):
    """Word record exactly as the recogniser reports it."""

    label: str = Field(default="", description="Recognized word text")
    bounding_box: Optional[BoundingBox] = Field(
        default=None,
        validation_alias=AliasChoices("bounding_box", "boundingBox", "bounding-box"),
    )
    chars: List[RawChar] = Field(default_factory=list)

    @field_validator("label", mode="before")
    @classmethod
    def null_label_is_empty(cls, value):
        return _label_or_empty(value)


class RecognitionResult(BaseModel):
    """Flat recognition response: label with line breaks plus words."""

    label: str = Field(default="", description="Recognized text with \\n line breaks")
    words: List[RawWord] = Field(default_factory=list)
    chars: List[RawChar] = Field(
        default_factory=list,
        description="Flat character export; each char references its word by index",
    )

    @field_validator("label", mode="before")
    @classmethod
    def null_label_is_empty(cls, value):
        return _label_or_empty(value)


# ---------------------------------------------------------------------------
# Engine output
# ---------------------------------------------------------------------------

class Word(BaseModel):
    """Validated word with a descender-compensated baseline."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., min_length=1)
    bounding_box: BoundingBox
    baseline: float = Field(..., description="Bottom of non-descender glyphs")
    index: int = Field(..., ge=0, description="Position in the raw recogniser word list")


class Line(BaseModel):
    """One logical row of the reconstructed document."""

    text: str = Field(..., description="Verbatim label segment")
    words: List[Word] = Field(default_factory=list, description="Words, left to right")
    x: float = Field(default=0.0, description="Leftmost word start")
    baseline: float = Field(default=0.0, description="Mean word baseline")
    indent_level: int = Field(default=0, ge=0)
    parent: Optional[int] = Field(default=None, description="Index of the parent line")
    children: List[int] = Field(default_factory=list, description="Direct children, in order")
    line_index: int = Field(..., ge=0, description="Position in top-to-bottom order")


class LineMetrics(BaseModel):
    """Document-wide spatial constants."""

    median_height: float
    line_threshold: float
    indent_unit: float
    baseline_variance: float


class Command(BaseModel):
    """A ``[key: value]`` annotation found in the recognized text."""

    command: str = Field(..., description="Lower-cased key")
    value: str
    full_match: str = Field(..., description="Bracketed text as it appeared")
    position: int = Field(..., ge=0, description="Offset in the document text")
    line_index: Optional[int] = Field(
        default=None, description="Defining line; None means document scope"
    )


class TranscriptSummary(BaseModel):
    total_lines: int = Field(default=0, ge=0)
    total_words: int = Field(default=0, ge=0)
    has_indentation: bool = False
    has_commands: bool = False


class StructuredTranscript(BaseModel):
    """Complete structuring result handed to renderers and sync layers."""

    text: str = Field(default="", description="Recognizer label as received")
    lines: List[Line] = Field(default_factory=list)
    commands: List[Command] = Field(default_factory=list)
    line_metrics: LineMetrics
    words: List[Word] = Field(default_factory=list, description="All normalized words")
    unmatched_words: List[Word] = Field(
        default_factory=list, description="Words no line claimed"
    )
    summary: TranscriptSummary = Field(default_factory=TranscriptSummary)
    warnings: List[str] = Field(default_factory=list)
