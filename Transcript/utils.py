"""
utils.py

File I/O, validation and security checks for recognition results.

Handles:
- Recognizer response parsing (flat shape or export envelope)
- Response path checks (no traversal, no symlinks)
- Extension and size limits for saved responses
- JSON decoding
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from Transcript import config
from Transcript.schemas import RecognitionResult

logger = logging.getLogger(__name__)


class TranscriptFileError(Exception):
    """Raised when file validation fails."""

    pass


class TranscriptSecurityError(Exception):
    """Raised when a security check fails (e.g., path traversal)."""

    pass


class TranscriptInputError(Exception):
    """Raised when a payload cannot be read as a recognition result."""

    pass


def parse_recognition_response(
    data: Union[RecognitionResult, Dict[str, Any]],
) -> RecognitionResult:
    """
    Coerce a recognizer response into a RecognitionResult.

    Accepts the flat ``{label, words, chars}`` shape or the export
    envelope where words and chars sit under ``jiix`` (an object or a
    JSON-encoded string). A top-level label wins over the envelope's.

    Raises:
        TranscriptInputError: If the payload has the wrong shape.
    """
    if isinstance(data, RecognitionResult):
        return data
    if not isinstance(data, dict):
        raise TranscriptInputError(
            f"Expected a JSON object, got {type(data).__name__}"
        )

    payload = dict(data)
    envelope = payload.pop("jiix", None)
    if isinstance(envelope, str):
        try:
            envelope = json.loads(envelope)
        except json.JSONDecodeError as e:
            raise TranscriptInputError(f"Malformed jiix payload: {e}") from e

    if isinstance(envelope, dict):
        for key in ("words", "chars"):
            if key not in payload and key in envelope:
                payload[key] = envelope[key]
        if not payload.get("label") and envelope.get("label"):
            payload["label"] = envelope["label"]
    elif envelope is not None:
        raise TranscriptInputError(
            f"Expected jiix to be an object, got {type(envelope).__name__}"
        )

    try:
        return RecognitionResult.model_validate(payload)
    except ValidationError as e:
        raise TranscriptInputError(f"Invalid recognition result: {e}") from e


def resolve_response_path(file_path: Union[str, Path]) -> Path:
    """
    Resolve the path of a saved recognizer response.

    The path must name an existing regular file reached without ``..``
    segments or a symlink.

    Raises:
        TranscriptSecurityError: On ``..`` segments or a symlinked file.
        TranscriptFileError: If nothing readable exists at the path.
    """
    candidate = Path(file_path)
    if ".." in candidate.parts:
        raise TranscriptSecurityError(
            f"Refusing response path with '..' segments: {file_path}"
        )
    if candidate.is_symlink():
        raise TranscriptSecurityError(
            f"Refusing symlinked response file: {candidate}"
        )

    resolved = candidate.resolve()
    if not resolved.is_file():
        reason = "is not a file" if resolved.exists() else "does not exist"
        raise TranscriptFileError(f"Response {resolved} {reason}")
    return resolved


def check_response_file(path: Path) -> None:
    """
    Reject responses that are not ``.json`` or whose size is zero or
    above ``MAX_FILE_SIZE_MB``.

    Raises:
        TranscriptFileError: If a check fails.
    """
    if path.suffix.lower() not in config.ALLOWED_EXTENSIONS:
        raise TranscriptFileError(
            f"{path.name}: expected one of {config.ALLOWED_EXTENSIONS}, "
            f"got '{path.suffix}'"
        )

    limit = config.MAX_FILE_SIZE_MB * 1024 * 1024
    size = path.stat().st_size
    if not size:
        raise TranscriptFileError(f"{path.name}: response is empty")
    if size > limit:
        raise TranscriptFileError(
            f"{path.name}: {size} bytes is over the "
            f"{config.MAX_FILE_SIZE_MB}MB response limit"
        )


def load_recognition_result(file_path: Union[str, Path]) -> RecognitionResult:
    """
    Load a saved recognizer response from a JSON file.

    Raises:
        TranscriptFileError: If the file is invalid or not JSON.
        TranscriptSecurityError: If path validation fails.
        TranscriptInputError: If the JSON has the wrong shape.
    """
    path = resolve_response_path(file_path)
    check_response_file(path)

    logger.info("Loading recognition result: %s", path.name)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise TranscriptFileError(f"Failed to read {path.name}: {e}") from e

    return parse_recognition_response(data)
