"""
commands.py

Extraction of bracketed ``[key: value]`` annotations.

A command found on a single line is scoped to that line and its
outline descendants. A command that no single line contains (for
example one broken across a line break) applies to the whole document.
"""

import logging
import re
from typing import List, Optional, Sequence

from Transcript import config
from Transcript.config import StructuringConfig
from Transcript.hierarchy import descendants
from Transcript.schemas import Command, Line

logger = logging.getLogger(__name__)


def find_commands(text: str, pattern: str = config.COMMAND_PATTERN) -> List[Command]:
    """Every command in ``text``, in order of appearance."""
    if not text:
        return []

    return [
        Command(
            command=match.group(1).lower(),
            value=match.group(2).strip(),
            full_match=match.group(0),
            position=match.start(),
        )
        for match in re.finditer(pattern, text)
    ]


def extract_commands(
    text: str,
    lines: Sequence[Line],
    cfg: Optional[StructuringConfig] = None,
) -> List[Command]:
    """
    Find document commands and attach each to its defining line.

    Args:
        text: Full recognized text.
        lines: Lines after hierarchy building.
        cfg: Heuristics; module defaults when None.

    Returns:
        Commands in document order. ``line_index`` is None for commands
        that no single line contains.
    """
    cfg = cfg or config.default_config()
    pattern = re.compile(cfg.command_pattern)

    commands = find_commands(text, pattern.pattern)

    for line in lines:
        for match in pattern.finditer(line.text):
            owner = next(
                (
                    i for i, c in enumerate(commands)
                    if c.line_index is None and c.full_match == match.group(0)
                ),
                None,
            )
            if owner is None:
                continue
            commands[owner] = commands[owner].model_copy(
                update={"line_index": line.line_index}
            )

    if commands:
        logger.debug(
            "Found %d command(s): %s",
            len(commands),
            ", ".join(c.command for c in commands),
        )
    return commands


def command_scope(command: Command, lines: Sequence[Line]) -> List[int]:
    """Line indices a command applies to."""
    if command.line_index is None:
        return [line.line_index for line in lines]
    return [command.line_index] + descendants(lines, command.line_index)
