"""
exporter.py

Text renderings of a structured transcript for downstream consumers.

- to_outline: nested bullet markup for outline-based note apps
- render_hierarchy_tree: compact tree view for previews and logs
"""

from typing import List, Sequence

from Transcript import config
from Transcript.hierarchy import depth
from Transcript.schemas import Line


def _roots(lines: Sequence[Line]) -> List[int]:
    return [line.line_index for line in lines if line.parent is None]


def _walk(lines: Sequence[Line]) -> List[int]:
    """Line indices in outline order (pre-order over the tree)."""
    order: List[int] = []
    pending = list(reversed(_roots(lines)))
    while pending:
        index = pending.pop()
        order.append(index)
        pending.extend(reversed(lines[index].children))
    return order


def to_outline(lines: Sequence[Line], indent: str = "\t") -> str:
    """
    Emit nested ``- `` bullets, one per line.

    Nesting follows the parent/child links rather than raw indent
    levels, so a jump of two levels still nests exactly one deeper.
    """
    rendered = []
    for index in _walk(lines):
        line = lines[index]
        rendered.append(f"{indent * depth(lines, index)}- {line.text.strip()}")
    return "\n".join(rendered)


def render_hierarchy_tree(
    lines: Sequence[Line], max_chars: int = config.TREE_TEXT_MAX_CHARS
) -> str:
    rendered = []
    for index in _walk(lines):
        line = lines[index]
        level = depth(lines, index)
        prefix = "" if level == 0 else "│  " * (level - 1) + "├─ "
        text = line.text.strip()
        if len(text) > max_chars:
            text = text[:max_chars] + "..."
        rendered.append(f"{prefix}[{index}] {text}")
    return "\n".join(rendered)
