"""
hierarchy.py

Indentation levels and the outline tree built from them.
"""

import math
from typing import Dict, List, Optional, Sequence, Tuple

from Transcript.schemas import Line, LineMetrics


def classify_indentation(lines: Sequence[Line], metrics: LineMetrics) -> List[Line]:
    """
    Convert each line's start position into an indent level.

    Levels are relative: the leftmost line is level 0 wherever it sits
    on the page. Rounds half up and never goes below 0.
    """
    if not lines:
        return []

    base_x = min(line.x for line in lines)
    result = []
    for line in lines:
        level = math.floor((line.x - base_x) / metrics.indent_unit + 0.5)
        result.append(line.model_copy(update={"indent_level": max(0, level)}))
    return result


def build_hierarchy(lines: Sequence[Line]) -> List[Line]:
    """
    Link every line to its nearest shallower predecessor.

    Folds over an ancestor stack of (indent_level, line_index): entries at
    the current depth or deeper are closed, and what remains on top is the
    parent. A line at the same depth as an earlier one therefore shares
    that line's parent.
    """
    stack: List[Tuple[int, int]] = []
    parents: List[Optional[int]] = []
    children: Dict[int, List[int]] = {line.line_index: [] for line in lines}

    for line in lines:
        while stack and stack[-1][0] >= line.indent_level:
            stack.pop()

        parent = stack[-1][1] if stack else None
        parents.append(parent)
        if parent is not None:
            children[parent].append(line.line_index)

        stack.append((line.indent_level, line.line_index))

    return [
        line.model_copy(
            update={"parent": parent, "children": children[line.line_index]}
        )
        for line, parent in zip(lines, parents)
    ]


def descendants(lines: Sequence[Line], index: int) -> List[int]:
    """All lines below ``index`` in the outline, depth-first in document order."""
    found: List[int] = []
    pending = list(reversed(lines[index].children))
    while pending:
        current = pending.pop()
        found.append(current)
        pending.extend(reversed(lines[current].children))
    return found


def depth(lines: Sequence[Line], index: int) -> int:
    """Number of ancestors of the line at ``index``."""
    count = 0
    parent = lines[index].parent
    while parent is not None:
        count += 1
        parent = lines[parent].parent
    return count
