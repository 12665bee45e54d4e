"""Line-level change quantification between two versions of a file"""

import difflib
from typing import Optional

from .models import ChangeDelta


def line_count(content: str) -> int:
    return len(content.splitlines())


def quantify(old_content: Optional[str], new_content: str) -> ChangeDelta:
    """
    Count added and removed lines between two texts

    Args:
        old_content: Previous content, None when there is no baseline
        new_content: Current content

    Returns:
        ChangeDelta with line counts; replaced lines count on both sides
    """
    old_lines = (old_content or "").splitlines(keepends=True)
    new_lines = new_content.splitlines(keepends=True)

    if old_lines == new_lines:
        return ChangeDelta(0, 0)

    matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)

    added = 0
    removed = 0
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == 'equal':
            continue
        if tag in ('delete', 'replace'):
            removed += i2 - i1
        if tag in ('insert', 'replace'):
            added += j2 - j1

    return ChangeDelta(added, removed)
