"""Line-oriented regular expression matching."""

import re
from collections.abc import Sequence
from typing import Optional

from jrep.models import MatchRecord


def byte_spans(line: str, pattern: re.Pattern) -> tuple[tuple[int, int], ...]:
    """Find every non-overlapping match in ``line`` as UTF-8 byte offsets.

    Args:
        line: Text to scan
        pattern: Compiled pattern

    Returns:
        tuple: (start, end) byte offsets, end exclusive, in order
    """
    spans = []
    char_pos = 0
    byte_pos = 0
    for m in pattern.finditer(line):
        start, end = m.span()
        byte_pos += len(line[char_pos:start].encode("utf-8"))
        byte_start = byte_pos
        byte_pos += len(line[start:end].encode("utf-8"))
        char_pos = end
        spans.append((byte_start, byte_pos))
    return tuple(spans)


def match_lines(
    lines: Sequence[str], pattern: re.Pattern, invert: bool = False
) -> list[MatchRecord]:
    """Match each line independently.

    Args:
        lines: Candidate lines, in order
        pattern: Compiled pattern
        invert: Keep the lines that do not match instead

    Returns:
        list[MatchRecord]: One record per kept line, in line order
    """
    records = []
    for i, line in enumerate(lines):
        matched = pattern.search(line) is not None
        if matched == invert:
            continue
        spans = () if invert else byte_spans(line, pattern)
        records.append(MatchRecord(line=line, line_number=i, spans=spans))
    return records


def match_opaque(
    datum: str, pattern: re.Pattern, invert: bool = False
) -> Optional[MatchRecord]:
    """Match a non-text payload as a single unit.

    The record never carries spans and its line number is always 0.
    """
    matched = pattern.search(datum) is not None
    if matched == invert:
        return None
    return MatchRecord(line=datum, line_number=0, is_text=False)
