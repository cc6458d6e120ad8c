"""RFC 5545 content line folding."""
from typing import Iterable, List

MAX_LINE_OCTETS = 75
LINE_BREAK = '\r\n'


def _is_continuation_byte(byte: int) -> bool:
    return byte & 0xC0 == 0x80


def fold_line(line: str, limit: int = MAX_LINE_OCTETS) -> List[str]:
    """
    Fold one content line into physical lines of at most `limit` octets.

    Each continuation line starts with a single space, which counts
    toward its length. Cuts never fall inside a UTF-8 sequence.

    Args:
        line: Content line without terminator
        limit: Maximum octets per physical line

    Returns:
        List of physical lines
    """
    remaining = line.encode('utf-8')
    folded = []

    while len(remaining) > limit:
        cut = limit
        while cut > 1 and _is_continuation_byte(remaining[cut]):
            cut -= 1
        folded.append(remaining[:cut].decode('utf-8'))
        remaining = b' ' + remaining[cut:]

    folded.append(remaining.decode('utf-8'))
    return folded


def fold_lines(lines: Iterable[str]) -> List[str]:
    """Apply line folding to every content line."""
    folded = []
    for line in lines:
        folded.extend(fold_line(line))
    return folded


def join_lines(lines: Iterable[str]) -> str:
    """Join physical lines with CRLF, including a trailing CRLF."""
    return LINE_BREAK.join(lines) + LINE_BREAK
