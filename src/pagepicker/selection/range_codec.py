"""
PagePicker - Page Range Codec

Conversion between sets of page numbers and compact range strings
such as "1-3,5,7-9".
"""

import re
from collections.abc import Iterable

# Leading integer of a token, the way a lenient number field reads it:
# " 12" and "12px" are both 12, "abc" and "" are not numbers.
_LEADING_INT = re.compile(r"^\s*\+?([0-9]+)")

# Widest "a-b" span decode expands; wider spans are skipped like malformed tokens
MAX_SPAN = 100_000


def _parse_int(text: str) -> int | None:
    match = _LEADING_INT.match(text)
    if match is None:
        return None
    return int(match.group(1))


def encode(pages: Iterable[int]) -> str:
    """Compress page numbers into a range string.

    Consecutive runs collapse into "first-last"; isolated pages are
    written on their own. Input order and duplicates do not matter.

    Args:
        pages: Page numbers in any order.

    Returns:
        Range string, e.g. "1-3,5,7"; empty string for no pages.
    """
    ordered = sorted(set(pages))
    if not ordered:
        return ""

    runs: list[str] = []
    start = prev = ordered[0]
    for page in ordered[1:]:
        if page == prev + 1:
            prev = page
            continue
        runs.append(str(start) if start == prev else f"{start}-{prev}")
        start = prev = page
    runs.append(str(start) if start == prev else f"{start}-{prev}")

    return ",".join(runs)


def decode(text: str, max_page: int | None = None) -> set[int]:
    """Expand a range string into a set of page numbers.

    Tokens are separated by commas. "a-b" adds every page between a and b
    inclusive in either direction, so "7-5" is the same as "5-7". Tokens
    that are not numbers are skipped; decoding never fails. Spans are cut
    at ``max_page`` when given, and a span still wider than ``MAX_SPAN``
    pages is skipped.

    Args:
        text: Range string typed by the user.
        max_page: Optional last page a span may reach, e.g. the page count.

    Returns:
        Set of page numbers (unsorted).
    """
    pages: set[int] = set()
    if not text:
        return pages

    for token in text.split(","):
        token = token.strip()
        if "-" in token:
            parts = token.split("-")
            start = _parse_int(parts[0])
            end = _parse_int(parts[1])
            if start is None or end is None:
                continue
            low, high = min(start, end), max(start, end)
            if max_page is not None:
                high = min(high, max_page)
            if high - low + 1 > MAX_SPAN:
                continue
            pages.update(range(low, high + 1))
        else:
            number = _parse_int(token)
            if number is not None:
                pages.add(number)

    return pages


def normalize(text: str) -> str:
    """Rewrite a user-typed range string in canonical form ("1,2,3" -> "1-3")."""
    return encode(decode(text))
