"""Page-range parsing and validation.

A page-range spec is a comma-separated list of tokens::

    spec   := token (',' token)*
    token  := number | number '-' number | number '-'
    number := digit+

Parsing (:func:`parse_page_spec`) is independent of any document. Resolving
(:func:`resolve_selection`, :func:`resolve_groups`) binds the tokens to a
concrete page count.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence

from .exceptions import EmptyPageSelection, InvalidPageSpec, PageOutOfRange
from .types import PageSelection, PageToken

LOGGER = logging.getLogger("pdfer.ranges")

_TOKEN_RE = re.compile(r"^([0-9]+)(?:(-)([0-9]*))?$")


def parse_token(text: str) -> PageToken:
    """Parse a single trimmed token into a :class:`PageToken`."""

    match = _TOKEN_RE.match(text)
    if not match:
        if not text:
            raise InvalidPageSpec(text, "empty page token")
        if text.count("-") > 1:
            raise InvalidPageSpec(text, "too many '-' characters")
        raise InvalidPageSpec(text, "expected N, N-M or N-")

    start = int(match.group(1))
    if start < 1:
        raise InvalidPageSpec(text, "page numbers must be >= 1")

    if match.group(2) is None:
        return PageToken(text=text, start=start)

    end_text = match.group(3)
    if not end_text:
        return PageToken(text=text, start=start, open_ended=True)

    end = int(end_text)
    if end < 1:
        raise InvalidPageSpec(text, "page numbers must be >= 1")
    if start > end:
        raise InvalidPageSpec(
            text, f"start page ({start}) must be <= end page ({end})"
        )
    return PageToken(text=text, start=start, end=end)


def parse_page_spec(spec: str) -> List[PageToken]:
    """Parse a page-range spec into ordered tokens.

    Tokens are split on commas and trimmed. The first malformed token raises
    :class:`InvalidPageSpec`; no partial token list is returned. A blank spec
    yields an empty list, which :func:`resolve_selection` rejects.
    """

    if not spec or not spec.strip():
        return []

    tokens = [parse_token(part.strip()) for part in spec.split(",")]
    LOGGER.debug("Parsed page spec %r into %d token(s)", spec, len(tokens))
    return tokens


def _resolve_token(token: PageToken, page_count: int) -> PageSelection:
    if token.start > page_count:
        raise PageOutOfRange(token.start, page_count)
    if token.open_ended:
        return list(range(token.start, page_count + 1))
    if token.end is None:
        return [token.start]
    if token.end > page_count:
        raise PageOutOfRange(token.end, page_count)
    return list(range(token.start, token.end + 1))


def resolve_groups(
    tokens: Optional[Sequence[PageToken]], page_count: int
) -> List[PageSelection]:
    """Resolve *tokens* against *page_count*, keeping one group per token.

    ``tokens=None`` means no spec was supplied and selects every page, one
    group per page. Any out-of-range index fails the whole selection.
    """

    if tokens is None:
        groups = [[page] for page in range(1, page_count + 1)]
    else:
        groups = [_resolve_token(token, page_count) for token in tokens]

    if not any(groups):
        raise EmptyPageSelection()
    return groups


def resolve_selection(
    tokens: Optional[Sequence[PageToken]], page_count: int
) -> PageSelection:
    """Resolve *tokens* into an ordered page selection.

    Order follows the spec and explicit repeats are preserved.
    """

    groups = resolve_groups(tokens, page_count)
    return [page for group in groups for page in group]


def validate(spec: Optional[str], page_count: int) -> PageSelection:
    """Parse *spec* and resolve it against *page_count* in one step."""

    tokens = None if spec is None else parse_page_spec(spec)
    return resolve_selection(tokens, page_count)


def describe_pages(pages: Sequence[int]) -> str:
    """Return a short label such as ``"Page 3"`` or ``"Pages 5-7"``."""

    if len(pages) == 1:
        return f"Page {pages[0]}"
    if is_contiguous(pages):
        return f"Pages {pages[0]}-{pages[-1]}"
    if len(pages) <= 5:
        return "Pages " + ",".join(map(str, pages))
    return f"{len(pages)} pages ({pages[0]}, {pages[1]}, ..., {pages[-1]})"


def is_contiguous(pages: Sequence[int]) -> bool:
    return all(nxt == current + 1 for current, nxt in zip(pages, pages[1:]))


__all__ = [
    "parse_token",
    "parse_page_spec",
    "resolve_groups",
    "resolve_selection",
    "validate",
    "describe_pages",
    "is_contiguous",
]
