"""
Completion text extraction.

The answer lives at ``choices[0].message.content``. It is rendered back to
its JSON string form and then unquoted with shell-style rules, which turns
the quoted, escaped representation into literal text.
"""
from __future__ import annotations

import json
import logging
import string
from typing import Any, Iterator, Sequence, Tuple, Union

from codegpt.exceptions import ResponseParseError, UnescapeError

logger = logging.getLogger(__name__)

CONTENT_PATH: Tuple[Union[str, int], ...] = ("choices", 0, "message", "content")


class _Missing:
    """Marker for a path that is absent from a JSON document."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "v": "\v",
    "f": "\f",
    "r": "\r",
    "e": "\x1b",
    "E": "\x1b",
    "\\": "\\",
    "'": "'",
    '"': '"',
    "$": "$",
    "`": "`",
    " ": " ",
}


def lookup_path(document: Any, path: Sequence[Union[str, int]]) -> Any:
    """Follow ``path`` through nested dicts and lists.

    Returns ``MISSING`` as soon as a key is absent, an index is out of range
    or a segment does not fit the container type.
    """
    value = document
    for segment in path:
        if isinstance(segment, int) and isinstance(value, list):
            if not -len(value) <= segment < len(value):
                return MISSING
            value = value[segment]
        elif isinstance(segment, str) and isinstance(value, dict):
            if segment not in value:
                return MISSING
            value = value[segment]
        else:
            return MISSING
    return value


def unescape(text: str) -> str:
    """Remove shell-style quoting from ``text``.

    Double-quoted segments have their backslash escapes decoded, including
    ``\\u{XXXX}``. Single-quoted segments are copied literally. Characters
    outside quotes are copied as-is.

    Raises:
        UnescapeError: on an unknown escape, a trailing backslash or a
            malformed unicode escape inside double quotes
    """
    result = []
    in_single_quote = False
    in_double_quote = False
    chars: Iterator[Tuple[int, str]] = enumerate(text)

    for index, char in chars:
        if in_single_quote:
            if char == "'":
                in_single_quote = False
                continue
        elif in_double_quote:
            if char == '"':
                in_double_quote = False
                continue
            if char == "\\":
                result.append(_read_escape(chars, index))
                continue
        elif char == "'":
            in_single_quote = True
            continue
        elif char == '"':
            in_double_quote = True
            continue
        result.append(char)

    return "".join(result)


def _read_escape(chars: Iterator[Tuple[int, str]], start: int) -> str:
    """Decode the escape whose backslash sits at ``start``."""
    try:
        _, code = next(chars)
    except StopIteration:
        raise UnescapeError("Dangling backslash", start) from None

    if code in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[code]
    if code == "u":
        return _read_unicode(chars, start)
    raise UnescapeError(f"Invalid escape '\\{code}'", start)


def _read_unicode(chars: Iterator[Tuple[int, str]], start: int) -> str:
    """Decode the ``{hex}`` part of a ``\\u{hex}`` escape."""
    _, brace = next(chars, (start, ""))
    if brace != "{":
        raise UnescapeError("Expected '{' after \\u", start)

    digits = []
    for _, char in chars:
        if char == "}":
            break
        digits.append(char)
    else:
        raise UnescapeError("Unterminated unicode escape", start)

    hex_digits = "".join(digits)
    if not 1 <= len(hex_digits) <= 6 or not all(c in string.hexdigits for c in hex_digits):
        raise UnescapeError("Unicode escape needs 1 to 6 hex digits", start)
    try:
        return chr(int(hex_digits, 16))
    except ValueError:
        raise UnescapeError(f"Invalid unicode escape '\\u{{{hex_digits}}}'", start) from None


def extract_text(response_body: str) -> str:
    """Pull the completion text out of a chat-completion response body.

    A body without ``choices[0].message.content`` yields an empty string.

    Raises:
        ResponseParseError: if the body is not valid JSON or the content
            holds unpaired surrogates
        UnescapeError: if the content is not validly escaped
    """
    try:
        document = json.loads(response_body)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Response is not valid JSON: {e}") from e

    content = lookup_path(document, CONTENT_PATH)
    if content is MISSING or content is None:
        logger.warning("Response has no choices[0].message.content")
        if isinstance(document, dict) and "error" in document:
            logger.warning(f"API error: {document['error']}")
        return ""

    text = unescape(json.dumps(content, ensure_ascii=False)).strip()
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ResponseParseError(f"Completion text is not valid UTF-8: {e}") from e
    return text
