"""
Properties File Format
======================

Reader for the flat ``key=value`` properties text format:

- ``#`` or ``!`` as the first non-blank character marks a comment line
- key and value are separated by the first unescaped ``=``, ``:`` or whitespace
- a line ending in an odd number of backslashes continues on the next line
- ``\\t``, ``\\n``, ``\\r``, ``\\f`` and ``\\uXXXX`` escapes are decoded, any other
  escaped character stands for itself

Files are read fully and closed before parsing returns. Nothing is ever
written back.
"""

import logging
import os
import re
from typing import Dict, Iterable, Iterator, Optional, Tuple, Union

from .exceptions import LoadError, PropertiesFormatError

logger = logging.getLogger(__name__)

COMMENT_CHARS = "#!"
SEPARATORS = "=:"
WHITESPACE = " \t\f"

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_UNICODE_ESCAPE = re.compile(r"[0-9a-fA-F]{4}")


def _trailing_backslashes(text: str) -> int:
    count = 0
    for char in reversed(text):
        if char != "\\":
            break
        count += 1
    return count


def _logical_lines(lines: Iterable[str]) -> Iterator[str]:
    """Join continued physical lines and drop blank and comment lines."""
    pending: Optional[str] = None

    for raw in lines:
        physical = raw.rstrip("\r\n").lstrip(WHITESPACE)

        if pending is None:
            if not physical or physical[0] in COMMENT_CHARS:
                continue
            current = physical
        else:
            current = pending + physical

        # Only backslashes on this physical line count toward continuation
        if _trailing_backslashes(physical) % 2 == 1:
            pending = current[:-1]
            continue

        pending = None
        yield current

    if pending is not None:
        yield pending


def _split_entry(line: str) -> Tuple[str, str]:
    """Split a logical line into its raw (still escaped) key and value."""
    length = len(line)
    key_end = length
    value_start = length
    has_separator = False

    index = 0
    while index < length:
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in SEPARATORS:
            key_end, value_start = index, index + 1
            has_separator = True
            break
        if char in WHITESPACE:
            key_end, value_start = index, index + 1
            break
        index += 1

    while value_start < length:
        char = line[value_start]
        if char in WHITESPACE:
            value_start += 1
        elif char in SEPARATORS and not has_separator:
            has_separator = True
            value_start += 1
        else:
            break

    return line[:key_end], line[value_start:]


def _strip_trailing_whitespace(raw: str) -> str:
    """Trim unescaped trailing whitespace, keeping an escaped final blank."""
    stripped = raw.rstrip(WHITESPACE)
    if stripped != raw and _trailing_backslashes(stripped) % 2 == 1:
        return raw[: len(stripped) + 1]
    return stripped


def unescape(text: str, filename: Optional[str] = None) -> str:
    """
    Decode backslash escapes.

    Args:
        text: Raw key or value text
        filename: File being parsed, for error reporting

    Returns:
        Decoded text

    Raises:
        PropertiesFormatError: on a malformed ``\\uXXXX`` escape
    """
    if "\\" not in text:
        return text

    out = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char != "\\":
            out.append(char)
            index += 1
            continue

        index += 1
        if index >= length:
            break

        char = text[index]
        if char == "u":
            digits = text[index + 1:index + 5]
            if not _UNICODE_ESCAPE.fullmatch(digits):
                raise PropertiesFormatError(
                    f"Malformed \\uXXXX escape: \\u{digits}", filename=filename
                )
            code = int(digits, 16)
            # A high/low surrogate pair encodes one character outside the BMP
            if 0xDC00 <= code <= 0xDFFF and out and "\ud800" <= out[-1] <= "\udbff":
                high = ord(out.pop())
                code = 0x10000 + ((high - 0xD800) << 10) + (code - 0xDC00)
            out.append(chr(code))
            index += 5
        else:
            out.append(_ESCAPES.get(char, char))
            index += 1

    return "".join(out)


def parse_properties(lines: Iterable[str], filename: Optional[str] = None) -> Dict[str, str]:
    """
    Parse properties text into a dictionary.

    Args:
        lines: Physical lines of the document
        filename: Source file name, only used in error messages

    Returns:
        Mapping of keys to values; when a key repeats the last value wins
    """
    entries: Dict[str, str] = {}

    for line in _logical_lines(lines):
        raw_key, raw_value = _split_entry(line)
        key = unescape(raw_key, filename)
        value = unescape(_strip_trailing_whitespace(raw_value), filename)
        entries[key] = value

    return entries


def load_properties(filename: Union[str, "os.PathLike[str]"]) -> Dict[str, str]:
    """
    Read a properties file.

    Args:
        filename: Path of the file

    Returns:
        Parsed key/value mapping

    Raises:
        LoadError: if the file cannot be opened, read or decoded
    """
    path = os.fspath(filename)

    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read properties file {path}: {e}")
        raise LoadError(f"Cannot load configuration from {path}: {e}", filename=path) from e

    entries = parse_properties(lines, filename=path)
    logger.debug(f"Parsed {len(entries)} properties from {path}")
    return entries


__all__ = ["parse_properties", "load_properties", "unescape"]
