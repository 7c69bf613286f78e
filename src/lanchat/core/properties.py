"""Reading and writing of flat key/value files in the Java properties format.

The settings file has always been written in this format, so existing
files from other clients can be read and ours can be read by them. Files
are ISO-8859-1 encoded; any other character is written as a ``\\uXXXX``
escape.
"""

import logging
import os
import re
import tempfile
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

ENCODING = "latin-1"

_COMMENT_CHARS = "#!"
_SEPARATORS = "=:"
_WHITESPACE = " \t\f"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

_UNESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_ESCAPES = {"\\": "\\\\", "\t": "\\t", "\n": "\\n", "\r": "\\r", "\f": "\\f"}


class PropertyCodec(Protocol):
    """Loads and saves a flat string to string mapping."""

    def load(self, path: Path) -> dict[str, str]:
        """Read all properties from ``path``.

        Raises FileNotFoundError if the file is missing, OSError on other
        read failures.
        """

    def save(self, path: Path, properties: Mapping[str, str | None], header: str) -> None:
        """Write ``properties`` to ``path`` below a comment line with ``header``.

        Raises OSError on write failures.
        """


class PropertyFileCodec:
    """The default codec, backed by the functions in this module."""

    def load(self, path: Path) -> dict[str, str]:
        return load(path)

    def save(self, path: Path, properties: Mapping[str, str | None], header: str) -> None:
        save(path, properties, header)


def load(path: Path) -> dict[str, str]:
    """Load properties from a file."""
    with open(path, encoding=ENCODING) as f:
        return loads(f.read())


def loads(text: str) -> dict[str, str]:
    """Parse properties from text.

    Raises ValueError on a malformed ``\\uXXXX`` escape.
    """
    properties: dict[str, str] = {}
    for line in _logical_lines(_LINE_BREAK.split(text)):
        key, value = _split_line(line)
        properties[_unescape(key)] = _unescape(value)
    return properties


def save(path: Path, properties: Mapping[str, str | None], header: str) -> None:
    """Save properties to a file, replacing it atomically."""
    content = dumps(properties, header)

    # Write to a temp file and rename, so a crash never leaves half a file
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp", prefix=path.stem + "_")
    try:
        with os.fdopen(fd, "w", encoding=ENCODING, newline="\n") as f:
            f.write(content)
        os.replace(tmp_path, path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise

    logger.debug(f"Saved {len(properties)} properties to {path}")


def dumps(properties: Mapping[str, str | None], header: str | None = None) -> str:
    """Serialize properties to text. Entries with a None value are left out."""
    lines: list[str] = []
    if header:
        for header_line in header.splitlines():
            lines.append("#" + _escape_unicode(header_line))
    for key, value in properties.items():
        if value is None:
            continue
        lines.append(f"{_escape(key, escape_all_spaces=True)}={_escape(value)}")
    return "\n".join(lines) + "\n"


def _logical_lines(physical_lines: list[str]) -> Iterator[str]:
    """Join continued lines and skip blanks and comments."""
    current: str | None = None
    for raw in physical_lines:
        line = raw.lstrip(_WHITESPACE)
        if current is None:
            if not line or line[0] in _COMMENT_CHARS:
                continue
            current = ""

        if _ends_with_continuation(line):
            current += line[:-1]
            continue

        yield current + line
        current = None

    # A continuation on the last line just ends the entry
    if current:
        yield current


def _ends_with_continuation(line: str) -> bool:
    backslashes = len(line) - len(line.rstrip("\\"))
    return backslashes % 2 == 1


def _split_line(line: str) -> tuple[str, str]:
    """Split a logical line into its raw (still escaped) key and value."""
    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        index += 1

    key = line[:index]
    rest = line[index:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def _unescape(text: str) -> str:
    if "\\" not in text:
        return text

    chars: list[str] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        index += 1
        if char != "\\":
            chars.append(char)
            continue
        if index >= length:
            # A lone trailing backslash escapes nothing and is dropped
            break

        char = text[index]
        index += 1
        if char == "u":
            code = text[index : index + 4]
            if len(code) != 4 or any(c not in "0123456789abcdefABCDEF" for c in code):
                raise ValueError(f"Malformed \\uxxxx encoding: \\u{code}")
            chars.append(chr(int(code, 16)))
            index += 4
        else:
            chars.append(_UNESCAPES.get(char, char))

    result = "".join(chars)
    if any("\ud800" <= c <= "\udfff" for c in result):
        # Characters outside the BMP are stored as two escaped surrogates
        encoded = result.encode("utf-16-le", "surrogatepass")
        result = encoded.decode("utf-16-le", "surrogatepass")
    return result


def _escape(text: str, escape_all_spaces: bool = False) -> str:
    chars: list[str] = []
    for index, char in enumerate(text):
        if char == " ":
            chars.append("\\ " if escape_all_spaces or index == 0 else " ")
        elif char in _ESCAPES:
            chars.append(_ESCAPES[char])
        elif char in "=:#!":
            chars.append("\\" + char)
        else:
            chars.append(_escape_unicode(char))
    return "".join(chars)


def _escape_unicode(text: str) -> str:
    chars: list[str] = []
    for char in text:
        if " " <= char <= "~":
            chars.append(char)
            continue
        encoded = char.encode("utf-16-be", "surrogatepass")
        for i in range(0, len(encoded), 2):
            chars.append(f"\\u{int.from_bytes(encoded[i : i + 2], 'big'):04X}")
    return "".join(chars)
