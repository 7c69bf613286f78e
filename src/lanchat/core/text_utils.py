"""Small string helpers shared by the core and the user interfaces."""

import os
import re

MAX_NICK_LENGTH = 10

# Letters, digits, underscore and dash
_NICK_CHARS = re.compile(rf"[\w-]{{1,{MAX_NICK_LENGTH}}}")


def is_valid_nick(nick: str | None) -> bool:
    """Check if a nick name is valid, ignoring surrounding whitespace."""
    if nick is None:
        return False
    return _NICK_CHARS.fullmatch(nick.strip()) is not None


def is_empty(text: str | None) -> bool:
    """Check if text is None or only whitespace."""
    return text is None or not text.strip()


def shorten(text: str, length: int) -> str:
    """Truncate text to at most ``length`` characters."""
    return text[:length]


def capitalize_first_letter(text: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    if not text:
        return text
    return text[0].upper() + text[1:]


def append_slash(path: str) -> str:
    """Make sure a directory path ends with a path separator."""
    if path.endswith("/") or path.endswith(os.sep):
        return path
    return path + os.sep
