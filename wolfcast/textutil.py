"""Small text helpers used when reading and parsing map files."""

from __future__ import annotations

import math
import re
import string
from typing import IO, Iterator

_ATOI_SPACES = " \n\t\v\r\f"
_TRIM_SPACES = " \n\t"
_WORD_SPACES = re.compile(r"[ \t\n]+")
_LEADING_DIGITS = re.compile(r"[0-9]*")
_TO_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_CHUNK = 4096


def _is_lower(ch: str) -> bool:
    return "a" <= ch <= "z"


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def atoi(text: str) -> int:
    """Parse a leading decimal integer, ignoring what follows it.

    Leading whitespace is skipped and one optional sign is accepted.
    Text without leading digits yields 0.
    """
    body = text.lstrip(_ATOI_SPACES)
    sign = 1
    if body[:1] in ("+", "-"):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    digits = _LEADING_DIGITS.match(body).group()
    return sign * int(digits) if digits else 0


def itoa(n: int) -> str:
    """Render an integer in decimal."""
    return str(n)


def split(text: str, sep: str) -> list[str]:
    """Split on a single character, dropping empty pieces."""
    return [piece for piece in text.split(sep) if piece]


def split_whitespace(text: str) -> list[str]:
    """Split on runs of spaces, tabs and newlines."""
    return [word for word in _WORD_SPACES.split(text) if word]


def trim(text: str) -> str:
    """Strip spaces, tabs and newlines from both ends."""
    return text.strip(_TRIM_SPACES)


def capitalize(text: str) -> str:
    """Lower-case ASCII letters, then upper-case the first letter of each word.

    A word is a run of lower-case letters; a run directly preceded by a
    digit keeps its first letter lower-case.
    """
    lowered = text.translate(_TO_LOWER)
    out = []
    for prev, ch in zip(" " + lowered, lowered):
        if _is_lower(ch) and not _is_lower(prev) and not _is_digit(prev):
            ch = ch.upper()
        out.append(ch)
    return "".join(out)


def int_sqrt(nb: int) -> int:
    """Return the exact integer square root of ``nb``, or 0.

    Only perfect squares of 2 or more give a non-zero result; 0 and 1
    give 0.
    """
    if nb < 4:
        return 0
    root = math.isqrt(nb)
    return root if root * root == nb else 0


def read_lines(stream: IO[str]) -> Iterator[str]:
    """Yield the lines of a text stream without their ``\\n``.

    Only ``\\n`` ends a line. A final piece without a newline is yielded
    when it is not empty.
    """
    pending = ""
    while True:
        chunk = stream.read(_CHUNK)
        if not chunk:
            break
        pending += chunk
        *complete, pending = pending.split("\n")
        yield from complete
    if pending:
        yield pending