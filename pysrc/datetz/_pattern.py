"""Tokenizing, formatting and parsing of ``YYYY-MM-DD``-style patterns"""

from __future__ import annotations

import enum
import re
from typing import NamedTuple, NoReturn, Optional, Sequence, Union

from ._locale import long_month_name
from ._math import LocalFields

__all__ = [
    "Token",
    "LiteralSegment",
    "TokenSegment",
    "ParsedFields",
    "ParseError",
    "MissingMeridiem",
    "PatternMismatch",
    "UnconsumedInput",
    "UnsupportedToken",
    "tokenize",
    "format_fields",
    "parse_fields",
]


class ParseError(ValueError):
    """A string could not be parsed with the given pattern"""


class MissingMeridiem(ParseError):
    """A 12-hour pattern has no AM/PM token"""


class PatternMismatch(ParseError):
    """The string doesn't match the pattern at some position"""


class UnconsumedInput(ParseError):
    """The pattern was exhausted before the end of the string"""


class UnsupportedToken(ParseError):
    """The token can be formatted, but not parsed"""


class Token(enum.Enum):
    YYYY = "YYYY"
    yyyy = "yyyy"
    YY = "YY"
    yy = "yy"
    MM = "MM"
    LM = "LM"
    DD = "DD"
    HH = "HH"
    hh = "hh"
    mm = "mm"
    ss = "ss"
    aa = "aa"
    AA = "AA"
    tz = "tz"


class LiteralSegment(NamedTuple):
    text: str


class TokenSegment(NamedTuple):
    token: Token


Segment = Union[LiteralSegment, TokenSegment]

# Longer spellings first, so YYYY is never read as YY YY
_TOKEN_RE = re.compile(
    r"\[[^\]]*\]|"
    + "|".join(
        sorted((re.escape(t.value) for t in Token), key=len, reverse=True)
    )
)


def tokenize(pattern: str) -> list[Segment]:
    """Split a pattern into literal text and tokens.

    Text between square brackets is always literal; the brackets themselves
    are dropped. Consecutive literal text is merged into one segment.
    """
    segments: list[Segment] = []
    literal: list[str] = []
    pos = 0
    for match in _TOKEN_RE.finditer(pattern):
        literal.append(pattern[pos : match.start()])
        raw = match[0]
        if raw.startswith("["):
            literal.append(raw[1:-1])
        else:
            if any(literal):
                segments.append(LiteralSegment("".join(literal)))
            literal.clear()
            segments.append(TokenSegment(Token(raw)))
        pos = match.end()
    literal.append(pattern[pos:])
    if any(literal):
        segments.append(LiteralSegment("".join(literal)))
    return segments


def format_fields(
    segments: Sequence[Segment],
    fields: LocalFields,
    tz: str,
    locale: str = "en",
) -> str:
    hour12 = fields.hour % 12 or 12
    meridiem = "PM" if fields.hour >= 12 else "AM"
    year = f"{fields.year:04d}"

    out = []
    for seg in segments:
        if isinstance(seg, LiteralSegment):
            out.append(seg.text)
            continue
        token = seg.token
        if token is Token.YYYY or token is Token.yyyy:
            out.append(year)
        elif token is Token.YY or token is Token.yy:
            out.append(year[-2:])
        elif token is Token.MM:
            out.append(f"{fields.month + 1:02d}")
        elif token is Token.LM:
            out.append(long_month_name(fields.month, locale))
        elif token is Token.DD:
            out.append(f"{fields.day:02d}")
        elif token is Token.HH:
            out.append(f"{fields.hour:02d}")
        elif token is Token.hh:
            out.append(f"{hour12:02d}")
        elif token is Token.mm:
            out.append(f"{fields.minute:02d}")
        elif token is Token.ss:
            out.append(f"{fields.second:02d}")
        elif token is Token.aa:
            out.append(meridiem.lower())
        elif token is Token.AA:
            out.append(meridiem)
        else:
            assert token is Token.tz
            out.append(tz)
    return "".join(out)


class ParsedFields(NamedTuple):
    fields: LocalFields
    tz: Optional[str]  # only set if the pattern has a ``tz`` token


def _convert_two_digit_year(value: int) -> int:
    return value + (1900 if value >= 70 else 2000)


def _fixed_width(token: Token) -> int:
    return 4 if token is Token.YYYY or token is Token.yyyy else 2


def _mismatch(msg: str) -> NoReturn:
    raise PatternMismatch(f"Failed to parse date string: {msg}")


def _check_pattern(segments: Sequence[Segment]) -> None:
    tokens = {s.token for s in segments if isinstance(s, TokenSegment)}
    if Token.LM in tokens:
        raise UnsupportedToken(
            "Parsing locale month names (LM) is not supported"
        )
    if Token.hh in tokens and not tokens & {Token.aa, Token.AA}:
        raise MissingMeridiem(
            "AM/PM marker (aa or AA) is required "
            "when using 12-hour format (hh)"
        )


def _next_literal(segments: Sequence[Segment], start: int) -> str | None:
    for seg in segments[start:]:
        if isinstance(seg, LiteralSegment) and seg.text:
            return seg.text
    return None


def parse_fields(s: str, segments: Sequence[Segment]) -> ParsedFields:
    """Read local fields (and possibly a timezone ID) from ``s``.

    Absent fields default to the start of the epoch: 1970-01-01 00:00:00.
    """
    _check_pattern(segments)

    values: dict[Token, int] = {}
    meridiem: str | None = None
    tz: str | None = None
    cursor = 0

    for i, seg in enumerate(segments):
        if isinstance(seg, LiteralSegment):
            if not s.startswith(seg.text, cursor):
                _mismatch(f"expected {seg.text!r} at position {cursor}")
            cursor += len(seg.text)
            continue

        token = seg.token
        if token is Token.tz:
            nxt = _next_literal(segments, i + 1)
            if nxt is None:
                end = len(s)
            elif (end := s.find(nxt, cursor)) == -1:
                _mismatch("could not find the end of the timezone identifier")
            tz = s[cursor:end].strip()
            cursor = end
            continue

        width = _fixed_width(token)
        chunk = s[cursor : cursor + width]
        if len(chunk) != width:
            _mismatch(f"unexpected end of string at token {token.value}")
        cursor += width
        if token is Token.aa or token is Token.AA:
            meridiem = chunk.upper()
            if meridiem not in ("AM", "PM"):
                _mismatch(f"invalid AM/PM marker {chunk!r}")
        elif chunk.isascii() and chunk.isdigit():
            values[token] = int(chunk)
        else:
            _mismatch(f"invalid numeric value {chunk!r} for {token.value}")

    if cursor != len(s):
        raise UnconsumedInput(
            f"Failed to consume entire date string: {s[cursor:]!r} left over"
        )

    if Token.YYYY in values or Token.yyyy in values:
        year = values.get(Token.YYYY, values.get(Token.yyyy))
    elif Token.YY in values or Token.yy in values:
        year = _convert_two_digit_year(
            values.get(Token.YY, values.get(Token.yy))  # type: ignore[arg-type]
        )
    else:
        year = 1970

    if Token.HH in values:
        hour = values[Token.HH]
    elif Token.hh in values:
        hour = values[Token.hh] % 12 + (12 if meridiem == "PM" else 0)
    else:
        hour = 0

    return ParsedFields(
        LocalFields(
            year,  # type: ignore[arg-type]
            values.get(Token.MM, 1) - 1,
            values.get(Token.DD, 1),
            hour,
            values.get(Token.mm, 0),
            values.get(Token.ss, 0),
        ),
        tz or None,
    )
