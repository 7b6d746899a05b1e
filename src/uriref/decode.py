"""uriref.decode
Percent-decoding for the raw components of a URI.
Decoding is total: a malformed escape is kept as literal text.
"""

import re

# pct-encoded = "%" HEXDIG HEXDIG
_PCT_ENCODED_PAT: re.Pattern[str] = re.compile(r"%([0-9A-Fa-f]{2})")

# The legacy "%uXXXX" escape, as produced by JavaScript's escape().
_PCT_UNICODE_PAT: re.Pattern[str] = re.compile(r"%u([0-9A-Fa-f]{4})")


def encode_code_point(code_point: int) -> bytes:
    """Returns the UTF-8 encoding of code_point.
    Surrogates are encoded like any other code point; values past U+10FFFF encode to b"".
    """
    if code_point < 0:
        return b""
    if code_point < 0x80:
        return bytes((code_point,))
    if code_point < 0x800:
        return bytes((0xC0 | (code_point >> 6), 0x80 | (code_point & 0x3F)))
    if code_point < 0x10000:
        return bytes(
            (
                0xE0 | (code_point >> 12),
                0x80 | ((code_point >> 6) & 0x3F),
                0x80 | (code_point & 0x3F),
            )
        )
    if code_point < 0x110000:
        return bytes(
            (
                0xF0 | (code_point >> 18),
                0x80 | ((code_point >> 12) & 0x3F),
                0x80 | ((code_point >> 6) & 0x3F),
                0x80 | (code_point & 0x3F),
            )
        )
    return b""


def _decode_octets(octets: bytes) -> str:
    """UTF-8 decodes octets. An octet outside any valid sequence is taken as a code point of its own."""
    result: str = ""
    while len(octets) > 0:
        try:
            return result + octets.decode("utf-8")
        except UnicodeDecodeError as e:
            result += octets[: e.start].decode("utf-8")
            for octet in octets[e.start : e.end]:
                result += encode_code_point(octet).decode("utf-8")
            octets = octets[e.end :]
    return result


def decode(raw: str) -> str:
    """Decodes the percent-escapes in raw.
    e.g. decode("%D0%BF%D1%80%D0%BE") == "про", decode("%u043F") == "п", decode("100%") == "100%"
    """
    if "%" not in raw:
        return raw

    result: str = ""
    # Escaped octets are collected here until a literal character ends the run.
    pending: bytearray = bytearray()
    i: int = 0
    while i < len(raw):
        if raw[i] == "%":
            m: re.Match[str] | None = _PCT_UNICODE_PAT.match(raw, i)
            if m is not None:
                pending += encode_code_point(int(m[1], 16))
                i = m.end()
                continue
            m = _PCT_ENCODED_PAT.match(raw, i)
            if m is not None:
                pending.append(int(m[1], 16))
                i = m.end()
                continue
        if len(pending) > 0:
            result += _decode_octets(bytes(pending))
            pending.clear()
        result += raw[i]
        i += 1
    if len(pending) > 0:
        result += _decode_octets(bytes(pending))
    return result
