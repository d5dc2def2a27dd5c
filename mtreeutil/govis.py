"""BSD-compatible vis(3)/unvis(3) encoding that is safe for multi-byte text.

Encoding works on the UTF-8 bytes of a string, so the output is always
plain ASCII. Decoding produces bytes which are turned back into a string
with the ``surrogateescape`` error handler. Byte sequences that are not
valid UTF-8 therefore survive a round trip unchanged.
"""

from __future__ import annotations

import enum

__all__ = [
    "VisFlag",
    "VisError",
    "VIS_MASK",
    "DEFAULT_VIS_FLAGS",
    "vis",
    "unvis",
]


class VisFlag(enum.IntFlag):
    """Flags controlling how characters are encoded and decoded."""

    OCTAL = 1 << 0  # use octal \ddd format
    CSTYLE = 1 << 1  # use \[nrft0..] where appropriate
    SPACE = 1 << 2  # also encode space
    TAB = 1 << 3  # also encode tab
    NEWLINE = 1 << 4  # also encode newline
    SAFE = 1 << 5  # leave unsafe characters alone
    NOSLASH = 1 << 6  # inhibit printing '\'
    HTTPSTYLE = 1 << 7  # HTTP-style escape %xx
    GLOB = 1 << 8  # encode glob(3) magic characters
    WHITE = SPACE | TAB | NEWLINE


VIS_MASK = (1 << 9) - 1
DEFAULT_VIS_FLAGS = VisFlag.WHITE | VisFlag.OCTAL | VisFlag.GLOB

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"
_HTTP_EXTRA = frozenset("$-_.+!*'(),")
_GLOB_CHARS = frozenset("*?[#")
_UNSAFE = frozenset("\b\a\r")
_CSTYLE_ENCODE = {
    " ": "\\s",
    "\n": "\\n",
    "\r": "\\r",
    "\b": "\\b",
    "\a": "\\a",
    "\v": "\\v",
    "\t": "\\t",
    "\f": "\\f",
    "\x00": "\\000",
}
_CSTYLE_DECODE = {
    "n": b"\n",
    "r": b"\r",
    "b": b"\b",
    "a": b"\x07",
    "v": b"\v",
    "t": b"\t",
    "f": b"\f",
    "s": b" ",
    "E": b"\x1b",
    "\n": b"",  # hidden newline
    "$": b"",  # hidden marker
}
_DIGITS = "0123456789abcdef"


class VisError(ValueError):
    """Raised for unsupported flags or malformed escape sequences."""


def _is_http(ch: str) -> bool:
    # Anything outside ASCII is never treated as HTTP-safe.
    if ord(ch) > 0x7F:
        return False
    return ch.isalnum() or ch in _HTTP_EXTRA


def _is_graph(code: int) -> bool:
    return 0x21 <= code <= 0x7E


def _vis_byte(b: int, flag: int) -> str:
    ch = chr(b)

    if flag & VisFlag.HTTPSTYLE and not _is_http(ch):
        return f"%{b:02X}"

    if b > 0x7F:
        pass
    elif flag & VisFlag.GLOB and ch in _GLOB_CHARS:
        pass
    elif (
        _is_graph(b)
        or (not flag & VisFlag.SPACE and ch == " ")
        or (not flag & VisFlag.TAB and ch == "\t")
        or (not flag & VisFlag.NEWLINE and ch == "\n")
        or (flag & VisFlag.SAFE and ch in _UNSAFE)
    ):
        if ch == "\\" and not flag & VisFlag.NOSLASH:
            return "\\\\"
        return ch

    if flag & VisFlag.CSTYLE and ch in _CSTYLE_ENCODE:
        return _CSTYLE_ENCODE[ch]

    if flag & VisFlag.OCTAL or _is_graph(b) or (b & 0x7F) == 0x20:
        return f"\\{b:03o}"

    # Meta and control escapes, in the manner of the classic vis(3).
    parts = [] if flag & VisFlag.NOSLASH else ["\\"]
    if b & 0x80:
        b &= 0x7F
        parts.append("M")
    if b < 0x20 or b == 0x7F:
        parts.append("^?" if b == 0x7F else "^" + chr(b + ord("@")))
    else:
        parts.append("-" + chr(b))
    return "".join(parts)


def vis(src: str | bytes | bytearray, flag: int) -> str:
    """Encode ``src`` byte by byte according to ``flag``."""
    flag = int(flag)
    if flag & VIS_MASK != flag:
        raise VisError(f"vis: flag {flag:#x} contains unknown or unsupported flags")
    data = src.encode(_ENCODING, _ERRORS) if isinstance(src, str) else bytes(src)
    return "".join(_vis_byte(b, flag) for b in data)


class _UnvisParser:
    """Recursive-descent parser over the characters of an encoded string."""

    def __init__(self, text: str, flag: int) -> None:
        self._text = text
        self._idx = 0
        self._flag = flag

    @property
    def at_end(self) -> bool:
        return self._idx >= len(self._text)

    def peek(self, context: str) -> str:
        if self.at_end:
            raise VisError(f"{context}: tried to read past end of token list")
        return self._text[self._idx]

    def advance(self) -> None:
        self._idx += 1

    def parse(self) -> bytes:
        out = bytearray()
        while not self.at_end:
            out += self._rune()
        return bytes(out)

    def _rune(self) -> bytes:
        ch = self.peek("rune")
        if ch == "\\":
            self.advance()
            return self._escape_sequence()
        if ch == "%" and self._flag & VisFlag.HTTPSTYLE:
            self.advance()
            return self._digits(16, force=True)
        return self._plain()

    def _plain(self) -> bytes:
        ch = self.peek("plain rune")
        self.advance()
        try:
            return ch.encode(_ENCODING, _ERRORS)
        except UnicodeEncodeError:
            return "\ufffd".encode(_ENCODING)

    def _escape_sequence(self) -> bytes:
        ch = self.peek("escape sequence")
        if ch == "\\":
            self.advance()
            return b"\\"
        if ch in "01234567":
            return self._digits(8, force=False)
        if ch == "x":
            self.advance()
            return self._digits(16, force=True)
        if ch == "^":
            self.advance()
            return self._ctrl(0x00)
        if ch == "M":
            self.advance()
            return self._meta()
        return self._cstyle()

    def _cstyle(self) -> bytes:
        ch = self.peek("escape cstyle")
        try:
            out = _CSTYLE_DECODE[ch]
        except KeyError:
            raise VisError(f"escape cstyle: unknown escape character: {ch!r}") from None
        self.advance()
        return out

    def _digits(self, base: int, force: bool) -> bytes:
        code = 0
        limit = 0xFF
        first = True
        while limit > 0:
            if self.at_end:
                if not force and not first:
                    break
                raise VisError(f"escape base {base}: unexpected end of input")
            ch = self._text[self._idx]
            digit = _DIGITS.find(ch.lower()) if len(ch) == 1 and ch.isascii() else -1
            if not 0 <= digit < base:
                if not force and not first:
                    break
                raise VisError(f"escape base {base}: could not parse digit {ch!r}")
            code = code * base + digit
            self.advance()
            limit //= base
            first = False
        if code > 0xFF:
            raise VisError(f"escape base {base}: code {code} outside latin-1 encoding")
        return bytes([code])

    def _ctrl(self, mask: int) -> bytes:
        ch = self.peek("escape ctrl")
        if ord(ch) > 0xFF:
            raise VisError(f"escape ctrl: code {ch!r} outside latin-1 encoding")
        value = 0x7F if ch == "?" else ord(ch) & 0x1F
        self.advance()
        return bytes([mask | value])

    def _meta(self) -> bytes:
        ch = self.peek("escape meta")
        mask = 0x80
        if ch == "^":
            self.advance()
            return self._ctrl(mask)
        if ch == "-":
            self.advance()
            ch = self.peek("escape meta1")
            if ord(ch) > 0xFF:
                raise VisError(f"escape meta1: code {ch!r} outside latin-1 encoding")
            self.advance()
            return bytes([mask | (ord(ch) & 0xFF)])
        raise VisError(f"escape meta: unknown escape char: {ch!r}")


def unvis(text: str, flag: int) -> str:
    """Decode a vis-encoded string.

    Only the HTTPSTYLE bit of ``flag`` affects decoding. Raises
    :class:`VisError` for an invalid escape sequence.
    """
    parser = _UnvisParser(text, int(flag))
    try:
        data = parser.parse()
    except VisError as exc:
        raise VisError(f"unvis: {exc}") from None
    if not parser.at_end:
        raise VisError("unvis: trailing characters at end of input")
    return data.decode(_ENCODING, _ERRORS)