"""Key tokens produced by the decoder and the escape-sequence lookup table."""

from __future__ import annotations

ESC_BYTE = b"\x1b"

UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
HOME = "HOME"
END = "END"
PAGE_UP = "PAGE_UP"
PAGE_DOWN = "PAGE_DOWN"
DELETE = "DELETE"
BACKSPACE = "BACKSPACE"
ESC = "ESC"
ENTER = "ENTER"
TAB = "TAB"

CTRL_H = "CTRL_H"
CTRL_L = "CTRL_L"
CTRL_Q = "CTRL_Q"
CTRL_S = "CTRL_S"

# Bytes after ESC that may start a multi-byte sequence.
SEQUENCE_INTRODUCERS = frozenset({b"[", b"O"})

# Terminal states of the decoder, keyed by the bytes accumulated after ESC.
ESCAPE_SEQUENCES: dict[bytes, str] = {
    b"[A": UP,
    b"[B": DOWN,
    b"[C": RIGHT,
    b"[D": LEFT,
    b"[H": HOME,
    b"[F": END,
    b"[1~": HOME,
    b"[7~": HOME,
    b"[3~": DELETE,
    b"[4~": END,
    b"[8~": END,
    b"[5~": PAGE_UP,
    b"[6~": PAGE_DOWN,
    b"OH": HOME,
    b"OF": END,
}


def control_key_name(byte: int) -> str:
    """Return the token for a control byte (0x00..0x1f or 0x7f)."""
    if byte == 0x0D:
        return ENTER
    if byte == 0x09:
        return TAB
    if byte == 0x7F:
        return BACKSPACE
    if 0x01 <= byte <= 0x1A:
        return f"CTRL_{chr(byte + 0x40)}"
    return f"CTRL_{byte:02X}"


def is_control_byte(byte: int) -> bool:
    return byte < 0x20 or byte == 0x7F


def byte_to_key(ch: bytes) -> str:
    """Translate one non-escape input byte into its key token.

    Printable bytes decode through latin-1 so each byte value maps to exactly
    one character token.
    """
    value = ch[0]
    if is_control_byte(value):
        return control_key_name(value)
    return ch.decode("latin-1")


def is_insertable(key: str) -> bool:
    """Return whether ``key`` is a single printable character token."""
    return len(key) == 1 and not is_control_byte(ord(key))
