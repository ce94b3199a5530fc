"""Keyboard input parsing for raw-mode terminal input.

Handles the legacy (xterm/VT) escape sequences a cooked-to-raw terminal
produces, plain control characters and printable text. ``parse_key`` turns a
single complete sequence into a key identifier such as ``"up"``,
``"ctrl+c"`` or ``"a"``; ``split_sequences`` cuts a chunk read from stdin into
complete sequences first.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------

KeyId = str

ESC = "\x1b"


# ---------------------------------------------------------------------------
# Key helper object
# ---------------------------------------------------------------------------


class Key:
    """Named key constants and modifier combinators."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    backspace = "backspace"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Legacy escape sequences -> key names
LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[4~": "end",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
    "\x1b[Z": "shift+tab",
}

_KEY_ALIASES: dict[str, str] = {
    "esc": "escape",
    "return": "enter",
    "pageup": "pageUp",
    "pagedown": "pageDown",
}


# ---------------------------------------------------------------------------
# Sequence splitting
# ---------------------------------------------------------------------------


def _sequence_length(data: str) -> int:
    """Length of the escape sequence at the start of *data*.

    Returns ``len(data)`` when the sequence is incomplete, so a truncated
    sequence is delivered as-is instead of being held back.
    """
    if len(data) == 1:
        return 1

    introducer = data[1]

    # CSI: ESC [ params final-byte(0x40..0x7E)
    if introducer == "[":
        for i in range(2, len(data)):
            if 0x40 <= ord(data[i]) <= 0x7E:
                return i + 1
        return len(data)

    # SS3: ESC O <char>
    if introducer == "O":
        return min(3, len(data))

    # Meta key: ESC followed by a single character
    return 2


def split_sequences(data: str) -> list[str]:
    """Split a raw stdin chunk into complete key sequences.

    Escape sequences stay whole; any other character becomes its own
    sequence, so a fast typist's (or a paste's) ``"abc"`` yields three keys.
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(data):
        if data[pos] == ESC:
            length = _sequence_length(data[pos:])
            sequences.append(data[pos : pos + length])
            pos += length
        else:
            sequences.append(data[pos])
            pos += 1

    return sequences


# ---------------------------------------------------------------------------
# Parsing and matching
# ---------------------------------------------------------------------------


def normalize_key_id(key_id: str) -> str:
    """Canonical form of a key identifier (``"Esc"`` -> ``"escape"``)."""
    *modifiers, key = key_id.split("+")
    lowered = key.lower()
    key = _KEY_ALIASES.get(lowered, key if len(key) == 1 else lowered)
    present = {m.lower() for m in modifiers}
    ordered = [m for m in ("ctrl", "shift", "alt") if m in present]
    return "+".join([*ordered, key])


def parse_key(data: str) -> KeyId | None:
    """Parse one complete input sequence and return its key identifier.

    Returns ``None`` for empty input and for sequences that are not keys
    this module knows about.
    """
    if not data:
        return None

    if data in LEGACY_KEY_SEQUENCES:
        return LEGACY_KEY_SEQUENCES[data]

    # --- Simple single-byte keys ---
    if data == ESC:
        return "escape"
    if data in ("\r", "\n"):
        return "enter"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data in ("\x7f", "\x08"):
        return "backspace"

    # --- Ctrl + letter (0x01 - 0x1a) ---
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # --- Alt + key (ESC prefix) ---
    if len(data) == 2 and data[0] == ESC:
        ch = data[1]
        if ch in ("\x7f", "\x08"):
            return "alt+backspace"
        if ch.isprintable():
            return "alt+" + ch.lower()
        return None

    # --- Plain printable character ---
    if len(data) == 1 and data.isprintable():
        return data

    return None


def matches_key(data: str, key_id: KeyId) -> bool:
    """Return ``True`` if raw input *data* corresponds to *key_id*."""
    parsed = parse_key(data)
    if parsed is None:
        return False
    return parsed == normalize_key_id(key_id)


def is_printable(data: str) -> bool:
    """True when *data* is plain text (no control characters, no escapes)."""
    if not data:
        return False
    return not any(
        ord(ch) < 32 or ord(ch) == 0x7F or (0x80 <= ord(ch) <= 0x9F) for ch in data
    )
