"""Terminal text utilities: width measurement, truncation, margin wrapping.

Widths are measured in terminal columns with ANSI escape sequences stripped,
so styled frames can be measured the same way as plain text.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

# CSI sequences: ESC[ <params> <final byte>, including private modes (ESC[?25l)
_STRIP_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]|\x1b\]8;;[^\x07]*\x07")

# Width of the "● " prefix every block of prose is aligned to.
DOT_MARGIN = "  "

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


def strip_ansi(text: str) -> str:
    return _STRIP_RE.sub("", text)


def _grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster."""
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    # Multi-codepoint clusters: VS16, ZWJ sequences, skin tones and flags
    # all render as a wide emoji.
    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D) or 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first = g[0]
    if ord(first) >= 0x1F000:
        return 2
    if unicodedata.category(first).startswith("M"):
        return 0
    return max(_wcwidth.wcwidth(first), 0)


def visible_width(text: str) -> int:
    """Calculate the visible terminal width of *text*.

    * Strips ANSI escape sequences.
    * Treats tabs as 3 spaces.
    * Uses a fast ASCII path when possible.
    * Caches results for non-ASCII strings.
    """
    if not text:
        return 0

    stripped = strip_ansi(text)
    if not stripped:
        return 0

    stripped = stripped.replace("\t", "   ")

    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = 0
    for g in grapheme.graphemes(stripped):
        total += _grapheme_width(g)

    return _cache_width(stripped, total)


def truncate_to_width(text: str, max_width: int, ellipsis: str = "…") -> str:
    """Truncate plain *text* to fit within *max_width* visible columns.

    The ellipsis counts towards the width. Cuts at grapheme boundaries.
    """
    if max_width <= 0:
        return ""
    if visible_width(text) <= max_width:
        return text

    target = max_width - visible_width(ellipsis)
    if target <= 0:
        return ellipsis[:max_width]

    result: list[str] = []
    cols = 0
    for g in grapheme.graphemes(text):
        w = _grapheme_width(g)
        if cols + w > target:
            break
        result.append(g)
        cols += w
    return "".join(result) + ellipsis


def with_margin(text: str, columns: int) -> str:
    """Indent every line of *text* by the dot margin, word-wrapping long ones.

    A single word longer than the available width is kept on its own line
    rather than split.
    """
    available = max(1, columns - len(DOT_MARGIN))
    out: list[str] = []

    for line in text.split("\n"):
        if visible_width(line) <= available:
            out.append(DOT_MARGIN + line)
            continue

        current = ""
        for word in line.split(" "):
            candidate = f"{current} {word}" if current else word
            if visible_width(candidate) <= available:
                current = candidate
            elif current:
                out.append(DOT_MARGIN + current)
                current = word
            else:
                out.append(DOT_MARGIN + word)
        if current:
            out.append(DOT_MARGIN + current)

    return "\n".join(out)


def format_text_block(text: str, columns: int) -> str:
    """A margin-aligned paragraph with one blank line above and below."""
    return f"\n{with_margin(text, columns)}\n\n"
