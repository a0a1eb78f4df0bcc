"""
Color Math
==========
Conversions between hex color strings and RGB triples, color averaging and
similarity checks.

Malformed colors are data, not faults: every function here reports them with
``None`` (or skips / returns ``False``) instead of raising, because the click
handler that calls them must never crash mid-interaction.

Functions:
    hex_to_rgb: Parse "#RRGGBB" / "#RGB" into an RGB triple.
    rgb_to_hex: Encode channels as canonical "#RRGGBB".
    average_hex_colors: Channel-wise mean of a list of colors.
    colors_are_similar: Euclidean RGB distance below a threshold.
"""
from __future__ import annotations

import logging
import math
import re
from typing import Iterable, NamedTuple, Optional

logger = logging.getLogger(__name__)

BLACK = "#000000"
DEFAULT_SIMILARITY_THRESHOLD: float = 50.0

_HEX6 = re.compile(r"[0-9A-Fa-f]{6}")


class RGB(NamedTuple):
    r: int
    g: int
    b: int


def hex_to_rgb(hex_color: str) -> Optional[RGB]:
    """
    Convert a hex color string to an RGB triple.

    Args:
        hex_color: Color such as "#FF5733", "ff5733", "#abc" or "abc".

    Returns:
        RGB triple, or None if the input is not a valid color.
    """
    if not isinstance(hex_color, str):
        return None

    normalized = hex_color[1:] if hex_color.startswith("#") else hex_color

    # Expand shorthand (abc -> aabbcc)
    if len(normalized) == 3:
        normalized = "".join(c + c for c in normalized)

    if not _HEX6.fullmatch(normalized):
        return None

    value = int(normalized, 16)
    return RGB((value >> 16) & 255, (value >> 8) & 255, value & 255)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (127.5 -> 128)."""
    return int(math.floor(value + 0.5))


def _clamp_channel(value: float) -> int:
    return max(0, min(255, round_half_up(value)))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """
    Convert RGB channels to an uppercase "#RRGGBB" string.

    Channels are rounded and clamped to [0, 255].
    """
    return "#{:02X}{:02X}{:02X}".format(_clamp_channel(r), _clamp_channel(g), _clamp_channel(b))


def normalize_hex(hex_color: str) -> Optional[str]:
    """Canonical "#RRGGBB" form of a color, or None if it is invalid."""
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return None
    return rgb_to_hex(*rgb)


def average_hex_colors(colors: Iterable[str]) -> str:
    """
    Average a sequence of hex colors channel by channel.

    Invalid entries contribute nothing to the channel sums but still count in
    the denominator, so a list containing malformed colors is pulled toward
    black.

    Args:
        colors: Hex color strings, e.g. ["#FF5733", "#33FF57"].

    Returns:
        The averaged color, or "#000000" for an empty input.
    """
    colors = list(colors)
    if not colors:
        return BLACK

    total_r = total_g = total_b = 0
    for color in colors:
        rgb = hex_to_rgb(color)
        if rgb is None:
            logger.debug(f"Skipping invalid color {color!r} while averaging.")
            continue
        total_r += rgb.r
        total_g += rgb.g
        total_b += rgb.b

    count = len(colors)
    return rgb_to_hex(
        round_half_up(total_r / count),
        round_half_up(total_g / count),
        round_half_up(total_b / count),
    )


def color_distance(a: str, b: str) -> Optional[float]:
    """Euclidean distance between two colors in RGB space (None if either is invalid)."""
    rgb_a = hex_to_rgb(a)
    rgb_b = hex_to_rgb(b)
    if rgb_a is None or rgb_b is None:
        return None
    return math.sqrt(sum((ca - cb) ** 2 for ca, cb in zip(rgb_a, rgb_b)))


def colors_are_similar(a: str, b: str, threshold: float = DEFAULT_SIMILARITY_THRESHOLD) -> bool:
    """True if the RGB distance between ``a`` and ``b`` is strictly below ``threshold``."""
    distance = color_distance(a, b)
    if distance is None:
        return False
    return distance < threshold
