import math
import re
from typing import Optional, Sequence, Tuple

RGB = Tuple[int, int, int]

_HEX_RE = re.compile(r"^[0-9A-Fa-f]{6}$")

# Channel weights for the mixer's distance (green counts most, like the eye)
WEIGHT_R = 2
WEIGHT_G = 4
WEIGHT_B = 3


def rgb_to_hex(rgb: Sequence[float]) -> str:
    """
    Convert an RGB triple to an uppercase '#RRGGBB' string.

    Fractional channels (e.g. from a pigment mix) are rounded to the nearest
    integer and clamped to 0-255.
    """
    channels = []
    for c in rgb[:3]:
        value = int(math.floor(float(c) + 0.5))  # round half up, not banker's rounding
        channels.append(max(0, min(255, value)))
    return "#{:02X}{:02X}{:02X}".format(*channels)


def hex_to_rgb(hex_str: str) -> Optional[RGB]:
    """
    Parse '#RRGGBB' (or 'RRGGBB') into an (r, g, b) tuple.

    Returns None unless the string holds exactly six hex digits.
    """
    if not isinstance(hex_str, str):
        return None
    clean = hex_str.strip()
    if clean.startswith("#"):
        clean = clean[1:]
    if not _HEX_RE.match(clean):
        return None
    return (int(clean[0:2], 16), int(clean[2:4], 16), int(clean[4:6], 16))


def weighted_color_distance(c1: Sequence[float], c2: Sequence[float]) -> float:
    """Weighted Euclidean RGB distance: sqrt(2*dR^2 + 4*dG^2 + 3*dB^2)."""
    dr = float(c1[0]) - float(c2[0])
    dg = float(c1[1]) - float(c2[1])
    db = float(c1[2]) - float(c2[2])
    return math.sqrt(WEIGHT_R * dr * dr + WEIGHT_G * dg * dg + WEIGHT_B * db * db)


def squared_distance(c1: Sequence[int], c2: Sequence[int]) -> int:
    dr = c1[0] - c2[0]
    dg = c1[1] - c2[1]
    db = c1[2] - c2[2]
    return dr * dr + dg * dg + db * db


def contrast_color(hex_str: str) -> str:
    """
    Pick black or white text for a swatch of the given color.

    Args:
        hex_str (str): Background color as '#RRGGBB'.

    Returns:
        str: '#000000' for light backgrounds (and unparseable input), '#FFFFFF' otherwise.
    """
    rgb = hex_to_rgb(hex_str)
    if rgb is None:
        return "#000000"
    luminance = (0.299 * rgb[0] + 0.587 * rgb[1] + 0.114 * rgb[2]) / 255
    return "#000000" if luminance > 0.5 else "#FFFFFF"
