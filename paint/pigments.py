"""
Pigment catalog used by the mixer.

Values approximate real artist oil paints (deeper and more muted than the
equivalent web colors).
"""
import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple, Union

from paint.colors import RGB, hex_to_rgb, rgb_to_hex

PIGMENT_TYPES = ("Primary", "Earth", "Neutral", "Secondary")


@dataclass(frozen=True)
class Pigment:
    name: str
    hex: str
    rgb: RGB
    type: str = "Primary"  # informational only

    def __post_init__(self):
        if not self.name:
            raise ValueError("Pigment name must be non-empty.")
        hex_rgb = hex_to_rgb(self.hex)
        if hex_rgb is None:
            raise ValueError(f"Pigment '{self.name}' has invalid hex color '{self.hex}'.")
        if (
            not isinstance(self.rgb, (tuple, list))
            or len(self.rgb) != 3
            or not all(isinstance(c, int) and not isinstance(c, bool) and 0 <= c <= 255 for c in self.rgb)
        ):
            raise ValueError(f"Pigment '{self.name}' RGB values must be integers in [0, 255], got {self.rgb}.")
        if hex_rgb != tuple(self.rgb):
            raise ValueError(f"Pigment '{self.name}' hex {self.hex} does not match its RGB {tuple(self.rgb)}.")
        if self.type not in PIGMENT_TYPES:
            raise ValueError(f"Pigment '{self.name}' has unknown type '{self.type}'. Expected one of {PIGMENT_TYPES}.")


UNIVERSAL_PALETTE: Tuple[Pigment, ...] = (
    # Whites
    Pigment("Titanium White", "#F9FAF9", (249, 250, 249), "Neutral"),
    # Yellows
    Pigment("Cadmium Yellow Light", "#FFF600", (255, 246, 0), "Primary"),
    Pigment("Yellow Ochre", "#C69C08", (198, 156, 8), "Earth"),
    # Reds
    Pigment("Cadmium Red Medium", "#D92121", (217, 33, 33), "Primary"),
    Pigment("Alizarin Crimson", "#8E1E25", (142, 30, 37), "Primary"),
    Pigment("Burnt Sienna", "#8A3816", (138, 56, 22), "Earth"),
    # Blues
    Pigment("French Ultramarine", "#1C05B3", (28, 5, 179), "Primary"),
    Pigment("Cerulean Blue", "#027BA8", (2, 123, 168), "Primary"),
    # Greens
    Pigment("Viridian Green", "#006B54", (0, 107, 84), "Secondary"),
    Pigment("Sap Green", "#446420", (68, 100, 32), "Secondary"),
    # Browns / blacks
    Pigment("Burnt Umber", "#8A3324", (138, 51, 36), "Earth"),
    Pigment("Ivory Black", "#181818", (24, 24, 24), "Neutral"),
)


def is_white(pigment: Pigment) -> bool:
    return "White" in pigment.name


def is_near_black(pigment: Pigment) -> bool:
    # Umbers are dark enough to shade with
    return "Black" in pigment.name or "Umber" in pigment.name


def split_catalog(palette: Sequence[Pigment]) -> Tuple[List[Pigment], List[Pigment], List[Pigment]]:
    """
    Split a catalog into (whites, darks, colors), keeping catalog order.

    A pigment that is both white and near-black by name counts as white.
    """
    whites, darks, colors = [], [], []
    for p in palette:
        if is_white(p):
            whites.append(p)
        elif is_near_black(p):
            darks.append(p)
        else:
            colors.append(p)
    return whites, darks, colors


def load_pigments(path: Union[str, Path]) -> Tuple[Pigment, ...]:
    """
    Load a pigment catalog from a JSON file.

    The file holds a list of objects with 'name', 'hex' and optional 'type'
    and 'rgb' keys. When 'rgb' is missing it is derived from 'hex'.

    Args:
        path (str | Path): Path to the JSON catalog.

    Returns:
        tuple[Pigment, ...]: The catalog in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the JSON is malformed, empty, or has duplicate names.
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            entries = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Error: {path} is not valid JSON: {e}") from e

    if not isinstance(entries, list) or not entries:
        raise ValueError(f"Error: {path} must contain a non-empty JSON list of pigments.")

    pigments = []
    seen_names = set()
    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict) or "name" not in entry or "hex" not in entry:
            raise ValueError(f"Error: pigment #{idx} in {path} needs at least 'name' and 'hex'.")
        name = str(entry["name"])
        if name in seen_names:
            raise ValueError(f"Error: duplicate pigment name '{name}' in {path}.")
        seen_names.add(name)

        hex_rgb = hex_to_rgb(entry["hex"])
        if hex_rgb is None:
            raise ValueError(f"Error: pigment '{name}' has invalid hex color '{entry['hex']}'.")

        rgb = entry.get("rgb")
        if rgb is None:
            rgb = hex_rgb
        elif isinstance(rgb, dict):
            rgb = (rgb.get("r"), rgb.get("g"), rgb.get("b"))
        elif not isinstance(rgb, list):
            raise ValueError(f"Error: pigment '{name}' has invalid rgb {rgb!r}; expected [r, g, b] or {{r, g, b}}.")

        pigments.append(Pigment(name, rgb_to_hex(hex_rgb), tuple(rgb), entry.get("type", "Primary")))

    return tuple(pigments)
