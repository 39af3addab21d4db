"""
Pigment mixing search.

Given a target color, finds the closest mix achievable from a pigment catalog
by checking, in order:

  1. single pigments,
  2. two-pigment ratio mixes,
  3. tints (color + white) and shades (color + black/umber),
  4. three-component tints (white + a 1:1 base of two colors), only while the
     best match so far is still poor.

Candidates are ranked by weighted RGB distance plus a small penalty per
ingredient, so a simpler recipe wins over a marginally closer complex one.
The reported distance is always the raw weighted distance.
"""
import math
import numbers
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from paint.colors import hex_to_rgb, rgb_to_hex, weighted_color_distance
from paint.pigments import UNIVERSAL_PALETTE, Pigment, split_catalog

RATIOS: Tuple[int, ...] = (1, 2, 3, 4, 5, 10)
THREE_COMPONENT_RATIOS: Tuple[int, ...] = (1, 2, 3, 5)

# Three-component tints are only searched while the best raw distance is above this.
THREE_COMPONENT_THRESHOLD = 10.0

COMPLEXITY_PENALTY = 0.5  # score added per ingredient

# Distance cut-offs for the match verdict shown with a recipe
EXCELLENT_MATCH_DISTANCE = 30.0
GOOD_MATCH_DISTANCE = 60.0

Candidate = Tuple[Tuple[float, float, float], str]  # (mixed rgb, recipe)


@dataclass(frozen=True)
class MixResult:
    closest_color: str  # '#RRGGBB'
    recipe: str
    distance: float  # raw weighted distance, lower is better


@dataclass(frozen=True)
class Ingredient:
    name: str
    parts: float
    percentage: float


class BestMix:
    """
    Running best-so-far over a stream of mix candidates.

    Keeps the candidate with the lowest score (distance + penalty per
    ingredient). Ties keep the earlier candidate.
    """

    def __init__(self, target_rgb: Sequence[float]):
        self.target_rgb = target_rgb
        self.score = math.inf
        self.distance = math.inf
        self.mix_rgb: Optional[Tuple[float, float, float]] = None
        self.recipe: Optional[str] = None

    def consider(self, mix_rgb, recipe: str) -> bool:
        distance = weighted_color_distance(self.target_rgb, mix_rgb)
        score = distance + COMPLEXITY_PENALTY * ingredient_count(recipe)
        if score < self.score:
            self.score = score
            self.distance = distance
            self.mix_rgb = tuple(mix_rgb)
            self.recipe = recipe
            return True
        return False

    def consider_all(self, candidates: Iterable[Candidate]) -> "BestMix":
        for mix_rgb, recipe in candidates:
            self.consider(mix_rgb, recipe)
        return self

    def result(self) -> MixResult:
        if self.recipe is None:
            raise ValueError("No mix candidates were evaluated.")
        return MixResult(closest_color=rgb_to_hex(self.mix_rgb), recipe=self.recipe, distance=self.distance)


def _parts(n: int) -> str:
    return "1 part" if n == 1 else f"{n} parts"


def mix_ratio(major: Sequence[float], parts: int, minor: Sequence[float]) -> Tuple[float, float, float]:
    """Average of `parts` parts of `major` with 1 part of `minor`, per channel."""
    return tuple((major[i] * parts + minor[i]) / (parts + 1) for i in range(3))


def single_candidates(palette: Sequence[Pigment]) -> Iterator[Candidate]:
    for p in palette:
        yield p.rgb, f"100% {p.name}"


def pair_candidates(palette: Sequence[Pigment], ratios: Sequence[int] = RATIOS) -> Iterator[Candidate]:
    for i in range(len(palette)):
        for j in range(i + 1, len(palette)):
            p1, p2 = palette[i], palette[j]
            for n in ratios:
                yield mix_ratio(p1.rgb, n, p2.rgb), f"{_parts(n)} {p1.name} + 1 part {p2.name}"
                if n > 1:  # 1:1 is symmetric
                    yield mix_ratio(p2.rgb, n, p1.rgb), f"{_parts(n)} {p2.name} + 1 part {p1.name}"


def tint_and_shade_candidates(palette: Sequence[Pigment], ratios: Sequence[int] = RATIOS) -> Iterator[Candidate]:
    whites, darks, colors = split_catalog(palette)
    for color in colors:
        for white in whites:
            for n in ratios:
                yield mix_ratio(white.rgb, n, color.rgb), f"{_parts(n)} {white.name} + 1 part {color.name}"
    for color in colors:
        for dark in darks:
            for n in ratios:
                yield mix_ratio(color.rgb, n, dark.rgb), f"{_parts(n)} {color.name} + 1 part {dark.name}"


def three_component_candidates(
    palette: Sequence[Pigment], ratios: Sequence[int] = THREE_COMPONENT_RATIOS
) -> Iterator[Candidate]:
    whites, _, colors = split_catalog(palette)
    for i in range(len(colors)):
        for j in range(i + 1, len(colors)):
            a, b = colors[i], colors[j]
            base = mix_ratio(a.rgb, 1, b.rgb)
            for white in whites:
                for n in ratios:
                    yield mix_ratio(white.rgb, n, base), f"{_parts(n)} {white.name} + 1 part ({a.name} + {b.name})"


def calculate_mix(target_rgb: Sequence[int], palette: Sequence[Pigment] = UNIVERSAL_PALETTE) -> MixResult:
    """
    Find the closest achievable mix for a target color.

    Args:
        target_rgb (Sequence[int]): Target (r, g, b), each in 0-255.
        palette (Sequence[Pigment]): Pigment catalog. Must be non-empty. Tints,
            shades and three-component tints need pigments named '... White'
            and '... Black' / '... Umber'; without them only single pigments and
            pair mixes are searched.

    Returns:
        MixResult: Hex of the resulting mix, its recipe and raw weighted distance.

    Raises:
        ValueError: If the palette is empty or the target is not a valid RGB triple.
    """
    if len(target_rgb) != 3 or not all(isinstance(c, numbers.Real) and 0 <= c <= 255 for c in target_rgb):
        raise ValueError(f"Target color must be three channel values in [0, 255], got {tuple(target_rgb)}.")
    if not palette:
        raise ValueError("Pigment palette is empty; at least one pigment is required to compute a mix.")

    best = BestMix(target_rgb)
    best.consider_all(single_candidates(palette))
    best.consider_all(pair_candidates(palette))
    best.consider_all(tint_and_shade_candidates(palette))

    if best.distance > THREE_COMPONENT_THRESHOLD:
        best.consider_all(three_component_candidates(palette))

    return best.result()


def calculate_mix_hex(hex_str: str, palette: Sequence[Pigment] = UNIVERSAL_PALETTE) -> MixResult:
    rgb = hex_to_rgb(hex_str)
    if rgb is None:
        raise ValueError(f"Invalid hex color: '{hex_str}'. Expected six hex digits, e.g. '#8A3324'.")
    return calculate_mix(rgb, palette)


def match_accuracy(distance: float) -> int:
    """Match quality as a 0-100 percentage (100 = exact)."""
    return int(math.floor(max(0.0, 100.0 - distance / 2.0) + 0.5))


def match_quality(distance: float) -> str:
    """Short verdict for a match: 'Excellent match', 'Good match' or 'Approximate match'."""
    if distance < EXCELLENT_MATCH_DISTANCE:
        return "Excellent match"
    if distance < GOOD_MATCH_DISTANCE:
        return "Good match"
    return "Approximate match"


def _split_top_level(recipe: str) -> List[str]:
    components, depth, current = [], 0, []
    for ch in recipe:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        if ch == "+" and depth == 0:
            components.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    components.append("".join(current).strip())
    return components


def ingredient_count(recipe: str) -> int:
    """Number of '+'-joined components in a recipe (a parenthesised base counts each pigment)."""
    if not recipe or not recipe.strip():
        return 0
    return len(recipe.split("+"))


_COMPONENT_RE = re.compile(r"^(?:(?P<pct>\d+(?:\.\d+)?)%|(?P<parts>\d+(?:\.\d+)?) parts?)\s+(?P<name>.+)$")


def parse_recipe(recipe: str) -> List[Ingredient]:
    """
    Break a recipe string into its ingredients.

    '3 parts Titanium White + 1 part (Sap Green + Viridian Green)' gives
    Titanium White (3 parts, 75%), Sap Green (0.5, 12.5%) and Viridian Green
    (0.5, 12.5%).

    Raises:
        ValueError: If a component is not in a recognised recipe format.
    """
    if not recipe or not recipe.strip():
        return []

    weighted: List[Tuple[str, float]] = []
    for component in _split_top_level(recipe):
        match = _COMPONENT_RE.match(component)
        if not match:
            raise ValueError(f"Unrecognised recipe component: '{component}'")
        amount = float(match.group("pct") or match.group("parts"))
        name = match.group("name").strip()
        if name.startswith("(") and name.endswith(")"):
            names = [n.strip() for n in name[1:-1].split("+")]
            weighted.extend((n, amount / len(names)) for n in names)
        else:
            weighted.append((name, amount))

    total = sum(parts for _, parts in weighted)
    return [
        Ingredient(name=name, parts=parts, percentage=(parts / total * 100.0) if total else 0.0)
        for name, parts in weighted
    ]
