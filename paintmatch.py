import typer
from paint import mixer, palette_tools, pigments
from paint.colors import hex_to_rgb, contrast_color
import json
import re
from pathlib import Path
from PIL import UnidentifiedImageError
from typing import Optional, Tuple, Sequence

import rich.traceback

app = typer.Typer(help="Match colors to pigment mixing recipes and extract image palettes.")

PRESETS = {
    "quick": {"num_colors": 5, "sample_target": 1000},
    "balanced": {"num_colors": 8, "sample_target": 4000},
    "detailed": {"num_colors": 12, "sample_target": 16000},
}


def parse_target_color(target: str) -> Optional[Tuple[int, int, int]]:
    """Parse '#RRGGBB', 'RRGGBB' or 'R,G,B'. Returns None if invalid."""
    match = re.fullmatch(r"\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*", target)
    if match:
        rgb = tuple(int(v) for v in match.groups())
        if all(0 <= c <= 255 for c in rgb):
            return rgb  # type: ignore
        return None
    return hex_to_rgb(target)


def load_catalog(pigments_path: Optional[Path]) -> Sequence[pigments.Pigment]:
    if pigments_path is None:
        return pigments.UNIVERSAL_PALETTE
    try:
        catalog = pigments.load_pigments(pigments_path)
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED); raise typer.Exit(code=1)
    typer.echo(f"Using {len(catalog)} pigments from {pigments_path}")
    return catalog


PIGMENTS_OPTION = typer.Option(
    None, "--pigments", help="JSON pigment catalog to use instead of the built-in 12-pigment palette.",
    exists=True, file_okay=True, dir_okay=False, readable=True, resolve_path=True,
)


@app.command("mix")
def mix_cli(
    target: str = typer.Argument(..., help="Target color as '#RRGGBB', 'RRGGBB' or 'R,G,B'.", metavar="TARGET"),
    pigments_path: Optional[Path] = PIGMENTS_OPTION,
):
    """
    Finds the closest pigment mix for a target color.
    """
    target_rgb = parse_target_color(target)
    if target_rgb is None:
        typer.secho(f"Error: Invalid target color '{target}'. Expected '#RRGGBB' or 'R,G,B' (0-255).",
                    fg=typer.colors.RED)
        raise typer.Exit(code=1)

    catalog = load_catalog(pigments_path)
    result = mixer.calculate_mix(target_rgb, catalog)

    typer.echo(f"Target:   {target_rgb}")
    typer.secho(f"Recipe:   {result.recipe}", fg=typer.colors.GREEN)
    typer.echo(f"Mix:      {result.closest_color}")
    typer.echo(f"Distance: {result.distance:.2f}")
    typer.echo(f"Accuracy: {mixer.match_accuracy(result.distance)}% ({mixer.match_quality(result.distance)})")
    for ingredient in mixer.parse_recipe(result.recipe):
        typer.echo(f"  {ingredient.percentage:5.1f}%  {ingredient.name}")


@app.command("palette")
def palette_cli(
    input_path: Path = typer.Argument(
        ...,
        help="Input image file (e.g., image.jpg).",
        metavar="INPUT_FILE",
        exists=True, file_okay=True, dir_okay=False, readable=True, resolve_path=True,
    ),
    preset: Optional[str] = typer.Option(
        None, help="Preset detail level: quick, balanced, detailed."
    ),
    num_colors: Optional[int] = typer.Option(
        None, "--num-colors", min=1, help="Number of palette colors. Default: 5."
    ),
    max_iterations: int = typer.Option(
        palette_tools.DEFAULT_MAX_ITERATIONS, "--max-iterations", min=0, help="K-Means iteration cap. Default: 15."
    ),
    sample_target: Optional[int] = typer.Option(
        None, "--sample-target", min=1, help="Approximate number of pixels to cluster. Default: 4000."
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed", help="Random seed for reproducible centroid initialization."
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the palette as a JSON list."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print progress information."),
):
    """
    Extracts a representative color palette from an image.
    """
    effective_num_colors = num_colors
    effective_sample_target = sample_target

    if preset:
        if preset not in PRESETS:
            typer.secho(f"Error: Unknown preset '{preset}'. Choose from: {', '.join(PRESETS)}.", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        if verbose:
            typer.echo(f"Applying preset: '{preset}'")
        preset_values = PRESETS[preset]
        if effective_num_colors is None: effective_num_colors = preset_values["num_colors"]
        if effective_sample_target is None: effective_sample_target = preset_values["sample_target"]
    if effective_num_colors is None: effective_num_colors = 5
    if effective_sample_target is None: effective_sample_target = palette_tools.DEFAULT_TARGET_SAMPLE

    try:
        palette = palette_tools.extract_palette_from_image(
            input_path,
            color_count=effective_num_colors,
            max_iterations=max_iterations,
            target_sample=effective_sample_target,
            seed=seed,
            verbose=verbose,
        )
    except UnidentifiedImageError as e:
        typer.secho(f"Error opening image {input_path}: {e}", fg=typer.colors.RED); raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(palette))
        return
    for idx, hex_color in enumerate(palette):
        typer.echo(f"{idx:>3}  {hex_color}  label text: {contrast_color(hex_color)}")


@app.command("pigments")
def pigments_cli(pigments_path: Optional[Path] = PIGMENTS_OPTION):
    """
    Lists the pigment catalog and how the mixer uses each pigment.
    """
    catalog = load_catalog(pigments_path)
    for p in catalog:
        if pigments.is_white(p):
            role = "white (tints)"
        elif pigments.is_near_black(p):
            role = "dark (shades)"
        else:
            role = "color"
        typer.echo(f"{p.hex}  {p.name:<24} {p.type:<10} {role}")


if __name__ == "__main__":
    rich.traceback.install(show_locals=False, suppress=[typer, __name__]) # type: ignore
    app()
