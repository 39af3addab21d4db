from typing import List, Union
from pathlib import Path

import numpy as np
import typer # for typer.echo
from PIL import Image
from sklearn.utils import check_random_state

from paint.colors import rgb_to_hex

DEFAULT_MAX_ITERATIONS = 15
DEFAULT_TARGET_SAMPLE = 4000
FALLBACK_PALETTE = ["#000000"]


def _as_byte_array(pixels) -> np.ndarray:
    if isinstance(pixels, (bytes, bytearray, memoryview)):
        return np.frombuffer(pixels, dtype=np.uint8)
    return np.asarray(pixels, dtype=np.uint8).reshape(-1)


def compute_sample_step(total_pixels: int, target_sample: int = DEFAULT_TARGET_SAMPLE) -> int:
    """Pixel stride that leaves roughly `target_sample` pixels to cluster."""
    if target_sample < 1:
        raise ValueError(f"target_sample must be >= 1, got {target_sample}.")
    return max(1, int(total_pixels) // int(target_sample))


def kmeans_clustering(
    pixels,
    k: int,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    sample_step: int = 1,
    seed=None,
) -> List[str]:
    """
    Reduce an RGBA pixel buffer to `k` representative colors with k-means.

    Args:
        pixels (bytes | bytearray | memoryview | np.ndarray): Flat RGBA data,
            4 bytes per pixel, row-major. Alpha is ignored.
        k (int): Number of clusters (colors) to find.
        max_iterations (int): Upper bound on assignment/update passes.
        sample_step (int): Cluster every `sample_step`-th pixel only.
        seed (None | int | np.random.RandomState): Source for the initial
            centroid picks. None uses numpy's global random state.

    Returns:
        List[str]: `k` uppercase '#RRGGBB' strings in centroid order. Colors
        may repeat when clusters collapse onto the same value. A buffer
        holding less than one pixel gives ['#000000'].

    Note:
        A centroid that attracts no pixels in a pass stays where it was; it is
        not re-seeded. Such a centroid can stay stranded on an outlier (or on
        a pixel skipped by sampling) for the rest of the run.
    """
    data = _as_byte_array(pixels)
    if data.size < 4:
        return list(FALLBACK_PALETTE)
    if k < 1:
        raise ValueError(f"k must be >= 1, got {k}.")
    if max_iterations < 0:
        raise ValueError(f"max_iterations must be >= 0, got {max_iterations}.")
    if sample_step < 1:
        raise ValueError(f"sample_step must be >= 1, got {sample_step}.")

    num_pixels = data.size // 4
    rgb = data[: num_pixels * 4].reshape(-1, 4)[:, :3].astype(np.int64)

    # Initial centroids come from the whole image, not just the sampled pixels
    random_state = check_random_state(seed)
    init_idx = random_state.randint(0, num_pixels, size=k)
    centroids = rgb[init_idx].copy()

    samples = rgb[::sample_step]
    dists = np.empty((samples.shape[0], k), dtype=np.int64)

    for _ in range(max_iterations):
        for c in range(k):
            diff = samples - centroids[c]
            dists[:, c] = (diff * diff).sum(axis=1)
        labels = dists.argmin(axis=1)  # first minimum wins ties

        counts = np.bincount(labels, minlength=k)
        sums = np.zeros((k, 3), dtype=np.int64)
        np.add.at(sums, labels, samples)

        filled = counts > 0
        updated = centroids.copy()
        updated[filled] = sums[filled] // counts[filled, None]

        converged = bool(np.all(np.abs(updated - centroids) <= 1))
        centroids = updated
        if converged:
            break

    return [rgb_to_hex(c.tolist()) for c in centroids]


def extract_pixels(image: Image.Image) -> bytes:
    """Return the image's pixels as flat RGBA bytes."""
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return image.tobytes()


def generate_palette(
    image: Image.Image,
    color_count: int = 5,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    target_sample: int = DEFAULT_TARGET_SAMPLE,
    seed=None,
    verbose: bool = False,
) -> List[str]:
    """
    Extract a `color_count` palette from a PIL image.

    Large images are sub-sampled so that roughly `target_sample` pixels are
    clustered. Initial centroids are still drawn from the full image.

    Args:
        image (PIL.Image.Image): Source image, any mode.
        color_count (int): Number of palette colors.
        max_iterations (int): k-means iteration cap.
        target_sample (int): Approximate number of pixels to cluster.
        seed (None | int | np.random.RandomState): Centroid initialization source.
        verbose (bool): Echo progress information.

    Returns:
        List[str]: Palette as uppercase '#RRGGBB' strings.
    """
    pixels = extract_pixels(image)
    total_pixels = len(pixels) // 4
    step = compute_sample_step(total_pixels, target_sample)

    if verbose:
        typer.echo(f"Extracting {color_count} colors from {image.width}x{image.height} image "
                   f"(sample step {step}, ~{total_pixels // step} pixels).")

    palette = kmeans_clustering(pixels, color_count, max_iterations=max_iterations, sample_step=step, seed=seed)

    if verbose:
        typer.echo(f"K-Means result: {', '.join(palette)}")
    return palette


def extract_palette_from_image(
    path: Union[str, Path],
    color_count: int = 5,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    target_sample: int = DEFAULT_TARGET_SAMPLE,
    seed=None,
    verbose: bool = False,
) -> List[str]:
    """
    Open an image file and extract its palette.

    Raises:
        FileNotFoundError: If `path` does not exist.
        PIL.UnidentifiedImageError: If the file is not a readable image.
    """
    with Image.open(path) as image:
        image.load()
        return generate_palette(
            image,
            color_count=color_count,
            max_iterations=max_iterations,
            target_sample=target_sample,
            seed=seed,
            verbose=verbose,
        )
