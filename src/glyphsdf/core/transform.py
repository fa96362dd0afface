"""Exact squared Euclidean distance transforms.

This module implements the linear-time distance transform of Felzenszwalb &
Huttenlocher ("Distance Transforms of Sampled Functions", Theory of Computing,
2012). The 1D transform computes the lower envelope of the parabolas rooted
at every sample; the 2D transform applies it to every column and then to
every row of the result, which is exact because squared Euclidean distance
separates into a sum of per-axis terms.

All functions are pure: inputs are never modified and every call owns its
working buffers.
"""

import math
from collections.abc import Sequence

from glyphsdf.exceptions import InvariantViolationError

# Value for "not a seed". Large enough that it never wins against a real
# squared distance and sqrt(SENTINEL) saturates any radius, but finite so the
# envelope arithmetic stays well defined.
SENTINEL = 1e20


def _transform_line(
    grid: list[float],
    offset: int,
    stride: int,
    n: int,
    f: list[float],
    v: list[int],
    z: list[float],
) -> None:
    """Run the 1D transform in place on one line of ``grid``.

    The line consists of the ``n`` samples ``grid[offset + i * stride]``.
    ``f``, ``v`` and ``z`` are caller-owned scratch buffers holding at least
    ``n``, ``n`` and ``n + 1`` entries; they are overwritten.
    """
    if n == 0:
        return

    seeded = False
    for i in range(n):
        value = grid[offset + i * stride]
        f[i] = value
        if value < SENTINEL:
            seeded = True

    if not seeded:
        for i in range(n):
            grid[offset + i * stride] = SENTINEL
        return

    # Lower envelope: v holds the parabola vertices, z the boundaries
    # between consecutive envelope segments.
    k = 0
    v[0] = 0
    z[0] = -math.inf
    z[1] = math.inf

    for q in range(1, n):
        fq = f[q] + q * q
        while True:
            vk = v[k]
            s = (fq - (f[vk] + vk * vk)) / (2 * q - 2 * vk)
            if s <= z[k] and k > 0:
                k -= 1
            else:
                break
        k += 1
        v[k] = q
        z[k] = s
        z[k + 1] = math.inf

    k = 0
    for q in range(n):
        while z[k + 1] < q:
            k += 1
        vk = v[k]
        grid[offset + q * stride] = (q - vk) * (q - vk) + f[vk]


def distance_transform_1d(f: Sequence[float]) -> list[float]:
    """Compute the 1D squared distance transform of a sampled function.

    For seed/non-seed input (``0`` for seeds, ``SENTINEL`` elsewhere) the
    result is the squared distance to the nearest seed. Any other finite
    non-negative function is accepted too; the result is then
    ``d[i] = min_j((i - j)^2 + f[j])``.

    Args:
        f: Sample values

    Returns:
        New list with the transformed values. Lines without any value below
        ``SENTINEL`` come back as all ``SENTINEL``.

    Examples:
        >>> distance_transform_1d([SENTINEL, 0.0, SENTINEL, SENTINEL])
        [1.0, 0.0, 1.0, 4.0]
    """
    n = len(f)
    grid = [float(value) for value in f]
    _transform_line(grid, 0, 1, n, [0.0] * n, [0] * n, [0.0] * (n + 1))
    return grid


def distance_transform_2d(mask: Sequence[bool], width: int, height: int) -> list[float]:
    """Compute squared distances to the nearest seed cell of a binary mask.

    Columns are transformed first, then rows of the intermediate result.
    A single set of scratch buffers sized to ``max(width, height)`` is reused
    for every line.

    Args:
        mask: Row-major seed flags, ``width * height`` entries
        width: Mask width
        height: Mask height

    Returns:
        Row-major squared distances, same length as ``mask``. If the mask has
        no seeds at all every entry is ``SENTINEL``.

    Raises:
        InvariantViolationError: If the mask length disagrees with the shape
    """
    if len(mask) != width * height:
        raise InvariantViolationError(
            f"Mask has {len(mask)} cells but shape is {width}x{height}"
        )

    grid = [0.0 if seed else SENTINEL for seed in mask]

    size = max(width, height)
    f = [0.0] * size
    v = [0] * size
    z = [0.0] * (size + 1)

    for x in range(width):
        _transform_line(grid, x, width, height, f, v, z)

    for y in range(height):
        _transform_line(grid, y * width, 1, width, f, v, z)

    return grid
