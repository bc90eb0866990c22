"""Smooth, deterministic value noise in one to four dimensions."""

from __future__ import annotations

import itertools
import math

_MASK = 0xFFFFFFFF
_AXIS_KEYS = (0x9E3779B1, 0x85EBCA77, 0xC2B2AE3D, 0x27D4EB2F)
MAX_DIMENSIONS = len(_AXIS_KEYS)


def _lattice(point: tuple[int, ...]) -> float:
    """A pseudo-random value in 0..1 fixed for each integer lattice point."""
    h = (len(point) * 0x165667B1) & _MASK
    for coordinate, key in zip(point, _AXIS_KEYS):
        h ^= (coordinate * key) & _MASK
        h = ((h << 13) | (h >> 19)) & _MASK
        h = (h * 5 + 0xE6546B64) & _MASK
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & _MASK
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & _MASK
    h ^= h >> 16
    return h / _MASK


def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6 - 15) + 10)


def noise(*args: float) -> float:
    """Smooth noise in 0..1 at a point given by one to four coordinates."""
    if not 1 <= len(args) <= MAX_DIMENSIONS:
        raise TypeError(f"noise takes 1 to {MAX_DIMENSIONS} coordinates, got {len(args)}")
    coords = [float(a) for a in args]
    if not all(math.isfinite(c) for c in coords):
        raise ValueError("noise coordinates must be finite")
    base = [math.floor(c) for c in coords]
    weights = [_fade(c - b) for c, b in zip(coords, base)]
    total = 0.0
    for corner in itertools.product((0, 1), repeat=len(coords)):
        weight = 1.0
        for bit, w in zip(corner, weights):
            weight *= w if bit else 1.0 - w
        if weight:
            total += weight * _lattice(tuple(b + bit for b, bit in zip(base, corner)))
    return min(max(total, 0.0), 1.0)