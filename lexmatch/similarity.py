from __future__ import annotations

"""Cosine similarity over sparse weighted vectors."""

import numpy as np

from .weighting import Vector


def magnitude(vector: Vector) -> float:
    """Euclidean norm of a sparse vector over its own keys."""
    if not vector:
        return 0.0
    values = np.fromiter(vector.values(), dtype="float64", count=len(vector))
    return float(np.linalg.norm(values))


def cosine_similarity(a: Vector, b: Vector) -> float:
    """
    Cosine of the angle between two non-negative sparse vectors.

    Missing keys contribute 0 to the dot product.  Returns exactly 0.0
    when either vector has zero magnitude.  Shared keys are visited in
    sorted order so ``cosine_similarity(a, b) == cosine_similarity(b, a)``
    holds bit for bit.
    """
    norm_a = magnitude(a)
    norm_b = magnitude(b)
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    shared = sorted(a.keys() & b.keys())
    if not shared:
        return 0.0
    left = np.array([a[k] for k in shared], dtype="float64")
    right = np.array([b[k] for k in shared], dtype="float64")
    dot = float(np.dot(left, right))
    # clip float drift just outside [0, 1]
    return float(np.clip(dot / (norm_a * norm_b), 0.0, 1.0))
