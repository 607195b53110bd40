# app/memory/vectors.py

"""
Vector arithmetic used by the page indexer and the retriever.
"""

import math
from typing import List, Sequence

import numpy as np


def average_vectors(vectors: Sequence[Sequence[float]]) -> List[float]:
    """
    Component-wise arithmetic mean.

    A single vector is returned unchanged, no averaging.
    """

    if len(vectors) == 0:
        raise ValueError("Cannot average an empty list of vectors")

    if len(vectors) == 1:
        return list(vectors[0])

    dim = len(vectors[0])

    if any(len(v) != dim for v in vectors):
        raise ValueError("All vectors must share the same dimensionality")

    matrix = np.asarray(vectors, dtype="float64")

    return matrix.mean(axis=0).tolist()


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    dot(a, b) / (||a|| * ||b||)

    Returns NaN when either vector has zero norm.
    """

    va = np.asarray(a, dtype="float64")
    vb = np.asarray(b, dtype="float64")

    if va.shape != vb.shape:
        raise ValueError(
            f"Dimension mismatch: {va.shape[0]} != {vb.shape[0]}"
        )

    denom = float(np.linalg.norm(va)) * float(np.linalg.norm(vb))

    if denom == 0.0:
        return math.nan

    return float(np.dot(va, vb)) / denom
