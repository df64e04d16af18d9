"""
Embedding (de)serialization and cosine similarity.

Stored embeddings are raw little-endian float32 sequences with no header,
length prefix or padding, as written by the desktop pipeline.
"""

from collections.abc import Sequence

import numpy as np

# Little-endian IEEE-754 single precision
EMBEDDING_DTYPE = np.dtype("<f4")


def decode_embedding(blob: bytes) -> np.ndarray:
    """
    Decode a stored embedding blob into a float32 vector.

    Args:
        blob: Raw bytes; length must be a multiple of 4

    Returns:
        Vector with ``len(blob) // 4`` components in input order
    """
    return np.frombuffer(blob, dtype=EMBEDDING_DTYPE)


def encode_embedding(vector: Sequence[float]) -> bytes:
    """Encode a vector into the stored blob format."""
    return np.asarray(vector, dtype=EMBEDDING_DTYPE).tobytes()


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity between two vectors.

    Returns 0.0 when the vectors differ in length, are empty, or either has
    zero norm. Callers must read 0.0 as "no signal" in those cases.

    Args:
        a: First vector
        b: Second vector

    Returns:
        Similarity in [-1, 1]
    """
    if len(a) != len(b) or len(a) == 0:
        return 0.0

    vec_a = np.asarray(a, dtype=np.float64)
    vec_b = np.asarray(b, dtype=np.float64)

    denom = np.sqrt(np.dot(vec_a, vec_a)) * np.sqrt(np.dot(vec_b, vec_b))
    if denom == 0:
        return 0.0

    return float(np.clip(np.dot(vec_a, vec_b) / denom, -1.0, 1.0))
