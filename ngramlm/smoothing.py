"""
Smoothing Methods for N-gram Language Models

This module implements the building blocks the language models combine to
keep every word's probability above zero: additive (Lidstone) smoothing,
fixed-weight linear interpolation, and the unseen-word floor.
"""

import math
from typing import Sequence, Tuple


# Count credited to a word that never appeared in training when it enters
# an interpolated unigram term.
UNSEEN_WORD_FLOOR = 1.0


def floor_unseen(count: float, floor: float = UNSEEN_WORD_FLOOR) -> float:
    """Return ``count``, or ``floor`` if the word was never seen."""
    if count == 0:
        return floor
    return count


class AdditiveSmoothing:
    """
    Additive (Add-δ / Lidstone) Smoothing

    P(w|context) = (count(context, w) + δ) / (count(context) + δ*V)

    Where V is the scale of the denominator, normally the vocabulary size.
    Adding δ to every count reserves probability mass for unseen events.
    """

    def __init__(self, delta: float):
        if delta <= 0:
            raise ValueError(f"delta must be positive, got {delta}")
        self.delta = delta

    def smooth(self, count: float, context_count: float, vocab_size: float) -> float:
        denominator = context_count + self.delta * vocab_size
        if denominator == 0:
            # Empty context and empty scale: the unseen slot is the only outcome.
            return 1.0
        return (count + self.delta) / denominator

    def unseen(self, context_count: float, vocab_size: float) -> float:
        """Probability given to a single word never seen in this context."""
        return self.smooth(0.0, context_count, vocab_size)

    def __repr__(self) -> str:
        return f"AdditiveSmoothing(delta={self.delta})"


class LinearInterpolation:
    """
    Linear Interpolation

    P(w|context) = λ1*P1(w|context) + λ2*P2(w|context) + ...

    The weights are fixed, non-negative and sum to 1, so a mix of proper
    distributions is itself a proper distribution.
    """

    def __init__(self, weights: Sequence[float]):
        weights = tuple(float(w) for w in weights)
        if not weights:
            raise ValueError("at least one interpolation weight is required")
        if any(w < 0 for w in weights):
            raise ValueError(f"interpolation weights must be non-negative, got {weights}")
        if not math.isclose(sum(weights), 1.0, abs_tol=1e-9):
            raise ValueError(f"interpolation weights must sum to 1, got {weights}")
        self.weights: Tuple[float, ...] = weights

    def combine(self, *estimates: float) -> float:
        if len(estimates) != len(self.weights):
            raise ValueError(
                f"expected {len(self.weights)} estimates, got {len(estimates)}"
            )
        return sum(w * p for w, p in zip(self.weights, estimates))

    def __repr__(self) -> str:
        return f"LinearInterpolation(weights={self.weights})"
