# src/pmcim/influence.py

"""
Influence distributions and the sampler that draws from them.

Every edge of an influence graph stores an InfluenceDistribution under
the edge attribute DIST_ATTR. A Sampler carries the sampling mode and
turns a distribution into one success probability for one edge in one
round. Distributions never own a random source: when a mode needs
randomness (Thompson sampling) the caller passes its rng in.
"""

from typing import Literal, Optional, get_args
import math
import random


DIST_ATTR = "dist"

SampleMode = Literal["expected", "ucb", "thompson"]
SAMPLE_MODES = get_args(SampleMode)


def _check_mode(mode: str) -> None:
    if mode not in SAMPLE_MODES:
        raise ValueError(f"Unknown sample mode={mode}, expected one of {SAMPLE_MODES}.")


class InfluenceDistribution:
    """
    Base class for per-edge influence probabilities.

    Subclasses implement sample(mode, rng) and return a probability in [0, 1].
    """

    def sample(self, mode: SampleMode = "expected", rng: Optional[random.Random] = None) -> float:
        raise NotImplementedError

    def mean(self) -> float:
        return self.sample("expected")


class SingleInfluence(InfluenceDistribution):
    """A known, fixed edge probability. The mode is ignored."""

    def __init__(self, prob: float):
        if prob < 0.0 or prob > 1.0:
            raise ValueError(f"prob must be in [0, 1], got {prob}.")
        self.prob = float(prob)

    def sample(self, mode: SampleMode = "expected", rng: Optional[random.Random] = None) -> float:
        _check_mode(mode)
        return self.prob

    def __repr__(self) -> str:
        return f"SingleInfluence({self.prob})"


class BetaInfluence(InfluenceDistribution):
    """
    Beta(alpha, beta) belief over an unknown edge probability.

    Modes:
        expected: posterior mean alpha / (alpha + beta)
        ucb:      mean + ucb_scale * std, clamped to 1
        thompson: one draw from the posterior using the caller's rng
    """

    def __init__(self, alpha: float, beta: float, ucb_scale: float = 1.0):
        if alpha <= 0.0 or beta <= 0.0:
            raise ValueError(f"alpha and beta must be positive, got {alpha}, {beta}.")
        self.alpha = float(alpha)
        self.beta = float(beta)
        self.ucb_scale = float(ucb_scale)

    def variance(self) -> float:
        total = self.alpha + self.beta
        return (self.alpha * self.beta) / (total * total * (total + 1.0))

    def sample(self, mode: SampleMode = "expected", rng: Optional[random.Random] = None) -> float:
        _check_mode(mode)
        mean = self.alpha / (self.alpha + self.beta)

        if mode == "expected":
            return mean

        if mode == "ucb":
            return min(1.0, mean + self.ucb_scale * math.sqrt(self.variance()))

        if rng is None:
            rng = random.Random()
        return rng.betavariate(self.alpha, self.beta)

    def update(self, successes: int = 0, failures: int = 0) -> None:
        """Add observed activation attempts to the posterior."""
        if successes < 0 or failures < 0:
            raise ValueError("successes and failures must be non-negative.")
        self.alpha += successes
        self.beta += failures

    def __repr__(self) -> str:
        return f"BetaInfluence(alpha={self.alpha}, beta={self.beta})"


class Sampler:
    """
    Draws one success probability per edge per round.

    The mode is opaque to the evaluators; it is only forwarded to
    InfluenceDistribution.sample.
    """

    def __init__(self, mode: SampleMode = "expected"):
        _check_mode(mode)
        self.mode = mode

    def draw(self, dist: InfluenceDistribution, rng: Optional[random.Random] = None) -> float:
        return dist.sample(self.mode, rng)

    def __repr__(self) -> str:
        return f"Sampler(mode={self.mode!r})"
