"""Pruned Monte-Carlo influence maximization."""

from pmcim.influence import (
    DIST_ATTR,
    BetaInfluence,
    InfluenceDistribution,
    Sampler,
    SingleInfluence,
)
from pmcim.evaluators.pmc import PMCConfig, PMCEvaluator

__version__ = "0.1.0"
