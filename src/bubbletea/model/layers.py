"""
Liquid Layers
=============
One contiguous slice of liquid inside a cup: a fixed mixture of liquid
types, a volume and the color derived from the mixture.

The mixture never changes after construction, so the color is computed
once in __post_init__ and kept for the lifetime of the layer.
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
import logging
import math
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional

from bubbletea.model.colors import Color, mix_colors
from bubbletea.model.liquids import LiquidType, Mixture, mixture_total, validate_mixture

logger = logging.getLogger(__name__)


@dataclass
class LiquidLayer:
    mixture: Mapping[LiquidType, float]
    amount: float
    color: Color = field(init=False)

    def __post_init__(self) -> None:
        validate_mixture(self.mixture)
        if not math.isfinite(self.amount) or self.amount < 0.0:
            raise ValueError(f"Layer amount must be finite and >= 0, got {self.amount}.")

        # Read-only view over a private copy
        self.mixture = MappingProxyType(dict(self.mixture))
        self.color = mixture_color(self.mixture)

    @classmethod
    def pure(cls, liquid: LiquidType, amount: float) -> LiquidLayer:
        return cls({liquid: 1.0}, amount)

    @property
    def type(self) -> Optional[LiquidType]:
        """The liquid type of a pure layer, None for a mixture."""
        if len(self.mixture) == 1:
            return next(iter(self.mixture))
        return None

    @property
    def total_weight(self) -> float:
        return mixture_total(self.mixture)

    def has_mixture(self, mixture: Mixture) -> bool:
        """Strict equality: same types with bit-equal weights."""
        return dict(self.mixture) == dict(mixture)

    def copy(self) -> LiquidLayer:
        # Shallow copy keeps the already derived color
        return copy.copy(self)


def mixture_color(mixture: Mixture) -> Color:
    """Color of a mixture. A pure mixture reports its type's color unchanged."""
    validate_mixture(mixture)
    if len(mixture) == 1:
        return next(iter(mixture)).color
    return mix_colors((liquid.color, weight) for liquid, weight in mixture.items())


def blend_layers(layers: Iterable[LiquidLayer]) -> Optional[LiquidLayer]:
    """
    Homogenize layers into one.

    Each layer contributes its own normalized proportions scaled by its amount,
    so layers whose weights do not sum to 1 are handled correctly. The
    resulting weights are normalized to sum to 1.

    Returns:
        The blended layer, or None when there is nothing to blend.
    """
    layers = list(layers)
    if not layers:
        return None

    total_amount = sum(layer.amount for layer in layers)
    weights: Dict[LiquidType, float] = {}

    for layer in layers:
        layer_total = layer.total_weight
        for liquid, weight in layer.mixture.items():
            weights[liquid] = weights.get(liquid, 0.0) + (weight / layer_total) * layer.amount

    weight_sum = sum(weights.values())
    if weight_sum <= 0.0:
        # Only zero-amount layers, keep the plain proportions instead
        weights = {}
        for layer in layers:
            for liquid, weight in layer.mixture.items():
                weights[liquid] = weights.get(liquid, 0.0) + weight / layer.total_weight
        weight_sum = sum(weights.values())

    mixture = {liquid: weight / weight_sum for liquid, weight in weights.items()}
    logger.debug(f"Blended {len(layers)} layers into {len(mixture)} liquid types, amount {total_amount}")
    return LiquidLayer(mixture, total_amount)
