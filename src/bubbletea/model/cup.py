"""
Cup Contents (Data Model)
=========================
The ordered stack of liquid layers inside one cup.

Why is this file needed?
------------------------
1. State Management: It owns the layers of a cup, bottom (index 0) to top.
2. Operations: Pouring in merges with or pushes onto the top, pouring out
   drains from the top down, blending collapses everything into one layer.
3. Decoupling: The scene never touches the layers. It checks
   'needs_update' once per refresh and pulls a RenderDescription, which
   clears the flag.

Classes:
    CupLiquids: The mutable stack with its dirty flag.
"""
from __future__ import annotations

import logging
import math
from typing import List, Tuple, Union

from bubbletea.model.layers import LiquidLayer, blend_layers
from bubbletea.model.liquids import LiquidType, Mixture, as_mixture
from bubbletea.model.render import EMPTY_TOLERANCE, RenderDescription, describe_layers

logger = logging.getLogger(__name__)


class CupLiquids:
    """
    Layered liquid contents of a single cup.
    Single-threaded: mutate and project from the same (GUI) thread.
    """
    def __init__(self) -> None:
        self._layers: List[LiquidLayer] = []
        self._needs_update: bool = True

    @property
    def layers(self) -> Tuple[LiquidLayer, ...]:
        """Copies of the layers, bottom to top."""
        return tuple(layer.copy() for layer in self._layers)

    @property
    def needs_update(self) -> bool:
        return self._needs_update

    @property
    def total_amount(self) -> float:
        return sum(layer.amount for layer in self._layers)

    @property
    def is_empty(self) -> bool:
        return not self._layers

    def __len__(self) -> int:
        return len(self._layers)

    def add(self, liquid: Union[LiquidType, Mixture], amount: float) -> None:
        """
        Pour liquid on top of the stack.

        Args:
            liquid: A single liquid type or a mixture {type: weight}.
            amount: Volume to add, must be > 0.

        Raises:
            ValueError: If the amount is not positive or the mixture is invalid.
        """
        if not math.isfinite(amount) or amount <= 0.0:
            raise ValueError(f"Added amount must be positive, got {amount}.")

        mixture = as_mixture(liquid)
        top = self._layers[-1] if self._layers else None

        if top is not None and self._merges_with(top, liquid, mixture):
            top.amount += amount
            logger.debug(f"Merged {amount} into top layer, now {top.amount}")
        else:
            self._layers.append(LiquidLayer(mixture, amount))
            logger.debug(f"Pushed new layer of {amount}, {len(self._layers)} layers in cup")

        self._needs_update = True

    @staticmethod
    def _merges_with(top: LiquidLayer, liquid: Union[LiquidType, Mixture], mixture: Mixture) -> bool:
        if isinstance(liquid, LiquidType):
            # Any pure layer of the same type, whatever its weight
            return top.type == liquid
        return top.has_mixture(mixture)

    def remove_liquid(self, amount: float) -> None:
        """
        Pour liquid out, most recently added first.
        Removing more than the cup holds empties it.

        Raises:
            ValueError: If the amount is negative.
        """
        if math.isnan(amount) or amount < 0.0:
            raise ValueError(f"Removed amount must be >= 0, got {amount}.")

        remaining = amount
        while self._layers and remaining > 0.0:
            top = self._layers[-1]
            if top.amount > remaining:
                top.amount -= remaining
                remaining = 0.0
                # Rounding leftovers of a drained layer
                if top.amount <= EMPTY_TOLERANCE:
                    self._layers.pop()
            else:
                remaining -= top.amount
                self._layers.pop()

        logger.debug(f"Removed up to {amount}, {self.total_amount} left in {len(self._layers)} layers")
        self._needs_update = True

    def clear(self) -> None:
        """Pour everything out."""
        self._layers = []
        self._needs_update = True

    def blend(self) -> None:
        """Stir the whole cup into a single homogeneous layer."""
        blended = blend_layers(self._layers)
        self._layers = [blended] if blended is not None else []
        self._needs_update = True

    def render_description(self) -> RenderDescription:
        """Snapshot for the renderer. Clears the 'needs_update' flag."""
        description = describe_layers(self._layers)
        self._needs_update = False
        return description
