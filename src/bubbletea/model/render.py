"""
Render Description
==================
The value handed from the model to the 3D scene: total volume, gradient
stops bottom to top, and the cap colors. It is a snapshot, the scene never
sees the layers themselves.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Tuple

from bubbletea.model.colors import CLEAR, Color
from bubbletea.model.layers import LiquidLayer

# Totals at or below this are drawn as an empty cup
EMPTY_TOLERANCE: float = 1e-9


@dataclass(frozen=True)
class GradientStop:
    color: Color
    # Cumulative fraction of the total volume at the top edge of the layer
    location: float


@dataclass(frozen=True)
class RenderDescription:
    total_amount: float = 0.0
    stops: Tuple[GradientStop, ...] = field(default_factory=tuple)
    top_color: Color = CLEAR
    bottom_color: Color = CLEAR

    @property
    def is_empty(self) -> bool:
        return self.total_amount <= EMPTY_TOLERANCE

    @property
    def colors(self) -> Tuple[Color, ...]:
        return tuple(stop.color for stop in self.stops)

    @property
    def locations(self) -> Tuple[float, ...]:
        return tuple(stop.location for stop in self.stops)

    def height(self, scale: float) -> float:
        """Height of the liquid column for a given height per unit amount."""
        return max(self.total_amount, 0.0) * scale


def describe_layers(layers: Iterable[LiquidLayer]) -> RenderDescription:
    """Project an ordered (bottom to top) sequence of layers into a RenderDescription."""
    layers = list(layers)
    total = sum(layer.amount for layer in layers)

    if not layers or total <= 0.0:
        return RenderDescription(total_amount=max(total, 0.0))

    stops = []
    running = 0.0
    for layer in layers:
        running += layer.amount
        stops.append(GradientStop(color=layer.color, location=min(max(running / total, 0.0), 1.0)))

    return RenderDescription(
        total_amount=total,
        stops=tuple(stops),
        top_color=layers[-1].color,
        bottom_color=layers[0].color,
    )
