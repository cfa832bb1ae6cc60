"""
Color Math
==========
RGBA colors and the weighted mixing rule used for liquid mixtures.

Mixing uses a per-channel weighted quadratic mean instead of a linear
average, so bright components dominate the way they do when real liquids
are stirred together:

    channel = sqrt( sum(w_i * c_i**2) / sum(w_i) )
"""
from __future__ import annotations

from dataclasses import dataclass, astuple
import math
from typing import Iterable, Tuple, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class Color:
    """An RGBA color with all channels in [0, 1]."""
    red: float
    green: float
    blue: float
    alpha: float = 1.0

    def __post_init__(self) -> None:
        for name, value in zip(("red", "green", "blue", "alpha"), astuple(self)):
            if not math.isfinite(value) or not 0.0 <= value <= 1.0:
                raise ValueError(f"Color channel '{name}' must be in [0, 1], got {value}.")

    @staticmethod
    def from_hex(value: str) -> Color:
        """Parse '#RRGGBB' or '#RRGGBBAA'."""
        digits = value.lstrip("#")
        if len(digits) not in (6, 8):
            raise ValueError(f"Invalid hex color: '{value}'.")
        try:
            channels = [int(digits[i:i + 2], 16) / 255.0 for i in range(0, len(digits), 2)]
        except ValueError:
            raise ValueError(f"Invalid hex color: '{value}'.")
        return Color(*channels)

    def to_hex(self) -> str:
        return "#" + "".join(f"{round(c * 255):02X}" for c in self.as_tuple())

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.red, self.green, self.blue, self.alpha)

    def as_rgba_bytes(self) -> Tuple[int, int, int, int]:
        """Channels scaled to 0..255, as VTK expects for 'rgba' scalars."""
        return tuple(int(round(c * 255)) for c in self.as_tuple())

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array(self.as_tuple(), dtype=np.float64)


CLEAR = Color(0.0, 0.0, 0.0, 0.0)


def mix_colors(weighted: Iterable[Tuple[Color, float]]) -> Color:
    """
    Weighted quadratic mean of colors, channel by channel.

    Args:
        weighted: (color, weight) pairs. Weights are relative and need not sum to 1.

    Returns:
        The mixed color, clamped to [0, 1].

    Raises:
        ValueError: If there are no pairs, a weight is negative, or the total weight is zero.
    """
    pairs = list(weighted)
    if not pairs:
        raise ValueError("Cannot mix an empty set of colors.")

    weights = np.array([w for _, w in pairs], dtype=np.float64)
    if np.any(weights < 0.0) or not np.all(np.isfinite(weights)):
        raise ValueError(f"Mixing weights must be finite and non-negative, got {weights.tolist()}.")

    total = weights.sum()
    if total <= 0.0:
        raise ValueError("Cannot mix colors with zero total weight.")

    # (N, 4) matrix of channels
    channels = np.vstack([c.to_array() for c, _ in pairs])
    mixed = np.sqrt((weights[:, None] * channels ** 2).sum(axis=0) / total)
    mixed = np.clip(mixed, 0.0, 1.0)

    return Color(*(float(v) for v in mixed))
