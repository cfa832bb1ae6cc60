"""
Liquid Catalog
==============
Defines the kinds of liquid that can be poured into a cup and the library
that holds them.

Why is this file needed?
------------------------
1. Configuration: Liquid types and their display colors are static data,
   loaded from 'assets/liquids_default.json' (or built-in defaults).
2. Mixtures: A mixture is a plain mapping LiquidType -> relative weight.
   The helpers here validate that mapping before it reaches a layer.
3. Presets: Named recipes (e.g. milk tea) are stored next to the types so
   the UI can offer them as one button.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
import math
import os
from typing import Dict, List, Mapping, Optional, Union, Any

from bubbletea.config import DEFAULT_LIQUIDS_PATH
from bubbletea.model.colors import Color

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LiquidType:
    """A kind of liquid with a fixed display color."""
    name: str
    color: Color
    description: str = field(default="", compare=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "color": self.color.to_hex(),
            "description": self.description,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> LiquidType:
        if "name" not in data or "color" not in data:
            raise ValueError(f"Liquid type needs 'name' and 'color', got keys {sorted(data)}.")
        return LiquidType(
            name=data["name"],
            color=Color.from_hex(data["color"]),
            description=data.get("description", ""),
        )


# Relative weights, not normalized
Mixture = Mapping[LiquidType, float]


def mixture_total(mixture: Mixture) -> float:
    return sum(mixture.values())


def validate_mixture(mixture: Mixture) -> None:
    """
    Check the mixture invariant.

    Raises:
        ValueError: If the mixture is empty, has a negative or non-finite
            weight, or its weights sum to zero.
    """
    if not mixture:
        raise ValueError("A mixture needs at least one liquid type.")

    for liquid, weight in mixture.items():
        if not isinstance(liquid, LiquidType):
            raise ValueError(f"Mixture keys must be LiquidType, got {type(liquid).__name__}.")
        if not math.isfinite(weight) or weight < 0.0:
            raise ValueError(f"Weight of '{liquid.name}' must be finite and >= 0, got {weight}.")

    if mixture_total(mixture) <= 0.0:
        raise ValueError("A mixture must have a positive total weight.")


def as_mixture(liquid: Union[LiquidType, Mixture]) -> Dict[LiquidType, float]:
    """A single liquid type is shorthand for a pure mixture {type: 1.0}."""
    if isinstance(liquid, LiquidType):
        return {liquid: 1.0}
    mixture = {key: float(value) for key, value in liquid.items()}
    validate_mixture(mixture)
    return mixture


@dataclass
class MixturePreset:
    """A named recipe: parts of catalog liquids, e.g. 3 parts tea and 1 part milk."""
    name: str
    parts: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "parts": dict(self.parts)}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> MixturePreset:
        if "name" not in data or not isinstance(data.get("parts", {}), dict):
            raise ValueError(f"Mixture preset needs a 'name' and a 'parts' mapping, got {data!r}.")
        return MixturePreset(name=data["name"], parts=dict(data.get("parts", {})))


class LiquidCatalog:
    """
    Manages the library of liquid types and mixture presets,
    including loading them from JSON files.
    """
    def __init__(self) -> None:
        self.liquids: Dict[str, LiquidType] = {}
        self.presets: Dict[str, MixturePreset] = {}

    @classmethod
    def with_defaults(cls) -> LiquidCatalog:
        catalog = cls()
        catalog._init_defaults()
        return catalog

    def _init_defaults(self) -> None:
        for liquid in (
            LiquidType("Tea", Color.from_hex("#B5651DCC"), "Černý čaj"),
            LiquidType("Milk", Color.from_hex("#FFFDF0F2"), "Plnotučné mléko"),
            LiquidType("Water", Color.from_hex("#C8E6FF59"), "Voda"),
            LiquidType("Oil", Color.from_hex("#E8C547B3"), "Olej"),
            LiquidType("Syrup", Color.from_hex("#7A3B10E6"), "Karamelový sirup"),
            LiquidType("Taro", Color.from_hex("#B39DDBE6"), "Taro"),
        ):
            self.add_liquid(liquid)

        self.add_preset(MixturePreset("Milk Tea", {"Tea": 3.0, "Milk": 1.0}))
        self.add_preset(MixturePreset("Taro Milk", {"Taro": 1.0, "Milk": 1.0}))

    def add_liquid(self, liquid: LiquidType) -> None:
        """Add or replace a liquid type in the catalog."""
        self.liquids[liquid.name] = liquid

    def add_preset(self, preset: MixturePreset) -> None:
        unknown = [name for name in preset.parts if name not in self.liquids]
        if unknown:
            raise ValueError(f"Preset '{preset.name}' uses unknown liquids: {unknown}.")
        self.presets[preset.name] = preset

    def get_type(self, name: str) -> LiquidType:
        try:
            return self.liquids[name]
        except KeyError:
            raise KeyError(f"Unknown liquid type '{name}'.")

    def get_names(self) -> List[str]:
        return list(self.liquids.keys())

    def get_preset(self, name: str) -> Dict[LiquidType, float]:
        """Resolve a preset into a mixture of catalog liquid types."""
        try:
            preset = self.presets[name]
        except KeyError:
            raise KeyError(f"Unknown mixture preset '{name}'.")
        mixture = {self.get_type(liquid): weight for liquid, weight in preset.parts.items()}
        validate_mixture(mixture)
        return mixture

    def get_preset_names(self) -> List[str]:
        return list(self.presets.keys())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "liquids": [liquid.to_dict() for liquid in self.liquids.values()],
            "presets": [preset.to_dict() for preset in self.presets.values()],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> LiquidCatalog:
        catalog = cls()
        for entry in data.get("liquids", []):
            try:
                catalog.add_liquid(LiquidType.from_dict(entry))
            except (ValueError, TypeError, AttributeError) as e:
                logger.error(f"Invalid liquid entry {entry!r}: {e}")
                raise ValueError(f"Invalid liquid entry {entry!r}: {e}") from e
        for entry in data.get("presets", []):
            try:
                catalog.add_preset(MixturePreset.from_dict(entry))
            except (ValueError, TypeError, AttributeError) as e:
                logger.error(f"Invalid preset entry {entry!r}: {e}")
                raise ValueError(f"Invalid preset entry {entry!r}: {e}") from e
        return catalog

    @classmethod
    def load(cls, filepath: Optional[str] = None) -> LiquidCatalog:
        """
        Load a catalog from JSON. Falls back to built-in defaults
        when the file does not exist.

        Raises:
            ValueError: If the file exists but is not a valid catalog.
        """
        if filepath is None:
            filepath = DEFAULT_LIQUIDS_PATH

        if not os.path.exists(filepath):
            logger.warning(f"Liquid catalog not found at {filepath}, using built-in defaults.")
            return cls.with_defaults()

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Liquid catalog '{filepath}' is not valid JSON: {e}")

        catalog = cls.from_dict(data)
        logger.info(f"Loaded {len(catalog.liquids)} liquids and {len(catalog.presets)} presets from {filepath}")
        return catalog

    def save(self, filepath: str) -> None:
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)
        logger.info(f"Saved liquid catalog to {filepath}")
