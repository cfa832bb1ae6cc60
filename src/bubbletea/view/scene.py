"""
Cup Scene
=========
Connects cup models to PyVista actors.

Why is this file needed?
------------------------
1. Ownership: The application owns a CupRegistry (id -> CupLiquids). The
   scene only keeps CupHandles, which carry an opaque id and never own the
   model.
2. Refresh: Once per display tick the scene asks every cup whether it
   'needs_update'; only those cups are re-projected and rebuilt.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Dict, Iterator, List, Optional, Tuple
import uuid

import pyvista as pv

from bubbletea.config import CupDimensions, DEFAULT_DIMENSIONS
from bubbletea.model.cup import CupLiquids
from bubbletea.model.render import RenderDescription
from bubbletea.view.widgets.vtk_utils import VtkUtils

logger = logging.getLogger(__name__)

Position = Tuple[float, float, float]


@dataclass(frozen=True)
class CupHandle:
    """Render-facing reference to a cup. Resolve it through a CupRegistry."""
    cup_id: str
    position: Position = (0.0, 0.0, 0.0)
    # Display number, never reused within a registry
    number: int = 0


class CupRegistry:
    """Application-owned lookup table of cup models."""
    def __init__(self) -> None:
        self._cups: Dict[str, CupLiquids] = {}
        self._handles: Dict[str, CupHandle] = {}
        self._created: int = 0

    def create(self, position: Position = (0.0, 0.0, 0.0)) -> CupHandle:
        self._created += 1
        handle = CupHandle(cup_id=uuid.uuid4().hex, position=position, number=self._created)
        self._cups[handle.cup_id] = CupLiquids()
        self._handles[handle.cup_id] = handle
        logger.info(f"Created cup {handle.cup_id[:8]} at {position}")
        return handle

    def get(self, handle: CupHandle) -> Optional[CupLiquids]:
        return self._cups.get(handle.cup_id)

    def remove(self, handle: CupHandle) -> None:
        self._cups.pop(handle.cup_id, None)
        self._handles.pop(handle.cup_id, None)

    def handles(self) -> List[CupHandle]:
        return list(self._handles.values())

    def __len__(self) -> int:
        return len(self._cups)

    def __contains__(self, handle: object) -> bool:
        return isinstance(handle, CupHandle) and handle.cup_id in self._cups

    def __iter__(self) -> Iterator[Tuple[CupHandle, CupLiquids]]:
        for cup_id, handle in self._handles.items():
            yield handle, self._cups[cup_id]


@dataclass
class _CupActors:
    glass: Optional[pv.Actor] = None
    liquid: List[pv.Actor] = field(default_factory=list)


class CupScene:
    """Keeps the actors of every registered cup in sync with its model."""

    # Built once per set of dimensions, shared by all cups
    _glass_meshes: Dict[CupDimensions, pv.PolyData] = {}

    def __init__(
        self,
        plotter: pv.Plotter,
        registry: CupRegistry,
        dims: CupDimensions = DEFAULT_DIMENSIONS
    ) -> None:
        self.plotter = plotter
        self.registry = registry
        self.dims = dims
        self._vtk_utils = VtkUtils()
        self._actors: Dict[str, _CupActors] = {}

    @classmethod
    def glass_mesh(cls, dims: CupDimensions) -> pv.PolyData:
        if dims not in cls._glass_meshes:
            cls._glass_meshes[dims] = VtkUtils.build_glass_mesh(dims)
        return cls._glass_meshes[dims]

    def refresh(self) -> int:
        """
        Rebuild the liquid of every cup whose model changed.

        Returns:
            Number of cups that were redrawn.
        """
        redrawn = 0
        for handle, cup in self.registry:
            actors = self._actors.get(handle.cup_id)
            if actors is None:
                actors = self._add_glass(handle)
            elif not cup.needs_update:
                continue

            self._update_liquid(handle, actors, cup.render_description())
            redrawn += 1

        # Cups removed from the registry behind our back
        live_ids = {handle.cup_id for handle in self.registry.handles()}
        stale = [cup_id for cup_id in self._actors if cup_id not in live_ids]
        for cup_id in stale:
            self._remove_actors(cup_id)

        if redrawn or stale:
            self.plotter.render()
        return redrawn

    def remove_cup(self, handle: CupHandle) -> None:
        self._remove_actors(handle.cup_id)
        self.registry.remove(handle)

    # ------------------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------------------

    def _add_glass(self, handle: CupHandle) -> _CupActors:
        glass = self.glass_mesh(self.dims).translate(handle.position, inplace=False)
        actor = self.plotter.add_mesh(
            glass, color="white", opacity=0.1, lighting=False, name=f"glass-{handle.cup_id}"
        )
        actors = _CupActors(glass=actor)
        self._actors[handle.cup_id] = actors
        return actors

    def _update_liquid(self, handle: CupHandle, actors: _CupActors, description: RenderDescription) -> None:
        for actor in actors.liquid:
            self.plotter.remove_actor(actor)
        actors.liquid = []

        if description.is_empty:
            logger.debug(f"Cup {handle.cup_id[:8]} is empty, liquid hidden.")
            return

        height = description.height(self.dims.liquid_height_scale)
        meshes = [
            self._vtk_utils.build_liquid_column(description, self.dims),
            VtkUtils.build_cap(description.top_color, self.dims.liquid_base_y + height, self.dims),
            VtkUtils.build_cap(description.bottom_color, self.dims.liquid_base_y, self.dims),
        ]
        for part, mesh in zip(("side", "top", "bottom"), meshes):
            mesh.translate(handle.position, inplace=True)
            actors.liquid.append(self.plotter.add_mesh(
                mesh, scalars="rgba", rgba=True, name=f"liquid-{part}-{handle.cup_id}"
            ))

        logger.info(f"Redrew cup {handle.cup_id[:8]}: amount {description.total_amount:.3f}, "
                    f"{len(description.stops)} layers")

    def _remove_actors(self, cup_id: str) -> None:
        actors = self._actors.pop(cup_id, None)
        if actors is None:
            return
        for actor in [actors.glass, *actors.liquid]:
            if actor is not None:
                self.plotter.remove_actor(actor)
