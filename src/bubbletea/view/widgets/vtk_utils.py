"""
VTK and Geometry Utilities
Helper functions for building the cup meshes and coloring the liquid column.
"""
import numpy as np
import numpy.typing as npt
import pyvista as pv

import logging

from bubbletea.config import CupDimensions
from bubbletea.model.colors import Color
from bubbletea.model.render import RenderDescription

logger = logging.getLogger(__name__)

UP = (0.0, 1.0, 0.0)


class VtkUtils:
    @staticmethod
    def build_glass_mesh(dims: CupDimensions) -> pv.PolyData:
        """
        Glass = solid base disc + open tube on top of it, merged into one surface.
        """
        base = pv.Cylinder(
            center=(0.0, 0.0, 0.0),
            direction=UP,
            radius=dims.glass_radius,
            height=dims.base_height,
            resolution=dims.angular_resolution,
        )

        # Two radii -> structured shell between inner and outer wall
        tube = pv.CylinderStructured(
            radius=np.array([dims.tube_inner_radius, dims.glass_radius]),
            height=dims.tube_height,
            center=(0.0, dims.tube_center_y, 0.0),
            direction=UP,
            theta_resolution=dims.angular_resolution,
            z_resolution=2,
        ).extract_surface()

        return base.merge(tube).extract_surface().triangulate()

    @staticmethod
    def sample_gradient(
        description: RenderDescription,
        fractions: npt.NDArray[np.float64]
    ) -> npt.NDArray[np.float64]:
        """
        Colors of a linear gradient at the given fractions (0 = bottom, 1 = top).

        Each stop sits at the top edge of its layer. Between stops the color is
        interpolated, outside the first/last stop the end colors are extended.

        Returns:
            (N, 4) array of RGBA values in [0, 1]. Fully transparent if there are no stops.
        """
        fractions = np.clip(np.asarray(fractions, dtype=np.float64).ravel(), 0.0, 1.0)
        if not description.stops:
            return np.zeros((fractions.size, 4), dtype=np.float64)

        locations = np.array(description.locations, dtype=np.float64)
        colors = np.vstack([c.to_array() for c in description.colors])

        # np.interp holds the end values outside [locations[0], locations[-1]]
        return np.column_stack([
            np.interp(fractions, locations, colors[:, channel])
            for channel in range(4)
        ])

    def build_liquid_column(self, description: RenderDescription, dims: CupDimensions) -> pv.PolyData:
        """
        Side wall of the liquid, colored per point with an 'rgba' array.
        """
        height = description.height(dims.liquid_height_scale)
        if description.is_empty or height <= 0.0:
            return pv.PolyData()

        column = pv.CylinderStructured(
            radius=dims.liquid_radius,
            height=height,
            center=(0.0, dims.liquid_base_y + height / 2.0, 0.0),
            direction=UP,
            theta_resolution=dims.angular_resolution,
            z_resolution=dims.gradient_resolution,
        ).extract_surface()

        fractions = (column.points[:, 1] - dims.liquid_base_y) / height
        rgba = self.sample_gradient(description, fractions)
        column.point_data["rgba"] = np.round(rgba * 255.0).astype(np.uint8)

        logger.debug(f"Built liquid column: height {height:.3f}, {len(description.stops)} stops")
        return column

    @staticmethod
    def build_cap(color: Color, y: float, dims: CupDimensions) -> pv.PolyData:
        """Flat disc closing the liquid column at height y."""
        cap = pv.Disc(
            center=(0.0, y, 0.0),
            inner=0.0,
            outer=dims.liquid_radius,
            normal=UP,
            c_res=dims.angular_resolution,
        )
        cap.point_data["rgba"] = np.tile(np.array(color.as_rgba_bytes(), dtype=np.uint8), (cap.n_points, 1))
        return cap
