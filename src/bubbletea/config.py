"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents hardcoded paths scattered throughout the code.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets (liquid catalog JSON) when the app is frozen into an .exe.
3. Dimensions: The cup and liquid column sizes are shared by the scene
   builders and the application window.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    DEFAULT_LIQUIDS_PATH (str): Absolute path to the default liquid catalog.
    LOG_LEVEL (str): Level name from BUBBLETEA_LOG_LEVEL, INFO by default.
    LOG_FILE (str): Log file path from BUBBLETEA_LOG_FILE, empty for none.
    CupDimensions: Geometry constants of the cup.
"""
import sys
import os
from dataclasses import dataclass
from pathlib import Path


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: resolve relative to this file
    # config.py is in src/bubbletea/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


@dataclass(frozen=True)
class CupDimensions:
    """Scene units of the glass and the liquid column inside it."""
    glass_radius: float = 0.6
    base_height: float = 0.2
    tube_inner_radius: float = 0.52
    tube_height: float = 2.0
    tube_center_y: float = 1.1

    liquid_radius: float = 0.5
    # Column height per unit of liquid amount
    liquid_height_scale: float = 1.9
    liquid_base_y: float = 0.12

    gradient_resolution: int = 512
    angular_resolution: int = 64


# Global Constants
ASSETS_PATH: str = get_resource_path("assets")
DEFAULT_LIQUIDS_PATH: str = os.path.join(ASSETS_PATH, "liquids_default.json")
DEFAULT_DIMENSIONS: CupDimensions = CupDimensions()

# Logging (see logging_config.py)
LOG_LEVEL: str = os.environ.get("BUBBLETEA_LOG_LEVEL", "INFO")
LOG_FILE: str = os.environ.get("BUBBLETEA_LOG_FILE", "")
