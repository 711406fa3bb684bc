"""
Capture parameter stepping for the demo controls.
Each "toggle" moves a setting to its next supported value, wrapping around.
"""

import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from .models import Facing, SensorInfo

logger = logging.getLogger(__name__)

NO_CAMERA = -1


def cycle_mode(supported: Optional[Sequence[str]], current: Optional[str]) -> Optional[str]:
    # An unknown current mode starts over at the first supported one.
    if not supported:
        return None
    try:
        index = list(supported).index(current)
    except ValueError:
        index = -1
    return supported[(index + 1) % len(supported)]


def next_exposure_compensation(current: int, minimum: int, maximum: int) -> int:
    current += 1
    if current > maximum:
        current = minimum
    return current


def next_zoom(current: int, max_zoom: int) -> int:
    if max_zoom <= 0:
        return 0
    return (current + 1) % max_zoom


def find_camera_id(sensors: Sequence[SensorInfo], front: bool) -> int:
    """Index of the first front (or back) facing sensor, or NO_CAMERA."""
    facing = Facing.FRONT if front else Facing.BACK
    for camera_id, sensor in enumerate(sensors):
        if sensor.facing is facing:
            return camera_id
    return NO_CAMERA


@dataclass(frozen=True)
class CameraParameters:
    """Current capture settings and what the camera supports."""

    flash_mode: Optional[str] = None
    supported_flash_modes: Tuple[str, ...] = ()
    color_effect: Optional[str] = None
    supported_color_effects: Tuple[str, ...] = ()
    white_balance: Optional[str] = None
    supported_white_balance: Tuple[str, ...] = ()
    scene_mode: Optional[str] = None
    supported_scene_modes: Tuple[str, ...] = ()
    exposure_compensation: int = 0
    min_exposure_compensation: int = 0
    max_exposure_compensation: int = 0
    zoom: int = 0
    max_zoom: int = 0

    @property
    def zoom_supported(self) -> bool:
        return self.max_zoom > 0

    @property
    def exposure_supported(self) -> bool:
        return self.min_exposure_compensation != 0 or self.max_exposure_compensation != 0

    def toggle_flash(self) -> "CameraParameters":
        return self._toggle("flash_mode", self.supported_flash_modes)

    def toggle_color_effect(self) -> "CameraParameters":
        return self._toggle("color_effect", self.supported_color_effects)

    def toggle_white_balance(self) -> "CameraParameters":
        return self._toggle("white_balance", self.supported_white_balance)

    def toggle_scene(self) -> "CameraParameters":
        return self._toggle("scene_mode", self.supported_scene_modes)

    def toggle_exposure(self) -> "CameraParameters":
        if not self.exposure_supported:
            return self
        value = next_exposure_compensation(
            self.exposure_compensation, self.min_exposure_compensation, self.max_exposure_compensation)
        logger.info(f"exposure_compensation -> {value}")
        return replace(self, exposure_compensation=value)

    def toggle_zoom(self) -> "CameraParameters":
        if not self.zoom_supported:
            return self
        value = next_zoom(self.zoom, self.max_zoom)
        logger.info(f"zoom -> {value}")
        return replace(self, zoom=value)

    def _toggle(self, name, supported):
        if not supported:
            return self
        value = cycle_mode(supported, getattr(self, name))
        logger.info(f"{name} -> {value}")
        return replace(self, **{name: value})
