"""Recoverable preview geometry errors.

None of these are fatal: the host retries after its next state update
(new layout pass, new sensor reading, etc).
"""


class PreviewError(ValueError):
    """Base class for preview geometry errors."""


class NoMatchingResolution(PreviewError):
    """No supported preview size fits the surface. Keep the previous size."""

    def __init__(self, surface_width, surface_height):
        super().__init__(f"No suitable preview size for a {surface_width}x{surface_height} surface")
        self.surface_width = surface_width
        self.surface_height = surface_height


class DegenerateBounds(PreviewError):
    """Area selection was requested before the preview had valid layout bounds.

    Also raised when no camera is attached: without a sensor there is no
    orientation or facing to map the bounds with.
    """


class UnclassifiedRotation(PreviewError):
    """An orientation reading fell between the rotation acceptance windows."""

    def __init__(self, degrees):
        super().__init__(f"Orientation {degrees} is not near a right angle")
        self.degrees = degrees
