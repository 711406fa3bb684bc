from typing import Optional, Sequence

from .config import Config
from .errors import NoMatchingResolution
from .models import Resolution


def find_best_matching_preview(preview_sizes: Sequence[Resolution], surface_width, surface_height,
                               landscape: bool) -> Optional[Resolution]:
    """First size whose aspect ratio matches the surface and that fits inside it.

    Preview sizes are enumerated in the sensor's landscape orientation, so a
    portrait surface is matched on its swapped aspect ratio. The fit itself is
    checked against the unswapped surface dimensions.
    """
    if surface_width <= 0 or surface_height <= 0:
        return None

    if landscape:
        surface_aspect = surface_width / surface_height
    else:
        surface_aspect = surface_height / surface_width

    # Every pass compares against the fixed ASPECT_TOLERANCE, so the widening
    # schedule never changes the result.
    delta = Config.ASPECT_TOLERANCE_START
    while delta < Config.ASPECT_TOLERANCE_LIMIT:
        for size in preview_sizes:
            difference = abs(surface_aspect - size.aspect_ratio)
            if (size.width < surface_width and size.height < surface_height
                    and difference < Config.ASPECT_TOLERANCE):
                return size
        delta *= Config.ASPECT_TOLERANCE_STEP
    return None


def find_largest_preview(preview_sizes: Sequence[Resolution], surface_width,
                         surface_height) -> Optional[Resolution]:
    # Sizes are offered largest-first by the sensor, so the first fit is the largest.
    for size in preview_sizes:
        if size.width < surface_width and size.height < surface_height:
            return size
    return None


def select_preview_size(supported: Sequence[Resolution], surface_width,
                        surface_height) -> Optional[Resolution]:
    """
    Pick the preview resolution for a surface: the first aspect-ratio match,
    else the first size that merely fits. Returns None when nothing fits;
    the caller keeps its previous preview size.
    """
    # Hosts lay out at 0x0 before the first real measure.
    if surface_width <= 0 or surface_height <= 0:
        return None

    landscape = surface_width > surface_height
    preview_size = find_best_matching_preview(supported, surface_width, surface_height, landscape)
    if preview_size is None:
        if landscape:
            preview_size = find_largest_preview(supported, surface_width, surface_height)
        else:
            preview_size = find_largest_preview(supported, surface_height, surface_width)
    return preview_size


def require_preview_size(supported: Sequence[Resolution], surface_width, surface_height) -> Resolution:
    preview_size = select_preview_size(supported, surface_width, surface_height)
    if preview_size is None:
        raise NoMatchingResolution(surface_width, surface_height)
    return preview_size
