"""Shared pytest configuration and fixtures for the camera preview test suite."""

import sys
from pathlib import Path

import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from camera_preview.models import Facing, Rect, Resolution, SensorInfo  # noqa: E402


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "hardware: mark test as requiring a physical camera"
    )


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--run-hardware",
        action="store_true",
        default=False,
        help="Run tests that require a physical camera",
    )


def pytest_collection_modifyitems(config, items):
    """Skip hardware tests unless --run-hardware is specified."""
    if config.getoption("--run-hardware"):
        return

    skip_hardware = pytest.mark.skip(reason="Need --run-hardware option to run")
    for item in items:
        if "hardware" in item.keywords:
            item.add_marker(skip_hardware)


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def supported_sizes():
    """Preview sizes in the order a sensor typically reports them."""
    return (Resolution(640, 480), Resolution(1280, 720), Resolution(1920, 1080))


@pytest.fixture
def back_sensor(supported_sizes):
    return SensorInfo(Facing.BACK, 90, supported_sizes)


@pytest.fixture
def front_sensor(supported_sizes):
    return SensorInfo(Facing.FRONT, 270, supported_sizes)


@pytest.fixture
def bounds():
    """An 800x600 preview laid out at an offset inside its parent."""
    return Rect(40, 20, 840, 620)
