"""
Pytest configuration and shared fixtures for coilwind tests.
"""

import json
import pytest

from coilwind.enums import WindingMode, WindingPattern
from coilwind.io import WindingRequest


# ─── Raw request dicts ───────────────────────────────────────────────────


@pytest.fixture
def coil_length_data():
    """20 mm pipe on a 500/800 mm drum, 2000 mm bundle width."""
    return _coil_length_data()


@pytest.fixture
def end_position_data():
    """750 m of 20 mm pipe on a 500 mm drum, 2000 mm bundle width."""
    return _end_position_data()


# ─── Typed requests ──────────────────────────────────────────────────────


@pytest.fixture
def coil_length_request():
    """Coil length request, uneven layers (BB1)."""
    return WindingRequest.model_validate(_coil_length_data())


@pytest.fixture
def offset_coil_length_request():
    """Coil length request, even layers with offset (BB0.5)."""
    return WindingRequest.model_validate(
        {**_coil_length_data(), "pattern": WindingPattern.EVEN_LAYERS_OFFSET.value}
    )


@pytest.fixture
def end_position_request():
    """End position request, uneven layers (BB1)."""
    return WindingRequest.model_validate(_end_position_data())


@pytest.fixture
def small_drum_request():
    """Drum whose first layer alone already overflows the outer diameter."""
    return WindingRequest(
        pipe_diameter_mm=20,
        inner_diameter_mm=50,
        outer_diameter_mm=80,
        bundle_width_mm=200,
    )


# ─── Files ───────────────────────────────────────────────────────────────


@pytest.fixture
def temp_request_file(tmp_path):
    """Coil length request written to a temporary JSON file."""
    path = tmp_path / "request.json"
    with open(path, "w") as f:
        json.dump({"schema_version": "1.0", **_coil_length_data()}, f, indent=2)
    return path


@pytest.fixture
def temp_end_position_file(tmp_path):
    """End position request written to a temporary JSON file."""
    path = tmp_path / "end_position.json"
    with open(path, "w") as f:
        json.dump({"schema_version": "1.0", **_end_position_data()}, f, indent=2)
    return path


# ─── Helper functions (no pytest dependency) ──────────────────────────────


def _coil_length_data():
    return {
        "mode": WindingMode.COIL_LENGTH.value,
        "pattern": WindingPattern.UNEVEN_LAYERS.value,
        "pipe_diameter_mm": 20.0,
        "inner_diameter_mm": 500.0,
        "outer_diameter_mm": 800.0,
        "bundle_width_mm": 2000.0,
    }


def _end_position_data():
    return {
        "mode": WindingMode.END_POSITION.value,
        "pattern": WindingPattern.UNEVEN_LAYERS.value,
        "pipe_diameter_mm": 20.0,
        "inner_diameter_mm": 500.0,
        "bundle_width_mm": 2000.0,
        "pipe_length_m": 750.0,
    }
