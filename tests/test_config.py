"""
Tests for simulation settings.
"""

import pytest
from pydantic import ValidationError
from py_wavesphere.config import SimulationSettings


class TestSimulationSettings:
    """Test settings defaults and validation."""

    def test_defaults(self):
        s = SimulationSettings()

        assert s.cols == 256
        assert s.rows == 128
        assert s.damping == 0.985
        assert s.impulse_strength == 400
        assert s.neighbor_falloff_point == 0.7
        assert s.neighbor_falloff_path == 0.6
        assert s.drawable_radius_multiplier == 1.5

    @pytest.mark.parametrize(
        "overrides",
        [
            {"damping": 1.0},
            {"damping": 0.0},
            {"damping": 1.5},
            {"rows": 2},
            {"cols": 0},
            {"log_format": "xml"},
        ],
    )
    def test_invalid_values_fail_fast(self, overrides):
        with pytest.raises(ValidationError):
            SimulationSettings(**overrides)

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("WAVESPHERE_DAMPING", "0.9")
        monkeypatch.setenv("WAVESPHERE_COLS", "64")

        s = SimulationSettings()

        assert s.damping == 0.9
        assert s.cols == 64

    def test_frozen_after_construction(self):
        s = SimulationSettings()
        with pytest.raises(ValidationError):
            s.damping = 0.5
