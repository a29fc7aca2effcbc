"""
Tests for the command-line interface.
"""

import pytest
from typer.testing import CliRunner

from thruster_allocation.cli import app

runner = CliRunner()


@pytest.mark.integration
class TestAllocateCommand:
    """Single allocation on a reference layout."""

    def test_forward_thrust(self):
        result = runner.invoke(app, ["allocate", "--layout", "symmetric_cross", "--fy", "1.0"])

        assert result.exit_code == 0
        assert "Allocation on 'symmetric_cross'" in result.stdout
        assert "1.00" in result.stdout
        assert "2 thruster(s) started firing" in result.stdout

    def test_osqp_backend(self):
        result = runner.invoke(app, ["allocate", "--torque", "0.5", "--solver", "osqp"])

        assert result.exit_code == 0

    def test_unknown_layout(self):
        result = runner.invoke(app, ["allocate", "--layout", "hexacopter"])

        assert result.exit_code == 1
        assert "Configuration error" in result.stdout

    def test_unknown_preset(self):
        result = runner.invoke(app, ["allocate", "--preset", "turbo"])

        assert result.exit_code == 1


@pytest.mark.integration
class TestBenchmarkCommand:
    """Cache effectiveness report."""

    def test_small_run(self):
        result = runner.invoke(
            app, ["benchmark", "--requests", "40", "--bodies", "2", "--preset", "swarm"]
        )

        assert result.exit_code == 0
        assert "Hit rate" in result.stdout
        assert "Failures" in result.stdout

    def test_invalid_solver(self):
        result = runner.invoke(app, ["benchmark", "--requests", "1", "--solver", "simplex"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.stdout


@pytest.mark.unit
class TestListingCommands:
    """Preset and layout listings."""

    def test_presets_list(self):
        result = runner.invoke(app, ["presets"])

        assert result.exit_code == 0
        for name in ("PRECISE", "BALANCED", "SWARM"):
            assert name in result.stdout

    def test_presets_show(self):
        result = runner.invoke(app, ["presets", "--show", "swarm"])

        assert result.exit_code == 0
        assert "cache_max_entries" in result.stdout

    def test_presets_show_unknown(self):
        result = runner.invoke(app, ["presets", "--show", "turbo"])

        assert result.exit_code == 1

    def test_layouts(self):
        result = runner.invoke(app, ["layouts"])

        assert result.exit_code == 0
        assert "asymmetric_tug" in result.stdout
