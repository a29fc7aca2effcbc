"""
Configuration Presets for Thruster Allocation

Provides pre-configured settings optimized for different use cases:
- PRECISE: Fine quantization for hand-flown craft, lowest cache hit rate
- BALANCED: Default configuration
- SWARM: Wide buckets for many coarse AI-driven bodies

Usage:
    from thruster_allocation.config.presets import ConfigPreset, load_preset

    params = load_preset(ConfigPreset.SWARM)
    controller = AllocationController(params)
"""

from typing import Dict, List

from . import defaults
from .models import AllocationParams


class ConfigPreset:
    """Configuration preset names."""

    PRECISE = "precise"
    BALANCED = "balanced"
    SWARM = "swarm"

    @classmethod
    def all(cls) -> List[str]:
        """Get all available preset names."""
        return [cls.PRECISE, cls.BALANCED, cls.SWARM]


def _create_precise() -> AllocationParams:
    """
    Create PRECISE preset parameters.

    Characteristics:
    - Ten times finer buckets than the default
    - Three-decimal output rounding
    - Tighter center-of-mass drift threshold
    """
    return AllocationParams(
        force_coarseness=defaults.CACHE_COARSENESS / 10.0,
        torque_coarseness=defaults.CACHE_COARSENESS / 10.0,
        com_drift_threshold=defaults.COM_DRIFT_THRESHOLD / 10.0,
        rounding_decimals=3,
    )


def _create_balanced() -> AllocationParams:
    """Create BALANCED preset parameters (default)."""
    return AllocationParams()


def _create_swarm() -> AllocationParams:
    """
    Create SWARM preset parameters.

    Characteristics:
    - Buckets 0.05 wide so a body's requests collapse onto few solves
    - Small per-body cache
    """
    return AllocationParams(
        force_coarseness=0.05,
        torque_coarseness=0.05,
        com_drift_threshold=defaults.COM_DRIFT_THRESHOLD * 4.0,
        cache_max_entries=512,
    )


_PRESETS = {
    ConfigPreset.PRECISE: _create_precise,
    ConfigPreset.BALANCED: _create_balanced,
    ConfigPreset.SWARM: _create_swarm,
}

_DESCRIPTIONS: Dict[str, str] = {
    ConfigPreset.PRECISE: "Fine quantization for twitchy hand-flown craft",
    ConfigPreset.BALANCED: "Default quantization and weights",
    ConfigPreset.SWARM: "Coarse buckets that maximise cache hits for large fleets",
}


def load_preset(preset_name: str) -> AllocationParams:
    """
    Load a configuration preset.

    Args:
        preset_name: One of ConfigPreset.all()

    Returns:
        AllocationParams for the preset

    Raises:
        ValueError: If preset name is unknown
    """
    key = preset_name.lower()
    if key not in _PRESETS:
        raise ValueError(
            f"Unknown preset '{preset_name}'. Available presets: {', '.join(ConfigPreset.all())}"
        )
    return _PRESETS[key]()


def get_preset_description(preset_name: str) -> str:
    """Get a one-line description of a preset."""
    return _DESCRIPTIONS.get(preset_name.lower(), "Unknown preset")


def list_presets() -> Dict[str, str]:
    """Map every preset name to its description."""
    return {name: _DESCRIPTIONS[name] for name in ConfigPreset.all()}
