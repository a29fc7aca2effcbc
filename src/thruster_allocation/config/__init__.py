"""
Configuration Package for Thruster Allocation

Structured configuration organized by functional concern.

Configuration modules:
- defaults: Module-level default constants
- models: Pydantic parameter models with validation
- presets: Named parameter sets for common use cases
- thruster_config: Thruster mounts, parts and per-body layouts
- layouts: Reference thruster layouts

Usage:
    from thruster_allocation.config import AllocationParams, load_preset

    params = AllocationParams(thrust_scale=3.0)
    swarm = load_preset("swarm")
"""

from .layouts import LAYOUTS, load_layout
from .models import AllocationParams
from .presets import (
    ConfigPreset,
    get_preset_description,
    list_presets,
    load_preset,
)
from .thruster_config import (
    IDENTITY_TRANSFORM,
    MountOwner,
    PartTransform,
    ThrusterId,
    ThrusterLayout,
    ThrusterMount,
)

__all__ = [
    "AllocationParams",
    "ConfigPreset",
    "get_preset_description",
    "list_presets",
    "load_preset",
    "IDENTITY_TRANSFORM",
    "MountOwner",
    "PartTransform",
    "ThrusterId",
    "ThrusterLayout",
    "ThrusterMount",
    "LAYOUTS",
    "load_layout",
]
