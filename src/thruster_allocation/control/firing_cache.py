"""
Firing Cache

Memoizes activation vectors per quantized desire. Requests whose force
and torque fall into the same bucket share one solve.
"""

import logging
from typing import Callable, Dict, Tuple

import numpy as np

logger = logging.getLogger(__name__)

QuantKey = Tuple[int, int, int]


def quantize(
    desired_force,
    desired_torque: float,
    force_coarseness: float,
    torque_coarseness: float,
) -> QuantKey:
    """
    Bucket a desire into an integer key.

    Each component is divided by its coarseness and truncated toward zero,
    so the bucket around zero is twice as wide as the others.
    """
    return (
        int(desired_force[0] / force_coarseness),
        int(desired_force[1] / force_coarseness),
        int(desired_torque / torque_coarseness),
    )


class FiringCache:
    """
    Per-body map from QuantKey to activation vector.

    When full, new results are returned without being stored rather than
    evicting entries.
    """

    def __init__(self, max_entries: int = 4096):
        self.max_entries = max_entries
        self._entries: Dict[QuantKey, np.ndarray] = {}
        self.hits = 0
        self.misses = 0

    def get_or_compute(self, key: QuantKey, compute: Callable[[], np.ndarray]) -> np.ndarray:
        """
        Return the cached vector for key, computing and storing it on a miss.

        Args:
            key: Quantized desire
            compute: Zero-argument callable producing the activation vector

        Returns:
            Activation vector (the stored object on a hit)
        """
        cached = self._entries.get(key)
        if cached is not None:
            self.hits += 1
            return cached

        self.misses += 1
        activations = compute()
        # Stored vectors are shared between ticks
        activations.setflags(write=False)
        if len(self._entries) < self.max_entries:
            self._entries[key] = activations
        else:
            logger.debug(f"Firing cache full ({self.max_entries} entries), not storing {key}")
        return activations

    def clear(self) -> None:
        self._entries.clear()

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0

    def __contains__(self, key: QuantKey) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
