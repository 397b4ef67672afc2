"""Translation, rotation and scale of an object relative to its parent."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from . import glmath


def _read_vec3(data: Mapping[str, Any], key: str, default: np.ndarray) -> np.ndarray:
    if key not in data:
        return default
    value = np.asarray(data[key], dtype=float)
    if value.shape != (3,):
        raise ValueError(f"'{key}' must be a list of 3 numbers")
    return value


@dataclass(eq=False)
class Transform:
    """Position, Euler rotation in radians (x pitch, y yaw, z roll) and scale."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))

    def __post_init__(self) -> None:
        self.position = np.asarray(self.position, dtype=float)
        self.rotation = np.asarray(self.rotation, dtype=float)
        self.scale = np.asarray(self.scale, dtype=float)

    def to_mat4(self) -> np.ndarray:
        """Matrix that scales, then rotates, then translates."""
        rotation = glmath.yaw_pitch_roll(self.rotation[1], self.rotation[0], self.rotation[2])
        return glmath.translate(self.position) @ rotation @ glmath.scale(self.scale)

    def deserialize(self, data: Mapping[str, Any]) -> None:
        """Read position, rotation (in degrees) and scale; missing keys keep their values."""
        if not isinstance(data, Mapping):
            return
        self.position = _read_vec3(data, "position", self.position)
        self.rotation = np.radians(_read_vec3(data, "rotation", np.degrees(self.rotation)))
        self.scale = _read_vec3(data, "scale", self.scale)