"""The component types an entity can hold, and building them from JSON-like data."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

import numpy as np

from . import glmath
from .ecs import Component, Entity


def _read_vector(data: Mapping[str, Any], key: str, default: Any, size: int) -> np.ndarray:
    """Read a fixed-size numeric vector from ``data[key]``, falling back to ``default``."""
    value = np.asarray(data.get(key, default), dtype=float)
    if value.shape != (size,):
        raise ValueError(f"'{key}' must be a list of {size} numbers")
    return value


class CameraType(Enum):
    """The kind of projection a camera uses."""

    ORTHOGRAPHIC = "orthographic"
    PERSPECTIVE = "perspective"


@dataclass(eq=False)
class CameraComponent(Component):
    """Marks the entity as the point of view renderers draw the scene from."""

    ID: ClassVar[str] = "Camera"

    camera_type: CameraType = CameraType.PERSPECTIVE
    near: float = 0.01
    far: float = 500.0
    fov_y: float = math.pi / 2
    ortho_height: float = 1.0

    def deserialize(self, data: Any) -> None:
        """Read the camera type, clip planes, field of view (degrees) and ortho height."""
        if not isinstance(data, Mapping):
            return
        if data.get("cameraType", "perspective") == "orthographic":
            self.camera_type = CameraType.ORTHOGRAPHIC
        else:
            self.camera_type = CameraType.PERSPECTIVE
        self.near = float(data.get("near", 0.01))
        self.far = float(data.get("far", 500.0))
        self.fov_y = float(data.get("fovY", 90.0)) * (math.pi / 180)
        self.ortho_height = float(data.get("orthoHeight", 1.0))

    def view_matrix(self) -> np.ndarray:
        """View matrix derived from the owning entity's local-to-world matrix."""
        if self.owner is None:
            raise ValueError("camera component is not attached to an entity")
        m = self.owner.local_to_world_matrix()
        eye = (m @ np.array([0.0, 0.0, 0.0, 1.0]))[:3]
        center = (m @ np.array([0.0, 0.0, -1.0, 1.0]))[:3]
        up = (m @ np.array([0.0, 1.0, 0.0, 0.0]))[:3]
        return glmath.look_at(eye, center, up)

    def projection_matrix(self, viewport_size: Any) -> np.ndarray:
        """Projection matrix whose aspect ratio comes from ``viewport_size`` (width, height)."""
        width, height = viewport_size
        if height == 0:
            raise ValueError("viewport height must not be zero")
        aspect = float(width) / float(height)
        if self.camera_type is CameraType.ORTHOGRAPHIC:
            top = self.ortho_height / 2
            bottom = -self.ortho_height / 2
            return glmath.ortho(bottom * aspect, top * aspect, bottom, top)
        return glmath.perspective(self.fov_y, aspect, self.near, self.far)


@dataclass(eq=False)
class ColliderComponent(Component):
    """Extents of a box around the entity and the action triggered on contact."""

    ID: ClassVar[str] = "Collider"

    x_diff: float = 0.0
    y_diff: float = 0.0
    z_diff: float = 0.0
    action: int = 0

    def deserialize(self, data: Any) -> None:
        """Read the extents and action; missing keys keep their values."""
        if not isinstance(data, Mapping):
            return
        self.x_diff = float(data.get("x_diff", self.x_diff))
        self.y_diff = float(data.get("y_diff", self.y_diff))
        self.z_diff = float(data.get("z_diff", self.z_diff))
        self.action = int(data.get("action", self.action))


@dataclass(eq=False)
class FreeCameraControllerComponent(Component):
    """Lets user input move the entity and change the camera's field of view."""

    ID: ClassVar[str] = "Free Camera Controller"

    rotation_sensitivity: float = 0.01
    fov_sensitivity: float = 0.3
    position_sensitivity: np.ndarray = field(default_factory=lambda: np.full(3, 3.0))
    speedup_factor: float = 5.0

    def deserialize(self, data: Any) -> None:
        """Read sensitivities and the speed-up factor; missing keys keep their values."""
        if not isinstance(data, Mapping):
            return
        self.rotation_sensitivity = float(data.get("rotationSensitivity", self.rotation_sensitivity))
        self.fov_sensitivity = float(data.get("fovSensitivity", self.fov_sensitivity))
        self.position_sensitivity = _read_vector(
            data, "positionSensitivity", self.position_sensitivity, 3
        )
        self.speedup_factor = float(data.get("speedupFactor", self.speedup_factor))


@dataclass(eq=False)
class InputComponent(Component):
    """Marks the entity as driven by player input; it carries no data."""

    ID: ClassVar[str] = "InputMovement"

    def deserialize(self, data: Any) -> None:
        """Nothing to read: the component has no parameters."""


class LightType(Enum):
    """The kind of light source."""

    DIRECTIONAL = "Directional"
    POINT = "Point"
    SPOT = "Spot"


@dataclass(eq=False)
class LightComponent(Component):
    """A light source placed at the owning entity."""

    ID: ClassVar[str] = "Light"

    light_type: LightType = LightType.DIRECTIONAL
    color: np.ndarray = field(default_factory=lambda: np.zeros(3))
    attenuation: np.ndarray = field(default_factory=lambda: np.zeros(3))
    direction: np.ndarray = field(default_factory=lambda: np.zeros(3))
    cone_angles: np.ndarray = field(default_factory=lambda: np.zeros(2))

    def deserialize(self, data: Any) -> None:
        """Read the light type, color, cone angles, attenuation and direction."""
        if not isinstance(data, Mapping):
            return
        type_name = data.get("lightType", "Directional")
        try:
            self.light_type = LightType(type_name)
        except ValueError:
            pass
        self.color = _read_vector(data, "color", [1.0, 1.0, 1.0], 3)
        self.cone_angles = _read_vector(
            data, "cone_angles", [math.radians(15.0), math.radians(30.0)], 2
        )
        self.attenuation = _read_vector(data, "attenuation", [0.0, 0.0, 1.0], 3)
        self.direction = _read_vector(data, "direction", [-1.0, 0.0, 0.0], 3)


@dataclass(eq=False)
class MeshRendererComponent(Component):
    """Draws a mesh with a material at the owning entity's transform."""

    ID: ClassVar[str] = "Mesh Renderer"

    mesh: Any = None
    material: Any = None

    def deserialize(self, data: Any) -> None:
        """Look up the named mesh and material in the owning world's asset library."""
        if not isinstance(data, Mapping):
            return
        mesh_name = data["mesh"]
        material_name = data["material"]
        if not isinstance(mesh_name, str) or not isinstance(material_name, str):
            raise TypeError("'mesh' and 'material' must be asset names")
        world = self.owner.world if self.owner is not None else None
        assets = world.assets if world is not None else None
        if assets is None:
            raise ValueError("no asset library is available to resolve mesh and material")
        self.mesh = assets.get("meshes", mesh_name)
        self.material = assets.get("materials", material_name)


@dataclass(eq=False)
class MovementComponent(Component):
    """Constant linear and angular velocity applied to the owning entity."""

    ID: ClassVar[str] = "Movement"

    linear_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def deserialize(self, data: Any) -> None:
        """Read the linear velocity and the angular velocity (given in degrees)."""
        if not isinstance(data, Mapping):
            return
        self.linear_velocity = _read_vector(data, "linearVelocity", self.linear_velocity, 3)
        self.angular_velocity = np.radians(
            _read_vector(data, "angularVelocity", self.angular_velocity, 3)
        )


_COMPONENT_TYPES: dict[str, type[Component]] = {
    cls.ID: cls
    for cls in (
        CameraComponent,
        FreeCameraControllerComponent,
        MovementComponent,
        InputComponent,
        MeshRendererComponent,
        LightComponent,
        ColliderComponent,
    )
}


def deserialize_component(data: Any, entity: Entity) -> Component | None:
    """Add the component named by ``data["type"]`` to ``entity`` and read it from ``data``.

    Returns the new component, or None if the type is not known.
    """
    if not isinstance(data, Mapping):
        raise TypeError("component description must be a mapping")
    component_type = _COMPONENT_TYPES.get(data.get("type", ""))
    if component_type is None:
        return None
    component = entity.add_component(component_type)
    component.deserialize(data)
    return component