"""4x4 matrix helpers for column vectors, using right-handed, OpenGL-style clip space."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

Vec3 = Sequence[float] | np.ndarray


def _vec3(value: Vec3, name: str) -> np.ndarray:
    arr = np.asarray(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"{name} must have exactly 3 components, got shape {arr.shape}")
    return arr


def _normalize(v: np.ndarray, name: str) -> np.ndarray:
    length = np.linalg.norm(v)
    if length == 0.0:
        raise ValueError(f"{name} has zero length")
    return v / length


def translate(offset: Vec3) -> np.ndarray:
    """Return a matrix that moves points by ``offset``."""
    result = np.identity(4)
    result[:3, 3] = _vec3(offset, "offset")
    return result


def scale(factors: Vec3) -> np.ndarray:
    """Return a matrix that scales along each axis by ``factors``."""
    result = np.identity(4)
    result[:3, :3] = np.diag(_vec3(factors, "factors"))
    return result


def _rotation_x(angle: float) -> np.ndarray:
    c, s = np.cos(angle), np.sin(angle)
    m = np.identity(4)
    m[1, 1], m[1, 2] = c, -s
    m[2, 1], m[2, 2] = s, c
    return m


def _rotation_y(angle: float) -> np.ndarray:
    c, s = np.cos(angle), np.sin(angle)
    m = np.identity(4)
    m[0, 0], m[0, 2] = c, s
    m[2, 0], m[2, 2] = -s, c
    return m


def _rotation_z(angle: float) -> np.ndarray:
    c, s = np.cos(angle), np.sin(angle)
    m = np.identity(4)
    m[0, 0], m[0, 1] = c, -s
    m[1, 0], m[1, 1] = s, c
    return m


def yaw_pitch_roll(yaw: float, pitch: float, roll: float) -> np.ndarray:
    """Rotation from Euler angles in radians: yaw about Y, pitch about X, roll about Z.

    The roll is applied first, then the pitch, then the yaw.
    """
    return _rotation_y(yaw) @ _rotation_x(pitch) @ _rotation_z(roll)


def look_at(eye: Vec3, center: Vec3, up: Vec3) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``center``."""
    eye_v = _vec3(eye, "eye")
    forward = _normalize(_vec3(center, "center") - eye_v, "center - eye")
    side = _normalize(np.cross(forward, _vec3(up, "up")), "forward x up")
    true_up = np.cross(side, forward)

    result = np.identity(4)
    result[0, :3] = side
    result[1, :3] = true_up
    result[2, :3] = -forward
    result[0, 3] = -np.dot(side, eye_v)
    result[1, 3] = -np.dot(true_up, eye_v)
    result[2, 3] = np.dot(forward, eye_v)
    return result


def perspective(fov_y: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection mapping depth to [-1, 1]."""
    if aspect == 0:
        raise ValueError("aspect ratio must not be zero")
    if far == near:
        raise ValueError("near and far planes must differ")
    tan_half = np.tan(fov_y / 2.0)
    if tan_half == 0:
        raise ValueError("field of view must not be zero")
    result = np.zeros((4, 4))
    result[0, 0] = 1.0 / (aspect * tan_half)
    result[1, 1] = 1.0 / tan_half
    result[2, 2] = -(far + near) / (far - near)
    result[2, 3] = -(2.0 * far * near) / (far - near)
    result[3, 2] = -1.0
    return result


def ortho(left: float, right: float, bottom: float, top: float) -> np.ndarray:
    """Two-dimensional orthographic projection (depth range -1 to 1)."""
    if right == left or top == bottom:
        raise ValueError("orthographic bounds must have non-zero extent")
    result = np.identity(4)
    result[0, 0] = 2.0 / (right - left)
    result[1, 1] = 2.0 / (top - bottom)
    result[2, 2] = -1.0
    result[0, 3] = -(right + left) / (right - left)
    result[1, 3] = -(top + bottom) / (top - bottom)
    return result