"""Perspective camera, view/projection matrices and an interactive controller."""

from __future__ import annotations

import enum
import math
import struct
from dataclasses import dataclass, field

Vector3 = tuple[float, float, float]
Column = tuple[float, float, float, float]
# Matrices are stored column-major: a tuple of four columns.
Matrix4 = tuple[Column, Column, Column, Column]

IDENTITY: Matrix4 = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0),
)

OPENGL_TO_WGPU_MATRIX: Matrix4 = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 0.5, 0.0),
    (0.0, 0.0, 0.5, 1.0),
)

LOOK_SENSITIVITY = 0.005
_PITCH_LIMIT = math.pi / 2.0 - 0.1


def _add(a: Vector3, b: Vector3) -> Vector3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _sub(a: Vector3, b: Vector3) -> Vector3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _scale(a: Vector3, s: float) -> Vector3:
    return (a[0] * s, a[1] * s, a[2] * s)


def _dot(a: Vector3, b: Vector3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Vector3, b: Vector3) -> Vector3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _magnitude(a: Vector3) -> float:
    return math.sqrt(_dot(a, a))


def _normalize(a: Vector3) -> Vector3:
    length = _magnitude(a)
    if length == 0.0:
        return (math.nan, math.nan, math.nan)
    return _scale(a, 1.0 / length)


def _mat_mul(a: Matrix4, b: Matrix4) -> Matrix4:
    return tuple(  # type: ignore[return-value]
        tuple(sum(a[k][row] * col[k] for k in range(4)) for row in range(4))
        for col in b
    )


def look_at_rh(eye: Vector3, target: Vector3, up: Vector3) -> Matrix4:
    """Right-handed view matrix looking from ``eye`` towards ``target``."""
    f = _normalize(_sub(target, eye))
    s = _normalize(_cross(f, up))
    u = _cross(s, f)
    return (
        (s[0], u[0], -f[0], 0.0),
        (s[1], u[1], -f[1], 0.0),
        (s[2], u[2], -f[2], 0.0),
        (-_dot(eye, s), -_dot(eye, u), _dot(eye, f), 1.0),
    )


def perspective(fovy: float, aspect: float, znear: float, zfar: float) -> Matrix4:
    """OpenGL-style perspective projection; ``fovy`` is in degrees."""
    if not 0.0 < fovy < 180.0:
        raise ValueError(f"field of view must be between 0 and 180 degrees, got {fovy}")
    if aspect == 0.0:
        raise ValueError("aspect ratio must be non-zero")
    if znear <= 0.0:
        raise ValueError(f"near plane must be positive, got {znear}")
    if zfar <= 0.0:
        raise ValueError(f"far plane must be positive, got {zfar}")
    if zfar == znear:
        raise ValueError("near and far planes must differ")
    f = 1.0 / math.tan(math.radians(fovy) / 2.0)
    return (
        (f / aspect, 0.0, 0.0, 0.0),
        (0.0, f, 0.0, 0.0),
        (0.0, 0.0, (zfar + znear) / (znear - zfar), -1.0),
        (0.0, 0.0, (2.0 * zfar * znear) / (znear - zfar), 0.0),
    )


@dataclass
class Camera:
    """A perspective camera; ``fovy`` is in degrees."""

    position: Vector3
    target: Vector3
    up: Vector3
    aspect: float
    fovy: float
    znear: float
    zfar: float

    def build_view_projection_matrix(self) -> Matrix4:
        """Combined view and projection matrix in WGPU clip space."""
        view = look_at_rh(self.position, self.target, self.up)
        proj = perspective(self.fovy, self.aspect, self.znear, self.zfar)
        return _mat_mul(OPENGL_TO_WGPU_MATRIX, _mat_mul(proj, view))

    def update_aspect(self, width: int, height: int) -> None:
        """Set the aspect ratio from a viewport size."""
        if height == 0:
            raise ValueError("viewport height must be non-zero")
        self.aspect = width / height


@dataclass
class CameraUniform:
    """GPU uniform data holding the view-projection matrix."""

    view_proj: Matrix4 = field(default=IDENTITY)

    def update_view_proj(self, camera: Camera) -> None:
        """Refresh the matrix from ``camera``."""
        self.view_proj = camera.build_view_projection_matrix()

    def to_bytes(self) -> bytes:
        """The matrix as 16 little-endian float32 values, column-major."""
        return struct.pack("<16f", *(value for column in self.view_proj for value in column))


class _Move(enum.Enum):
    FORWARD = enum.auto()
    BACKWARD = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()


_KEY_BINDINGS: dict[str, _Move] = {
    "w": _Move.FORWARD,
    "ArrowUp": _Move.FORWARD,
    "s": _Move.BACKWARD,
    "ArrowDown": _Move.BACKWARD,
    "a": _Move.LEFT,
    "ArrowLeft": _Move.LEFT,
    "d": _Move.RIGHT,
    "ArrowRight": _Move.RIGHT,
    "q": _Move.UP,
    "e": _Move.DOWN,
}


class CameraController:
    """Moves and rotates a camera from keyboard and mouse input."""

    def __init__(self, camera: Camera, speed: float) -> None:
        self._camera = camera
        self.speed = speed
        self.is_looking = False
        self._active: set[_Move] = set()
        direction = _sub(camera.target, camera.position)
        self.yaw = math.atan2(direction[0], direction[2])
        self.pitch = math.asin(direction[1] / _magnitude(direction))

    @property
    def camera(self) -> Camera:
        """The controlled camera."""
        return self._camera

    def process_keyboard(self, key: str, pressed: bool) -> None:
        """Record a key press or release; unknown keys are ignored."""
        move = _KEY_BINDINGS.get(key)
        if move is None:
            return
        if pressed:
            self._active.add(move)
        else:
            self._active.discard(move)

    def process_mouse(self, delta_x: float, delta_y: float) -> None:
        """Rotate the view by a mouse movement while looking is enabled."""
        if not self.is_looking:
            return
        self.yaw += delta_x * LOOK_SENSITIVITY
        self.pitch -= delta_y * LOOK_SENSITIVITY
        self.pitch = max(-_PITCH_LIMIT, min(_PITCH_LIMIT, self.pitch))
        self._update_camera_vectors()

    def set_looking(self, looking: bool) -> None:
        """Enable or disable mouse look."""
        self.is_looking = looking

    def update(self, dt: float) -> bool:
        """Move the camera for ``dt`` seconds; return whether any key was held."""
        cam = self._camera
        forward = _normalize(_sub(cam.target, cam.position))
        right = _normalize(_cross(forward, cam.up))
        contributions = {
            _Move.FORWARD: forward,
            _Move.BACKWARD: _scale(forward, -1.0),
            _Move.RIGHT: right,
            _Move.LEFT: _scale(right, -1.0),
            _Move.UP: cam.up,
            _Move.DOWN: _scale(cam.up, -1.0),
        }
        movement: Vector3 = (0.0, 0.0, 0.0)
        for move in self._active:
            movement = _add(movement, contributions[move])
        if _magnitude(movement) > 0.0:
            movement = _normalize(movement)
        step = _scale(movement, self.speed * dt)
        cam.position = _add(cam.position, step)
        cam.target = _add(cam.target, step)
        return bool(self._active)

    def _update_camera_vectors(self) -> None:
        cos_pitch = math.cos(self.pitch)
        direction = _normalize(
            (
                math.sin(self.yaw) * cos_pitch,
                math.sin(self.pitch),
                math.cos(self.yaw) * cos_pitch,
            )
        )
        self._camera.target = _add(self._camera.position, direction)