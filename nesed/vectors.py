"""Small vector, colour and rotation-matrix helpers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

Matrix = list[list[float]]


@dataclass(frozen=True)
class Vector3D:
    """A homogeneous 3D vector; ``w`` defaults to 1."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def __iter__(self):
        return iter((self.x, self.y, self.z, self.w))

    def transform(self, matrix: Sequence[Sequence[float]]) -> Vector3D:
        """Return this vector (as a row vector) multiplied by a 4x4 matrix."""
        components = tuple(self)
        return Vector3D(
            *(
                sum(value * row[column] for value, row in zip(components, matrix))
                for column in range(4)
            )
        )

    def length(self) -> float:
        """Length of the x, y, z part."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> Vector3D:
        """Return a vector of unit length in the same direction, keeping ``w``."""
        size = self.length()
        if size == 0:
            raise ValueError("cannot normalize a zero-length vector")
        return Vector3D(self.x / size, self.y / size, self.z / size, self.w)

    def cross(self, other: Vector3D) -> Vector3D:
        """Cross product of the x, y, z parts."""
        return Vector3D(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def dot(self, other: Vector3D) -> float:
        """Dot product of the x, y, z parts."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def __add__(self, other: Vector3D) -> Vector3D:
        if not isinstance(other, Vector3D):
            return NotImplemented
        return Vector3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3D) -> Vector3D:
        if not isinstance(other, Vector3D):
            return NotImplemented
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)


@dataclass(frozen=True)
class Color:
    """An RGBA colour with components in the range 0..1."""

    r: float = 1.0
    g: float = 1.0
    b: float = 1.0
    a: float = 1.0

    @property
    def rgba(self) -> tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    def __iter__(self):
        return iter(self.rgba)


def rotation_y(angle: float) -> Matrix:
    """Rotation matrix about the Y axis by ``angle`` radians."""
    c = math.cos(angle)
    s = math.sin(angle)
    return [
        [c, 0.0, -s, 0.0],
        [0.0, 1.0, 0.0, 0.0],
        [s, 0.0, c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]


def rotation_axis(angle: float, axis: Vector3D) -> Matrix:
    """Rotation matrix about an arbitrary axis by ``angle`` radians."""
    unit = axis.normalize()
    x, y, z = unit.x, unit.y, unit.z
    s = math.sin(angle)
    c = math.cos(angle)
    t = 1 - c
    return [
        [t * x * x + c, t * x * y - s * z, t * x * z + s * y, 0.0],
        [t * x * y + s * z, t * y * y + c, t * y * z - s * x, 0.0],
        [t * x * z - s * y, t * y * z + s * x, t * z * z + c, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]