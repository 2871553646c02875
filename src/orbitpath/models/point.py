import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class Point3D:
    x: float
    y: float
    z: float

    @classmethod
    def from_spherical(
        cls, latitude: float, longitude: float, radius: float, altitude: float
    ) -> "Point3D":
        """Project latitude/longitude (degrees) at radius + altitude to Cartesian."""
        r = radius + altitude
        lat = math.radians(latitude)
        lon = math.radians(longitude)

        return cls(
            x=-r * math.cos(lat) * math.cos(lon),
            y=r * math.sin(lat),
            z=r * math.cos(lat) * math.sin(lon),
        )

    def __add__(self, other: "Point3D") -> "Point3D":
        return Point3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Point3D") -> "Point3D":
        return Point3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scale: float) -> "Point3D":
        return Point3D(self.x * scale, self.y * scale, self.z * scale)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def is_finite(self) -> bool:
        return all(math.isfinite(c) for c in (self.x, self.y, self.z))
