"""Two-dimensional affine transforms with frame labels."""
from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from tangent_plot.errors import TransformError
from tangent_plot.geometry.frames import Point

# Relative determinant threshold below which a transform is treated as singular.
SINGULAR_TOLERANCE = 1e-12


@dataclass(frozen=True)
class AffineTransform:
    """Affine map ``(x, y) -> (a*x + c*y + e, b*x + d*y + f)``.

    ``source`` and ``target`` name the frames the transform maps between.
    Either may be ``None`` for an unlabelled transform, which composes with
    anything.
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0
    source: str | None = None
    target: str | None = None

    @classmethod
    def identity(
        cls, source: str | None = None, target: str | None = None
    ) -> "AffineTransform":
        return cls(source=source, target=target)

    @classmethod
    def from_matrix(
        cls,
        matrix: np.ndarray,
        source: str | None = None,
        target: str | None = None,
    ) -> "AffineTransform":
        """Build a transform from a 3x3 (or 2x3) homogeneous matrix."""
        array = np.asarray(matrix, dtype=float)
        if array.shape not in {(2, 3), (3, 3)}:
            raise TransformError(f"Expected a 2x3 or 3x3 matrix, got {array.shape}")
        if array.shape == (3, 3) and not np.allclose(array[2], (0.0, 0.0, 1.0)):
            raise TransformError("Matrix is projective, not affine")
        return cls(
            a=float(array[0, 0]),
            b=float(array[1, 0]),
            c=float(array[0, 1]),
            d=float(array[1, 1]),
            e=float(array[0, 2]),
            f=float(array[1, 2]),
            source=source,
            target=target,
        )

    def matrix(self) -> np.ndarray:
        return np.array(
            [
                [self.a, self.c, self.e],
                [self.b, self.d, self.f],
                [0.0, 0.0, 1.0],
            ],
            dtype=float,
        )

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    @property
    def is_finite(self) -> bool:
        return all(
            math.isfinite(value)
            for value in (self.a, self.b, self.c, self.d, self.e, self.f)
        )

    def multiply(self, other: "AffineTransform") -> "AffineTransform":
        """Return ``self * other``: map through ``other`` first, then ``self``."""
        if (
            self.source is not None
            and other.target is not None
            and self.source != other.target
        ):
            raise TransformError(
                f"Cannot chain {other.source!r}->{other.target!r} "
                f"into {self.source!r}->{self.target!r}"
            )
        product = self.matrix() @ other.matrix()
        return AffineTransform.from_matrix(
            product, source=other.source, target=self.target
        )

    def inverse(self) -> "AffineTransform":
        if not self.is_finite:
            raise TransformError(f"Transform has non-finite entries: {self}")
        scale = max(abs(self.a), abs(self.b), abs(self.c), abs(self.d))
        if scale == 0.0 or abs(self.determinant) <= SINGULAR_TOLERANCE * scale * scale:
            raise TransformError(
                f"Transform is not invertible (determinant {self.determinant!r})"
            )
        inverted = np.linalg.inv(self.matrix())
        return AffineTransform.from_matrix(
            inverted, source=self.target, target=self.source
        )

    def map_point(self, point: Point) -> Point:
        x, y = point
        return (
            self.a * x + self.c * y + self.e,
            self.b * x + self.d * y + self.f,
        )

    def relabel(
        self, source: str | None = None, target: str | None = None
    ) -> "AffineTransform":
        return AffineTransform(
            self.a, self.b, self.c, self.d, self.e, self.f, source, target
        )
