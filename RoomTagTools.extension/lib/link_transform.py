# -*- coding: utf-8 -*-
"""Map points from a linked document into the host document.

`AffineTransform` mirrors the layout of `Autodesk.Revit.DB.Transform`: three
basis vectors plus an origin. It is applied as given; rotation, translation
and any scale are never decomposed.

Only points go through the transform. Level ids of linked rooms are looked up
as-is in the host level map.

Example:
    >>> t = AffineTransform.translation(10, 5)
    >>> t.of_point(Point(1, 1))
    Point(11.0, 6.0, 0.0)
"""
import math
from typing import Callable, Optional, Sequence

from room_snapshot import DocumentSnapshot, LinkedDocumentReference, Point


Vector = Sequence[float]

# Exact cos/sin for quarter turns.
_QUARTER_TURNS = {
    0: (1.0, 0.0),
    90: (0.0, 1.0),
    180: (-1.0, 0.0),
    270: (0.0, -1.0),
}


def _cos_sin(degrees: float):
    d = float(degrees) % 360.0
    if d.is_integer() and int(d) in _QUARTER_TURNS:
        return _QUARTER_TURNS[int(d)]
    rad = math.radians(d)
    return math.cos(rad), math.sin(rad)


def _vec(values, name) -> tuple:
    try:
        out = tuple(float(v) for v in values)
    except (TypeError, ValueError):
        raise ValueError('{0} must be a sequence of 3 numbers'.format(name))
    if len(out) != 3:
        raise ValueError('{0} must have 3 components, got {1}'.format(name, len(out)))
    return out


class AffineTransform:
    """Affine map: p' = origin + basis_x * p.x + basis_y * p.y + basis_z * p.z."""

    __slots__ = ('basis_x', 'basis_y', 'basis_z', 'origin')

    def __init__(self, basis_x: Vector = (1.0, 0.0, 0.0), basis_y: Vector = (0.0, 1.0, 0.0),
                 basis_z: Vector = (0.0, 0.0, 1.0), origin: Vector = (0.0, 0.0, 0.0)):
        self.basis_x = _vec(basis_x, 'basis_x')
        self.basis_y = _vec(basis_y, 'basis_y')
        self.basis_z = _vec(basis_z, 'basis_z')
        self.origin = _vec(origin, 'origin')

    @classmethod
    def identity(cls) -> 'AffineTransform':
        return cls()

    @classmethod
    def translation(cls, dx: float, dy: float, dz: float = 0.0) -> 'AffineTransform':
        return cls(origin=(dx, dy, dz))

    @classmethod
    def rotation_z(cls, degrees: float, origin: Optional[Point] = None) -> 'AffineTransform':
        """Counter-clockwise rotation about a vertical axis through `origin`."""
        c, s = _cos_sin(degrees)
        ox, oy = (origin.x, origin.y) if origin is not None else (0.0, 0.0)
        # Rotating about (ox, oy): p' = R (p - o) + o
        tx = ox - (c * ox - s * oy)
        ty = oy - (s * ox + c * oy)
        return cls(basis_x=(c, s, 0.0), basis_y=(-s, c, 0.0), origin=(tx, ty, 0.0))

    @classmethod
    def from_matrix(cls, rows) -> 'AffineTransform':
        """Build from a row-major 3x4 or 4x4 matrix with translation in the last column."""
        rows = [list(r) for r in rows or ()]
        if len(rows) not in (3, 4) or any(len(r) != 4 for r in rows):
            raise ValueError('Expected a 3x4 or 4x4 matrix')
        if len(rows) == 4:
            last = [float(v) for v in rows[3]]
            if last != [0.0, 0.0, 0.0, 1.0]:
                raise ValueError('Projective matrices are not supported: last row {0}'.format(last))

        def col(j):
            return rows[0][j], rows[1][j], rows[2][j]

        return cls(basis_x=col(0), basis_y=col(1), basis_z=col(2), origin=col(3))

    def to_matrix(self):
        bx, by, bz, o = self.basis_x, self.basis_y, self.basis_z, self.origin
        return [
            [bx[0], by[0], bz[0], o[0]],
            [bx[1], by[1], bz[1], o[1]],
            [bx[2], by[2], bz[2], o[2]],
            [0.0, 0.0, 0.0, 1.0],
        ]

    @property
    def is_identity(self) -> bool:
        return (self.basis_x == (1.0, 0.0, 0.0) and self.basis_y == (0.0, 1.0, 0.0)
                and self.basis_z == (0.0, 0.0, 1.0) and self.origin == (0.0, 0.0, 0.0))

    def of_vector(self, v: Vector) -> tuple:
        x, y, z = _vec(v, 'vector')
        bx, by, bz = self.basis_x, self.basis_y, self.basis_z
        return (
            bx[0] * x + by[0] * y + bz[0] * z,
            bx[1] * x + by[1] * y + bz[1] * z,
            bx[2] * x + by[2] * y + bz[2] * z,
        )

    def of_point(self, point: Point) -> Point:
        vx, vy, vz = self.of_vector((point.x, point.y, point.z))
        o = self.origin
        return Point(o[0] + vx, o[1] + vy, o[2] + vz)

    def then(self, other: 'AffineTransform') -> 'AffineTransform':
        """Transform that applies `self` first and `other` second."""
        return AffineTransform(
            basis_x=other.of_vector(self.basis_x),
            basis_y=other.of_vector(self.basis_y),
            basis_z=other.of_vector(self.basis_z),
            origin=tuple(other.of_point(Point(*self.origin))),
        )

    def __eq__(self, other):
        if not isinstance(other, AffineTransform):
            return NotImplemented
        return self.to_matrix() == other.to_matrix()

    def __repr__(self):
        return 'AffineTransform(origin={0}, basis_x={1}, basis_y={2})'.format(
            self.origin, self.basis_x, self.basis_y)


class ResolvedLink:
    """A link whose document is loaded, with its point mapping into the host."""

    def __init__(self, reference: LinkedDocumentReference, document: DocumentSnapshot,
                 transform_point: Callable[[Point], Point]):
        self.reference = reference
        self.document = document
        self.transform_point = transform_point

    @property
    def link_id(self):
        return self.reference.link_id


def is_link_live(link_ref: LinkedDocumentReference) -> bool:
    if link_ref is None:
        return False
    doc = link_ref.document
    return doc is not None and bool(doc.is_linked)


def resolve_link(link_ref: LinkedDocumentReference) -> Optional[ResolvedLink]:
    """Return a `ResolvedLink`, or None when the linked document is unavailable.

    Callers skip every room of an unavailable link; this never raises for an
    unloaded link.
    """
    if not is_link_live(link_ref):
        return None
    transform = link_ref.transform or AffineTransform.identity()
    return ResolvedLink(link_ref, link_ref.document, transform.of_point)
