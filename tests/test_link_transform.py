# -*- coding: utf-8 -*-
"""Tests for link transforms and link resolution."""
import pytest

from link_transform import AffineTransform, is_link_live, resolve_link
from room_snapshot import DocumentSnapshot, LinkedDocumentReference, Point


def test_identity_keeps_point():
    p = Point(3.5, -2.0, 1.0)
    assert AffineTransform.identity().of_point(p) == p
    assert AffineTransform.identity().is_identity


def test_translation_shifts_point():
    t = AffineTransform.translation(10, 5)
    assert t.of_point(Point(1, 2)) == Point(11, 7)
    assert not t.is_identity


def test_quarter_turn_is_exact():
    t = AffineTransform.rotation_z(90)
    assert t.of_point(Point(1, 0)) == Point(0, 1)
    assert t.of_point(Point(2, 3)) == Point(-3, 2)


def test_rotation_about_origin_point():
    t = AffineTransform.rotation_z(180, origin=Point(5, 5))
    assert t.of_point(Point(6, 5)) == Point(4, 5)


def test_arbitrary_angle():
    t = AffineTransform.rotation_z(30)
    p = t.of_point(Point(2, 0))
    assert p.x == pytest.approx(3 ** 0.5)
    assert p.y == pytest.approx(1.0)


def test_from_matrix_rotation_plus_translation():
    rows = [
        [0, -1, 0, 10],
        [1, 0, 0, 5],
        [0, 0, 1, 0],
        [0, 0, 0, 1],
    ]
    t = AffineTransform.from_matrix(rows)
    assert t.of_point(Point(1, 0)) == Point(10, 6)
    assert t.to_matrix() == [[float(v) for v in r] for r in rows]


def test_from_matrix_3x4():
    t = AffineTransform.from_matrix([[1, 0, 0, 2], [0, 1, 0, 3], [0, 0, 1, 4]])
    assert t.of_point(Point(0, 0, 0)) == Point(2, 3, 4)


def test_scale_is_applied_opaquely():
    t = AffineTransform(basis_x=(2, 0, 0), basis_y=(0, 2, 0))
    assert t.of_point(Point(1, 1)) == Point(2, 2)


@pytest.mark.parametrize("rows", [
    [[1, 0, 0], [0, 1, 0], [0, 0, 1]],
    [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 1, 1]],
    [],
])
def test_from_matrix_rejects_bad_shapes(rows):
    with pytest.raises(ValueError):
        AffineTransform.from_matrix(rows)


def test_then_applies_left_first():
    rotate = AffineTransform.rotation_z(90)
    shift = AffineTransform.translation(10, 0)
    assert rotate.then(shift).of_point(Point(1, 0)) == Point(10, 1)
    assert shift.then(rotate).of_point(Point(1, 0)) == Point(0, 11)


def test_bad_vector_raises():
    with pytest.raises(ValueError):
        AffineTransform(origin=(1, 2))


def _linked_snapshot(is_linked=True):
    return DocumentSnapshot("link:5", rooms=[], is_linked=is_linked)


def test_resolve_link_returns_transform_function():
    ref = LinkedDocumentReference(5, AffineTransform.translation(10, 5), _linked_snapshot())
    resolved = resolve_link(ref)
    assert resolved is not None
    assert resolved.link_id == 5
    assert resolved.document is ref.document
    assert resolved.transform_point(Point(1, 1)) == Point(11, 6)


def test_missing_transform_means_identity():
    resolved = resolve_link(LinkedDocumentReference(5, None, _linked_snapshot()))
    assert resolved.transform_point(Point(1, 2)) == Point(1, 2)


def test_unloaded_link_is_unavailable():
    ref = LinkedDocumentReference(5, AffineTransform.identity(), None)
    assert resolve_link(ref) is None
    assert not is_link_live(ref)


def test_document_not_marked_linked_is_unavailable():
    ref = LinkedDocumentReference(5, AffineTransform.identity(), _linked_snapshot(is_linked=False))
    assert resolve_link(ref) is None


def test_none_reference():
    assert resolve_link(None) is None
