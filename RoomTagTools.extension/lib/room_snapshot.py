# -*- coding: utf-8 -*-
"""Read-only snapshot of the elements the room tagger works on.

Rooms, room tags and plan views are copied out of a Revit document once per
run. Identities are plain integers so the placement logic can be exercised
without Revit.
"""
from typing import Optional


class Point:
    """Model-space point in internal units (feet)."""

    __slots__ = ('x', 'y', 'z')

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return (self.x, self.y, self.z) == (other.x, other.y, other.z)

    def __hash__(self):
        return hash((self.x, self.y, self.z))

    def __repr__(self):
        return 'Point({0}, {1}, {2})'.format(self.x, self.y, self.z)


class Room:
    """Room as seen in its owning document."""

    def __init__(self, room_id, document_key, level_id=None, point=None, area=0.0,
                 name=u'', number=u''):
        self.room_id = room_id
        self.document_key = document_key
        self.level_id = level_id
        self.point = point
        self.area = float(area or 0.0)
        self.name = name or u''
        self.number = number or u''

    @property
    def key(self):
        return room_key(self)

    def __repr__(self):
        return u'Room({0!r}, {1!r}, level={2!r})'.format(
            self.document_key, self.room_id, self.level_id)


class RoomTag:
    """Existing or newly created room tag in the primary document.

    `document_key` identifies the document that owns the tagged room, so a
    tag on a linked room never matches a host room with the same id.
    """

    def __init__(self, tag_id, room_id, document_key, point=None, view_id=None):
        self.tag_id = tag_id
        self.room_id = room_id
        self.document_key = document_key
        self.point = point
        self.view_id = view_id

    @property
    def room_key(self):
        return self.document_key, self.room_id

    def __repr__(self):
        return u'RoomTag({0!r} -> {1!r})'.format(self.tag_id, self.room_key)


DEFAULT_PLAN_VIEW_TYPES = ('FloorPlan',)


class PlanView:

    def __init__(self, view_id, level_id=None, is_template=False, view_type='FloorPlan',
                 name=u''):
        self.view_id = view_id
        self.level_id = level_id
        self.is_template = bool(is_template)
        self.view_type = view_type
        self.name = name or u''

    def is_plan(self, plan_types=DEFAULT_PLAN_VIEW_TYPES) -> bool:
        return self.view_type in plan_types

    def __repr__(self):
        return u'PlanView({0!r}, level={1!r}, {2})'.format(
            self.view_id, self.level_id, self.view_type)


class DocumentSnapshot:
    """Rooms, tags and views of one document, captured at the start of a run."""

    def __init__(self, key, title=u'', rooms=None, tags=None, views=None, is_linked=False):
        self.key = key
        self.title = title or u''
        self.rooms = tuple(rooms or ())
        self.tags = list(tags or [])
        self.views = tuple(views or ())
        self.is_linked = bool(is_linked)

    def add_tag(self, tag: RoomTag) -> None:
        self.tags.append(tag)

    def __repr__(self):
        return u'DocumentSnapshot({0!r}, rooms={1}, tags={2})'.format(
            self.key, len(self.rooms), len(self.tags))


class LinkedDocumentReference:
    """Link instance in the primary document.

    `document` is None when the linked file is not loaded. `transform` maps
    link coordinates into the primary document; None means identity.
    """

    def __init__(self, link_id, transform=None, document: Optional[DocumentSnapshot] = None,
                 name=u''):
        self.link_id = link_id
        self.transform = transform
        self.document = document
        self.name = name or u''

    def __repr__(self):
        return u'LinkedDocumentReference({0!r}, {1!r})'.format(self.link_id, self.name)


def room_key(room: Room):
    """Identity of a room across documents: (document_key, room_id)."""
    return room.document_key, room.room_id