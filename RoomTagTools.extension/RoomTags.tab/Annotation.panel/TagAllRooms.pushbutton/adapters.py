# -*- coding: utf-8 -*-
"""Revit side of Tag All Rooms: snapshots in, room tags out."""

from pyrevit import DB, script

import config_loader
import link_reader
from link_transform import AffineTransform
from room_snapshot import (
    DEFAULT_PLAN_VIEW_TYPES,
    DocumentSnapshot,
    LinkedDocumentReference,
    PlanView,
    Point,
    Room,
    RoomTag,
)
from tag_placement import TagCreationError, TagHost
from utils_revit import ensure_symbol_active, log_exception

logger = script.get_logger()

INVALID_ID = -1


def get_rules():
    try:
        return config_loader.load_rules()
    except Exception:
        log_exception('Failed to load rules, using defaults')
        return config_loader.apply_defaults({})


def element_id_value(element_id):
    """Integer value of an ElementId, or None for null/invalid ids.

    Revit 2024+ exposes `Value`; older versions only `IntegerValue`.
    """
    if element_id is None:
        return None
    value = getattr(element_id, 'Value', None)
    if value is None:
        value = getattr(element_id, 'IntegerValue', None)
    if value is None:
        return None
    value = int(value)
    if value == INVALID_ID:
        return None
    return value


def document_key(doc):
    try:
        return doc.PathName or doc.Title or u'<host>'
    except Exception:
        return u'<host>'


def link_document_key(link_id):
    return u'link:{0}'.format(link_id)


def to_point(xyz):
    if xyz is None:
        return None
    return Point(xyz.X, xyz.Y, xyz.Z)


def transform_from_revit(transform):
    """Convert a DB.Transform to an AffineTransform (None -> identity)."""
    if transform is None:
        return AffineTransform.identity()
    return AffineTransform(
        basis_x=tuple(to_point(transform.BasisX)),
        basis_y=tuple(to_point(transform.BasisY)),
        basis_z=tuple(to_point(transform.BasisZ)),
        origin=tuple(to_point(transform.Origin)),
    )


def _room_level_id(doc, room):
    level_eid = getattr(room, 'LevelId', None)
    if element_id_value(level_eid) is None:
        return None
    # Rooms whose level was deleted still carry the id
    if doc.GetElement(level_eid) is None:
        return None
    return element_id_value(level_eid)


def snapshot_room(doc, room, doc_key):
    loc = getattr(room, 'Location', None)
    pt = getattr(loc, 'Point', None) if loc else None
    try:
        area = float(room.Area or 0.0)
    except Exception:
        area = 0.0
    return Room(
        element_id_value(room.Id),
        doc_key,
        level_id=_room_level_id(doc, room),
        point=to_point(pt),
        area=area,
        name=getattr(room, 'Name', u'') or u'',
        number=getattr(room, 'Number', u'') or u'',
    )


def snapshot_tag(tag, doc_key):
    """Tag -> RoomTag; tags on linked rooms carry the link's document key."""
    room_id = None
    owner_key = doc_key
    tagged = getattr(tag, 'TaggedRoomId', None)
    link_id = element_id_value(getattr(tagged, 'LinkInstanceId', None)) if tagged else None
    if link_id is not None:
        room_id = element_id_value(tagged.LinkedElementId)
        owner_key = link_document_key(link_id)
    else:
        room_id = element_id_value(getattr(tag, 'TaggedLocalRoomId', None))
        if room_id is None and tagged is not None:
            room_id = element_id_value(getattr(tagged, 'HostElementId', None))

    loc = getattr(tag, 'Location', None)
    return RoomTag(
        element_id_value(tag.Id),
        room_id,
        owner_key,
        point=to_point(getattr(loc, 'Point', None) if loc else None),
        view_id=element_id_value(getattr(tag, 'OwnerViewId', None)),
    )


def snapshot_view(view):
    gen_level = getattr(view, 'GenLevel', None)
    return PlanView(
        element_id_value(view.Id),
        level_id=element_id_value(gen_level.Id) if gen_level is not None else None,
        is_template=bool(view.IsTemplate),
        view_type=str(view.ViewType),
        name=getattr(view, 'Name', u'') or u'',
    )


def iter_plan_views(doc):
    for v in DB.FilteredElementCollector(doc).OfClass(DB.ViewPlan):
        yield v


def snapshot_document(doc, key=None, is_linked=None):
    """Read rooms, room tags and plan views of `doc` into a DocumentSnapshot."""
    doc_key = key or document_key(doc)
    if is_linked is None:
        is_linked = link_reader.is_linked_document(doc)

    rooms = [snapshot_room(doc, r, doc_key) for r in link_reader.iter_rooms(doc)]
    tags = [snapshot_tag(t, doc_key) for t in link_reader.iter_room_tags(doc)]
    views = [snapshot_view(v) for v in iter_plan_views(doc)]
    logger.debug(u'Snapshot {0}: {1} rooms, {2} tags, {3} plan views'.format(
        doc_key, len(rooms), len(tags), len(views)))
    return DocumentSnapshot(
        doc_key,
        title=getattr(doc, 'Title', u'') or u'',
        rooms=rooms,
        tags=tags,
        views=views,
        is_linked=is_linked,
    )


def collect_link_references(doc):
    """One LinkedDocumentReference per RevitLinkInstance; unloaded links get document=None."""
    refs = []
    for inst in link_reader.list_link_instances(doc):
        link_id = element_id_value(inst.Id)
        link_doc = link_reader.get_link_doc(inst)
        name = link_reader.get_link_name(inst) or link_reader.try_get_link_path(doc, inst) or u''
        snapshot = None
        if link_doc is not None:
            snapshot = snapshot_document(link_doc, key=link_document_key(link_id))
        refs.append(LinkedDocumentReference(
            link_id,
            transform=transform_from_revit(link_reader.get_total_transform(inst)),
            document=snapshot,
            name=name,
        ))
    return refs


def _norm(s):
    return (s or u'').strip().lower()


def _parse_family_type(fullname):
    """Parse 'Family : Type' -> (family, type)"""
    if not fullname:
        return None, None
    parts = [p.strip() for p in fullname.split(':')]
    if len(parts) == 1:
        return None, parts[0]
    return parts[0], ':'.join(parts[1:]).strip()


def format_family_type(symbol):
    """Return 'Family : Type' label."""
    if symbol is None:
        return u''
    fam_name = getattr(symbol, 'FamilyName', None) or u''
    if not fam_name:
        fam = getattr(symbol, 'Family', None)
        fam_name = getattr(fam, 'Name', u'') if fam else u''
    return u'{0} : {1}'.format(fam_name, getattr(symbol, 'Name', u'') or u'').strip()


def iter_room_tag_symbols(doc):
    col = (DB.FilteredElementCollector(doc)
           .OfClass(DB.FamilySymbol)
           .OfCategory(DB.BuiltInCategory.OST_RoomTags))
    for s in col:
        yield s


def find_room_tag_symbol(doc, fullname=None):
    """Room tag FamilySymbol matching 'Family : Type', else the first one loaded."""
    symbols = list(iter_room_tag_symbols(doc))
    if not symbols:
        return None

    fam_name, type_name = _parse_family_type(fullname)
    n_fam, n_type = _norm(fam_name), _norm(type_name)
    if n_type:
        for s in symbols:
            label_fam, label_type = _parse_family_type(format_family_type(s))
            if _norm(label_type) != n_type:
                continue
            if n_fam and _norm(label_fam) != n_fam:
                continue
            return s
        logger.warning(u'Room tag type not found: {0}; using {1}'.format(
            fullname, format_family_type(symbols[0])))
    return symbols[0]


def make_link_element_id(request):
    room_eid = DB.ElementId(request.room.room_id)
    if request.link_id is None:
        return DB.LinkElementId(room_eid)
    return DB.LinkElementId(DB.ElementId(request.link_id), room_eid)


class RevitTagHost(TagHost):
    """Creates room tags in the active document through the Revit API."""

    def __init__(self, doc, rules=None):
        self.doc = doc
        self.rules = rules or {}
        self.style = None

    def find_tag_style(self):
        self.style = find_room_tag_symbol(self.doc, self.rules.get('room_tag_type_name'))
        if self.style is not None:
            logger.debug(u'Room tag type: {0}'.format(format_family_type(self.style)))
        return self.style

    def is_tag_style_active(self, style):
        return bool(getattr(style, 'IsActive', False))

    def activate_tag_style(self, style):
        try:
            return ensure_symbol_active(self.doc, style)
        except Exception:
            log_exception(u'Failed to activate room tag type {0}'.format(format_family_type(style)))
            return False

    def _apply_style(self, tag):
        if self.style is None:
            return
        style_id = self.style.Id
        if element_id_value(tag.GetTypeId()) != element_id_value(style_id):
            tag.ChangeTypeId(style_id)

    def create_tag(self, request):
        uv = DB.UV(request.point.x, request.point.y)
        view_eid = DB.ElementId(request.view.view_id)
        tag = self.doc.Create.NewRoomTag(make_link_element_id(request), uv, view_eid)
        if tag is None:
            raise TagCreationError(u'NewRoomTag returned nothing for room {0}'.format(
                request.room.room_id))
        self._apply_style(tag)
        return element_id_value(tag.Id)
