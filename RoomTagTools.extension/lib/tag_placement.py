# -*- coding: utf-8 -*-
"""Room tag placement: decide what to tag, where, and ask the host to do it.

`place_all_tags` runs over a host snapshot and, optionally, the snapshots of
linked documents. It never touches Revit directly: tag styles and tag
creation go through a `TagHost`, so the whole flow can be driven by a fake
host in tests.

Error policy:
    - No usable room tag style raises `NoTagStyleAvailable` before anything
      is placed.
    - Rooms without a plan view for their level, tags the host fails to
      create, and links that are not loaded are recorded in the report and
      skipped. The batch always completes.

Example:
    >>> report = place_all_tags(host_snapshot, links, PlacementOptions(include_linked=True), host)
    >>> report.placed_count
    12
"""
from typing import Dict, Iterable, List, Optional

from link_transform import resolve_link
from room_classifier import classify_rooms
from room_snapshot import (
    DEFAULT_PLAN_VIEW_TYPES,
    DocumentSnapshot,
    LinkedDocumentReference,
    PlanView,
    Point,
    Room,
    RoomTag,
    room_key,
)
from utils_revit import get_logger
from view_resolver import build_level_view_map, resolve_view


SKIPPED_NO_VIEW = 'SkippedNoView'
SKIPPED_UNRESOLVED_LINK = 'SkippedUnresolvedLink'
CREATION_FAILED = 'CreationFailed'


class RoomTagError(Exception):
    """Base error for room tagging."""


class NoTagStyleAvailable(RoomTagError):
    """No room tag type is loaded, or the one found could not be activated."""


class TagCreationError(RoomTagError):
    """The host refused to create a single tag."""


class PlacementOptions:

    def __init__(self, include_linked=False, plan_view_types=DEFAULT_PLAN_VIEW_TYPES):
        self.include_linked = bool(include_linked)
        self.plan_view_types = tuple(plan_view_types or DEFAULT_PLAN_VIEW_TYPES)

    @classmethod
    def from_rules(cls, rules, include_linked=None):
        rules = rules or {}
        if include_linked is None:
            include_linked = rules.get('include_linked_default', False)
        return cls(
            include_linked=include_linked,
            plan_view_types=rules.get('plan_view_types') or DEFAULT_PLAN_VIEW_TYPES,
        )

    def __repr__(self):
        return 'PlacementOptions(include_linked={0}, plan_view_types={1})'.format(
            self.include_linked, self.plan_view_types)


class TagRequest:
    """Where and on which view to tag one room.

    `point` is already in host coordinates. `link_id` is None for host rooms.
    """

    def __init__(self, room: Room, point: Point, view: PlanView, link_id=None):
        self.room = room
        self.point = point
        self.view = view
        self.link_id = link_id

    @property
    def room_key(self):
        return room_key(self.room)

    @property
    def is_linked(self) -> bool:
        return self.link_id is not None

    def __repr__(self):
        return u'TagRequest({0!r} @ {1!r} on view {2!r})'.format(
            self.room_key, self.point, self.view.view_id)


class PlacedTag:

    def __init__(self, tag_id, request: TagRequest):
        self.tag_id = tag_id
        self.request = request

    @property
    def room_key(self):
        return self.request.room_key

    @property
    def point(self):
        return self.request.point

    def __repr__(self):
        return u'PlacedTag({0!r} -> {1!r})'.format(self.tag_id, self.room_key)


class SkipEntry:

    def __init__(self, reason, room_key, detail=u''):
        self.reason = reason
        self.room_key = room_key
        self.detail = detail or u''

    def __repr__(self):
        return u'SkipEntry({0}, {1!r})'.format(self.reason, self.room_key)


class PlacementReport:
    """Outcome of one run.

    `placed` and `skips` keep the order in which rooms were processed.
    `remaining_unlabeled` holds host room keys still untagged after the run.
    Per-room and per-link problems never make `success` False; a fatal error
    raises instead of returning a report.
    """

    def __init__(self):
        self.placed: List[PlacedTag] = []
        self.skips: List[SkipEntry] = []
        self.remaining_unlabeled: List = []
        self.success = False

    @property
    def placed_count(self) -> int:
        return len(self.placed)

    def record(self, outcome):
        if isinstance(outcome, PlacedTag):
            self.placed.append(outcome)
        elif isinstance(outcome, SkipEntry):
            self.skips.append(outcome)
        else:
            raise TypeError('Unexpected placement outcome: {0!r}'.format(outcome))

    def skips_by_reason(self, reason) -> List[SkipEntry]:
        return [s for s in self.skips if s.reason == reason]

    def skip_counts(self) -> Dict[str, int]:
        counts = {}
        for s in self.skips:
            counts[s.reason] = counts.get(s.reason, 0) + 1
        return counts

    def __repr__(self):
        return 'PlacementReport(placed={0}, skipped={1}, success={2})'.format(
            self.placed_count, len(self.skips), self.success)


class TagHost:
    """Services the placement needs from the host application.

    Subclasses implement these against Revit (see the TagAllRooms adapters)
    or in memory for tests.
    """

    def find_tag_style(self):
        """Return a room tag style/symbol, or None when none is loaded."""
        raise NotImplementedError

    def is_tag_style_active(self, style) -> bool:
        raise NotImplementedError

    def activate_tag_style(self, style) -> bool:
        """Activate `style`. Returns True when it is active afterwards."""
        raise NotImplementedError

    def create_tag(self, request: TagRequest):
        """Create a tag for `request` and return its id.

        Raise `TagCreationError` (or return None) when the tag cannot be created.
        """
        raise NotImplementedError


def prepare_tag_style(host: TagHost):
    style = host.find_tag_style()
    if style is None:
        raise NoTagStyleAvailable('No room tag family loaded.')
    if not host.is_tag_style_active(style):
        if not host.activate_tag_style(style):
            raise NoTagStyleAvailable('Room tag type could not be activated.')
    return style


def plan_placement(room: Room, point: Point, level_view_map, link_id=None):
    """Return a `TagRequest`, or a `SkipEntry` when the room's level has no view."""
    view = resolve_view(level_view_map, room.level_id)
    if view is None:
        return SkipEntry(
            SKIPPED_NO_VIEW,
            room_key(room),
            u'No plan view for level {0!r}'.format(room.level_id),
        )
    return TagRequest(room, point, view, link_id=link_id)


def attempt_placement(request: TagRequest, host: TagHost, logger=None):
    """Ask the host to create the tag. Returns `PlacedTag` or a `CreationFailed` skip."""
    try:
        tag_id = host.create_tag(request)
    except TagCreationError as exc:
        tag_id = None
        detail = u'{0}'.format(exc)
    except Exception as exc:
        # The host API raises its own exception types for per-element failures.
        tag_id = None
        detail = u'{0}: {1}'.format(type(exc).__name__, exc)
    else:
        detail = u'Host returned no tag'

    if tag_id is None:
        if logger is not None:
            logger.warning(u'Room tag not created for {0!r}: {1}'.format(request.room_key, detail))
        return SkipEntry(CREATION_FAILED, request.room_key, detail)
    return PlacedTag(tag_id, request)


def _tag_rooms(rooms: Iterable[Room], to_host_point, level_view_map, host, primary_doc,
               report, logger, link_id=None):
    for room in rooms:
        outcome = plan_placement(room, to_host_point(room.point), level_view_map, link_id=link_id)
        if isinstance(outcome, TagRequest):
            outcome = attempt_placement(outcome, host, logger)
        if isinstance(outcome, PlacedTag):
            primary_doc.add_tag(RoomTag(
                outcome.tag_id,
                room.room_id,
                room.document_key,
                point=outcome.point,
                view_id=outcome.request.view.view_id,
            ))
        else:
            logger.debug(u'Skipped {0!r}: {1}'.format(outcome.room_key, outcome.reason))
        report.record(outcome)


def _native_point(point):
    return point


def place_all_tags(primary_doc: DocumentSnapshot,
                   linked_docs: Optional[Iterable[LinkedDocumentReference]] = None,
                   options: Optional[PlacementOptions] = None,
                   host: Optional[TagHost] = None,
                   logger=None) -> PlacementReport:
    """Tag every untagged room of the host document and, optionally, of its links.

    Host rooms are deduplicated against the host's tags, including tags
    created earlier in this run. Linked rooms are deduplicated only against
    tags inside their own linked document, so rerunning with links enabled
    tags them again.

    Args:
        primary_doc: Snapshot of the active document. Created tags are
            appended to its `tags`.
        linked_docs: Link references of the active document.
        options: `PlacementOptions`; defaults to host rooms only.
        host: `TagHost` providing tag styles and tag creation.
        logger: Logger; defaults to the pyRevit logger.

    Returns:
        `PlacementReport` for the run.

    Raises:
        NoTagStyleAvailable: no room tag style can be used. Nothing is placed.
    """
    if host is None:
        raise ValueError('A TagHost is required')
    options = options or PlacementOptions()
    logger = logger or get_logger()

    level_view_map = build_level_view_map(primary_doc.views, options.plan_view_types)
    logger.debug(u'Plan views by level: {0}'.format(len(level_view_map)))

    prepare_tag_style(host)

    report = PlacementReport()

    classified = classify_rooms(primary_doc.rooms, primary_doc.tags)
    logger.debug(u'Host rooms: {0} untagged, {1} tagged, {2} not placed/enclosed'.format(
        len(classified.unlabeled), len(classified.labeled), len(classified.excluded)))
    _tag_rooms(classified.unlabeled, _native_point, level_view_map, host, primary_doc,
               report, logger)

    if options.include_linked:
        for link_ref in linked_docs or ():
            if link_ref is None:
                continue
            resolved = resolve_link(link_ref)
            if resolved is None:
                report.record(SkipEntry(
                    SKIPPED_UNRESOLVED_LINK,
                    (link_ref.link_id, None),
                    u'Link {0!r} is not loaded'.format(link_ref.name or link_ref.link_id),
                ))
                logger.debug(u'Link not loaded: {0!r}'.format(link_ref))
                continue

            linked = classify_rooms(resolved.document.rooms, resolved.document.tags)
            logger.debug(u'Link {0!r}: {1} untagged rooms'.format(
                link_ref.name or link_ref.link_id, len(linked.unlabeled)))
            _tag_rooms(linked.unlabeled, resolved.transform_point, level_view_map, host,
                       primary_doc, report, logger, link_id=resolved.link_id)

    remaining = classify_rooms(primary_doc.rooms, primary_doc.tags)
    report.remaining_unlabeled = [room_key(r) for r in remaining.unlabeled]
    report.success = True

    logger.info(u'Room tags placed: {0}, skipped: {1}'.format(report.placed_count, len(report.skips)))
    return report
