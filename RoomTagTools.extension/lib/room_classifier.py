# -*- coding: utf-8 -*-
"""Split rooms into tagged and untagged ones.

Works on already typed collections from a `DocumentSnapshot`; there is no
element-stream type sniffing here.

Example:
    >>> result = classify_rooms(snapshot.rooms, snapshot.tags)
    >>> [r.number for r in result.unlabeled]
"""
from typing import Iterable, List, Set, Tuple

from room_snapshot import Room, RoomTag, room_key


class RoomClassification:
    """Result of `classify_rooms`.

    Attributes:
        rooms: Taggable rooms in input order.
        excluded: Rooms without a point, with non-positive area or without
            a resolved level. They are never placed.
        labeled: Taggable rooms referenced by at least one tag.
        unlabeled: `rooms` minus `labeled`, in input order.
    """

    def __init__(self, rooms, excluded, labeled, unlabeled):
        self.rooms = rooms
        self.excluded = excluded
        self.labeled = labeled
        self.unlabeled = unlabeled

    def __repr__(self):
        return 'RoomClassification(rooms={0}, labeled={1}, unlabeled={2}, excluded={3})'.format(
            len(self.rooms), len(self.labeled), len(self.unlabeled), len(self.excluded))


def is_taggable(room: Room) -> bool:
    if room is None:
        return False
    if room.point is None:
        return False
    if room.level_id is None:
        return False
    return room.area > 0


def tagged_room_keys(tags: Iterable[RoomTag]) -> Set[Tuple]:
    keys = set()
    for tag in tags or ():
        if tag is None or tag.room_id is None:
            continue
        keys.add(tag.room_key)
    return keys


def classify_rooms(rooms: Iterable[Room], tags: Iterable[RoomTag]) -> RoomClassification:
    """Classify rooms by whether any tag references them.

    Tags pointing at rooms that are not in `rooms` are ignored. Empty inputs
    give empty results.
    """
    taggable: List[Room] = []
    excluded: List[Room] = []
    for room in rooms or ():
        if is_taggable(room):
            taggable.append(room)
        else:
            excluded.append(room)

    keys = tagged_room_keys(tags)
    labeled = [r for r in taggable if room_key(r) in keys]
    unlabeled = [r for r in taggable if room_key(r) not in keys]
    return RoomClassification(taggable, excluded, labeled, unlabeled)
