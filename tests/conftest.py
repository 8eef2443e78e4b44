# -*- coding: utf-8 -*-
"""Pytest fixtures for Room Tag Tools tests."""
import json
import os
import sys
import tempfile
import types
from unittest.mock import MagicMock

import pytest

ROOT = os.path.dirname(os.path.dirname(__file__))
EXT = os.path.join(ROOT, "RoomTagTools.extension")
LIB = os.path.join(EXT, "lib")
BUTTON = os.path.join(EXT, "RoomTags.tab", "Annotation.panel", "TagAllRooms.pushbutton")
for path in (LIB, BUTTON):
    if path not in sys.path:
        sys.path.insert(0, path)


# pyRevit only exists inside Revit; tests run against the Revit API mocks.
if "pyrevit" not in sys.modules:
    from mocks.revit_api import DB as MockDB

    pyrevit_stub = types.ModuleType("pyrevit")
    pyrevit_stub.DB = MockDB
    pyrevit_stub.forms = MagicMock()
    pyrevit_stub.revit = MagicMock()
    pyrevit_stub.script = MagicMock()
    sys.modules["pyrevit"] = pyrevit_stub


from room_snapshot import DocumentSnapshot, PlanView, Point, Room, RoomTag  # noqa: E402


HOST_KEY = "host.rvt"


@pytest.fixture
def temp_config_file():
    """Create a temporary config file and return its path. Cleans up after test."""
    files = []

    def _create(data):
        f = tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False, encoding='utf-8')
        json.dump(data, f, ensure_ascii=False)
        f.flush()
        f.close()
        files.append(f.name)
        return f.name

    yield _create

    for path in files:
        try:
            os.unlink(path)
        except OSError:
            pass


@pytest.fixture
def make_room():
    def _make(room_id, level_id=1, point=(0.0, 0.0), area=10.0, document_key=HOST_KEY):
        pt = Point(*point) if point is not None else None
        return Room(room_id, document_key, level_id=level_id, point=pt, area=area)
    return _make


@pytest.fixture
def make_tag():
    def _make(tag_id, room_id, document_key=HOST_KEY):
        return RoomTag(tag_id, room_id, document_key)
    return _make


@pytest.fixture
def floor_plans():
    """One floor plan per level 1 and 2, plus a template and a ceiling plan on level 1."""
    return [
        PlanView(100, level_id=1, is_template=True, name="Template"),
        PlanView(101, level_id=1, view_type="CeilingPlan", name="L1 RCP"),
        PlanView(102, level_id=1, name="L1"),
        PlanView(103, level_id=1, name="L1 Copy"),
        PlanView(201, level_id=2, name="L2"),
    ]


@pytest.fixture
def host_snapshot(floor_plans):
    def _make(rooms=(), tags=(), views=None):
        return DocumentSnapshot(
            HOST_KEY,
            title="Host",
            rooms=rooms,
            tags=tags,
            views=floor_plans if views is None else views,
        )
    return _make
