# -*- coding: utf-8 -*-
"""Mock modules for testing Revit-dependent code without Revit."""

from .revit_api import DB, MockDocument, mock_host_tag, mock_room, mock_xyz

__all__ = ["DB", "MockDocument", "mock_xyz", "mock_room", "mock_host_tag"]
