# -*- coding: utf-8 -*-

"""Room Tag Tools shared library.

This folder is auto-added to sys.path by pyRevit for this extension.
Keep modules dependency-free (pyRevit + RevitAPI only).

Modules:
    room_snapshot: Rooms, tags, plan views and link references as plain objects
    room_classifier: Tagged / untagged room split
    view_resolver: Level -> plan view map
    link_transform: Link placement transforms and link resolution
    tag_placement: Placement run over host and linked rooms
    link_reader: Revit link document utilities
    config_loader: Configuration file loading
    utils_revit: Logging, alerts and transactions
"""

__version__ = "0.1.0"
__author__ = "Room Tag Tools Team"
