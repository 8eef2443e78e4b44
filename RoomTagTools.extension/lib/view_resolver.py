# -*- coding: utf-8 -*-
"""Level -> plan view lookup used to decide where a new tag goes."""
from typing import Dict, Iterable, Optional

from room_snapshot import DEFAULT_PLAN_VIEW_TYPES, PlanView


def is_eligible_view(view: PlanView, plan_types=DEFAULT_PLAN_VIEW_TYPES) -> bool:
    if view is None or view.is_template:
        return False
    if view.level_id is None:
        return False
    return view.is_plan(plan_types)


def build_level_view_map(views: Iterable[PlanView],
                         plan_types=DEFAULT_PLAN_VIEW_TYPES) -> Dict[object, PlanView]:
    """Map each level id to one non-template plan view.

    When several eligible views share a level the first one in `views` wins,
    so the result follows the collector order of the host document.
    """
    plan_types = tuple(plan_types or DEFAULT_PLAN_VIEW_TYPES)
    level_views = {}
    for view in views or ():
        if not is_eligible_view(view, plan_types):
            continue
        if view.level_id in level_views:
            continue
        level_views[view.level_id] = view
    return level_views


def resolve_view(level_view_map, level_id) -> Optional[PlanView]:
    if level_id is None:
        return None
    return level_view_map.get(level_id)
