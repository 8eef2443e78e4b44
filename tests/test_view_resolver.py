# -*- coding: utf-8 -*-
"""Tests for the level -> plan view map."""
import unittest

import view_resolver
from room_snapshot import PlanView


class TestBuildLevelViewMap(unittest.TestCase):
    def test_first_eligible_view_wins(self):
        views = [
            PlanView(100, level_id=1, is_template=True),
            PlanView(101, level_id=1, view_type="CeilingPlan"),
            PlanView(102, level_id=1),
            PlanView(103, level_id=1),
            PlanView(201, level_id=2),
        ]
        result = view_resolver.build_level_view_map(views)
        self.assertEqual(sorted(result), [1, 2])
        self.assertEqual(result[1].view_id, 102)
        self.assertEqual(result[2].view_id, 201)

    def test_order_of_input_decides_tie_break(self):
        views = [PlanView(103, level_id=1), PlanView(102, level_id=1)]
        result = view_resolver.build_level_view_map(views)
        self.assertEqual(result[1].view_id, 103)

    def test_level_with_only_templates_has_no_entry(self):
        views = [PlanView(100, level_id=1, is_template=True), PlanView(201, level_id=2)]
        result = view_resolver.build_level_view_map(views)
        self.assertNotIn(1, result)
        self.assertIn(2, result)

    def test_views_without_level_are_ignored(self):
        result = view_resolver.build_level_view_map([PlanView(100, level_id=None)])
        self.assertEqual(result, {})

    def test_empty(self):
        self.assertEqual(view_resolver.build_level_view_map([]), {})
        self.assertEqual(view_resolver.build_level_view_map(None), {})

    def test_every_entry_is_non_template_plan(self):
        views = [
            PlanView(i, level_id=i % 3, is_template=(i % 2 == 0),
                     view_type=("FloorPlan" if i % 5 else "Section"))
            for i in range(1, 30)
        ]
        for view in view_resolver.build_level_view_map(views).values():
            self.assertFalse(view.is_template)
            self.assertEqual(view.view_type, "FloorPlan")

    def test_custom_plan_types(self):
        views = [PlanView(101, level_id=1, view_type="CeilingPlan"), PlanView(102, level_id=1)]
        result = view_resolver.build_level_view_map(views, plan_types=["CeilingPlan", "FloorPlan"])
        self.assertEqual(result[1].view_id, 101)


class TestResolveView(unittest.TestCase):
    def test_resolve(self):
        view = PlanView(102, level_id=1)
        level_map = {1: view}
        self.assertIs(view_resolver.resolve_view(level_map, 1), view)
        self.assertIsNone(view_resolver.resolve_view(level_map, 2))
        self.assertIsNone(view_resolver.resolve_view(level_map, None))


if __name__ == "__main__":
    unittest.main()
