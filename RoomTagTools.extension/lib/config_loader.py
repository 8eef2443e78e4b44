# -*- coding: utf-8 -*-
"""Configuration loader for Room Tag Tools.

Loads rules from a JSON file and fills in defaults for missing keys.
"""
import copy
import io
import json
import os


DEFAULT_RULES = {
    # 'Family : Type' of the room tag to use; empty picks the first loaded one.
    'room_tag_type_name': u'',
    'include_linked_default': True,
    'prompt_include_linked': True,
    'plan_view_types': ['FloorPlan'],
    'transaction_name': u'Tag All Rooms',
    'dialog_title': u'Room Tagger',
    'show_skip_details': False,
    'max_skip_lines': 50,
}


def _extension_root_from_lib():
    """Extension root directory, resolved from the lib folder."""
    return os.path.dirname(os.path.dirname(__file__))


def get_default_rules_path():
    return os.path.join(_extension_root_from_lib(), 'config', 'rules.default.json')


def apply_defaults(data):
    """Return a copy of `data` with every missing default key filled in."""
    rules = dict(data or {})
    for key, val in DEFAULT_RULES.items():
        if key not in rules:
            rules[key] = copy.deepcopy(val)
    return rules


def load_rules(path=None):
    """Load rules from a JSON config file.

    Args:
        path: Path to the JSON config. If None, the bundled default rules file
            is used.

    Returns:
        Dict with all configuration keys, defaults applied.

    Raises:
        IOError/OSError: the file cannot be read.
        ValueError: the file is not valid JSON or not a JSON object.
    """
    rules_path = path or get_default_rules_path()
    with io.open(rules_path, 'rb') as fb:
        raw = fb.read()
    # utf-8-sig also strips a BOM written by Windows editors
    data = json.loads(raw.decode('utf-8-sig'))
    if not isinstance(data, dict):
        raise ValueError('Rules file must contain a JSON object: {0}'.format(rules_path))
    return apply_defaults(data)
