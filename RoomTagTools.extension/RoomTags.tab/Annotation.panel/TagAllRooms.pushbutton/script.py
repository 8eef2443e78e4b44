# -*- coding: utf-8 -*-
"""Tag all untagged rooms in the active model, optionally including linked models."""

from pyrevit import revit, script

import adapters
import orchestrator
from tag_placement import NoTagStyleAvailable
from utils_revit import alert, ask_yes_no, log_exception

logger = script.get_logger()


def main():
    doc = revit.doc
    output = script.get_output()
    rules = adapters.get_rules()
    title = rules.get('dialog_title') or u'Room Tagger'

    include_linked = bool(rules.get('include_linked_default'))
    if rules.get('prompt_include_linked'):
        include_linked = ask_yes_no(u'Include rooms from linked models?', title=title,
                                    default=include_linked)

    try:
        report = orchestrator.run_tag_all_rooms(doc, output, include_linked=include_linked,
                                                rules=rules)
    except NoTagStyleAvailable as exc:
        alert(u'{0}'.format(exc), title=title)
        return
    except Exception as exc:
        log_exception(u'Tag All Rooms failed')
        alert(u'{0}'.format(exc), title=title)
        return

    alert(u'Room tags placed: {0}'.format(report.placed_count), title=title, warn_icon=False)


if __name__ == '__main__':
    main()
