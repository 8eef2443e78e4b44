# -*- coding: utf-8 -*-

from pyrevit import script

import adapters
from tag_placement import (
    SKIPPED_NO_VIEW,
    SKIPPED_UNRESOLVED_LINK,
    CREATION_FAILED,
    PlacementOptions,
    place_all_tags,
)
from utils_revit import tx

logger = script.get_logger()

SKIP_LABELS = {
    SKIPPED_NO_VIEW: u'no floor plan for level',
    SKIPPED_UNRESOLVED_LINK: u'link not loaded',
    CREATION_FAILED: u'tag creation failed',
}


def print_report(output, report, rules):
    if output is None:
        return
    output.print_md(u'Room tags placed: **{0}**'.format(report.placed_count))
    counts = report.skip_counts()
    if counts:
        output.print_md(u'Skipped: **{0}**'.format(len(report.skips)))
        for reason in sorted(counts):
            output.print_md(u'- {0}: {1}'.format(SKIP_LABELS.get(reason, reason), counts[reason]))

    if not rules.get('show_skip_details'):
        return
    limit = int(rules.get('max_skip_lines') or 0)
    for skip in report.skips[:limit]:
        output.print_md(u'- `{0}` {1}: {2}'.format(skip.room_key, skip.reason, skip.detail))
    if len(report.skips) > limit:
        output.print_md(u'... and {0} more'.format(len(report.skips) - limit))


def run_tag_all_rooms(doc, output=None, include_linked=None, rules=None):
    """Tag every untagged room of `doc` (and of its links when asked).

    Raises NoTagStyleAvailable when no room tag type can be used; the
    transaction is rolled back in that case.
    """
    rules = rules or adapters.get_rules()
    options = PlacementOptions.from_rules(rules, include_linked=include_linked)
    logger.debug(u'Run options: {0!r}'.format(options))

    primary = adapters.snapshot_document(doc, is_linked=False)
    links = adapters.collect_link_references(doc) if options.include_linked else []
    host = adapters.RevitTagHost(doc, rules)

    with tx(rules.get('transaction_name') or u'Tag All Rooms', doc=doc):
        report = place_all_tags(primary, links, options, host, logger=logger)

    print_report(output, report, rules)
    return report
