# -*- coding: utf-8 -*-
"""Opening placement run: snapshot -> plan -> place in one transaction."""
from datetime import datetime

import config_loader
import hole_core
import placement_engine
import ray_query
import rollback_utils
import service_reader
from utils_revit import get_logger, tx
from utils_units import format_mm


TRANSACTION_NAME = u'Расстановка отверстий'

_KIND_LABELS = {
    hole_core.SERVICE_DUCT: u'Воздуховод',
    hole_core.SERVICE_PIPE: u'Труба',
}


def collect_elements(duct_source, pipe_source, include_ducts=True, include_pipes=True):
    """Snapshots of ducts from duct_source and pipes from pipe_source."""
    snapshots = []
    skipped = []
    if include_ducts and duct_source is not None:
        s, k = service_reader.read_source(duct_source, include_ducts=True, include_pipes=False)
        snapshots.extend(s)
        skipped.extend(k)
    if include_pipes and pipe_source is not None:
        s, k = service_reader.read_source(pipe_source, include_ducts=False, include_pipes=True)
        snapshots.extend(s)
        skipped.extend(k)
    return snapshots, skipped


def plan(snapshots, query, margin, known_obstacles=None):
    logger = get_logger()
    specs, skipped = hole_core.plan_openings(snapshots, query, margin=margin,
                                             known_obstacles=known_obstacles)
    for eid, reason in skipped:
        logger.warning(u'Element {0} skipped: {1}'.format(eid, reason))
    logger.debug(u'Planned {0} openings for {1} elements'.format(len(specs), len(snapshots)))
    return specs, skipped


def make_comment_factory(rules, now=None):
    prefix = rules.get('comment_tag') or rollback_utils.DEFAULT_TAG_PREFIX
    stamp = now or datetime.now()

    def comment_for(spec):
        return rollback_utils.generate_tag(spec.kind, prefix=prefix, now=stamp)
    return comment_for


def run(doc, rules, duct_source, pipe_source, symbol, view3d, output=None):
    """Place openings for every duct/pipe crossing a host wall.

    Returns a summary dict with 'elements', 'planned', 'placed', 'skipped'
    and 'failed' counts.
    """
    logger = get_logger()
    margin = config_loader.get_margin_ft(rules)

    snapshots, read_skipped = collect_elements(
        duct_source, pipe_source,
        include_ducts=rules.get('include_ducts', True),
        include_pipes=rules.get('include_pipes', True))
    for eid, reason in read_skipped:
        logger.warning(u'Element {0} skipped: {1}'.format(eid, reason))

    walls = ray_query.collect_walls(doc)
    query = ray_query.make_wall_query(ray_query.make_intersector(view3d))
    specs, plan_skipped = plan(snapshots, query, margin, known_obstacles=walls)
    skipped = read_skipped + plan_skipped

    created = []
    failed = []
    if specs:
        with tx(TRANSACTION_NAME, doc, swallow_warnings=True):
            created, failed = placement_engine.place_openings(
                doc, symbol, specs, walls,
                rules.get('opening_width_param'),
                rules.get('opening_height_param'),
                comment_for=make_comment_factory(rules),
                limit=rules.get('max_place_count'))

    summary = {
        'elements': len(snapshots) + len(read_skipped),
        'planned': len(specs),
        'placed': len(created),
        'skipped': len(skipped),
        'failed': len(failed),
    }
    if output is not None:
        report(output, summary, specs, skipped, failed, symbol=symbol)
    return summary


def report(output, summary, specs, skipped, failed, symbol=None):
    output.print_md(u'# Расстановка отверстий')
    if symbol is not None:
        output.print_md(u'**Семейство:** {0}'.format(placement_engine.format_family_type(symbol)))
    output.print_md(u'**Элементов:** {0}  \n**Отверстий запланировано:** {1}  \n'
                    u'**Размещено:** {2}'.format(summary['elements'], summary['planned'], summary['placed']))

    counts = {}
    for spec in specs:
        counts[spec.kind] = counts.get(spec.kind, 0) + 1
    for kind in sorted(counts):
        output.print_md(u'- {0}: {1}'.format(_KIND_LABELS.get(kind, kind), counts[kind]))

    if skipped:
        output.print_md(u'## Пропущено элементов: {0}'.format(len(skipped)))
        for eid, reason in skipped:
            output.print_md(u'- {0}: {1}'.format(eid, reason))

    if failed:
        output.print_md(u'## Ошибки размещения: {0}'.format(len(failed)))
        for spec, reason in failed:
            output.print_md(u'- {0} {1}, стена {2}, {3} x {4}: {5}'.format(
                _KIND_LABELS.get(spec.kind, spec.kind), spec.source_id,
                spec.obstacle_id.element_id, format_mm(spec.width), format_mm(spec.height), reason))
