# -*- coding: utf-8 -*-
"""Opening planning: ray hits -> deduplicated hits -> sized openings.

No RevitAPI imports here. Callers pass element snapshots (ServiceElement)
and a ray query callable:

    query(origin, direction) -> iterable of (obstacle_id, proximity)

where obstacle_id is an ObstacleId or a (link_id, element_id) pair.

Example:
    >>> pipe = make_service_element(1, SERVICE_PIPE, (0, 0, 0), (1, 0, 0), 10.0,
    ...                             SECTION_ROUND, diameter=0.2)
    >>> specs = plan_element(pipe, lambda o, d: [((None, 7), 3.0), ((None, 7), 3.2)])
    >>> len(specs)
    1
"""
from collections import namedtuple

import hole_geometry


SERVICE_DUCT = 'duct'
SERVICE_PIPE = 'pipe'
SERVICE_KINDS = (SERVICE_DUCT, SERVICE_PIPE)

SECTION_ROUND = 'round'
SECTION_RECTANGULAR = 'rectangular'
SECTION_KINDS = (SECTION_ROUND, SECTION_RECTANGULAR)

# Feet (Revit internal units).
DEFAULT_CLEARANCE_FT = 0.1


class PreconditionError(Exception):
    """Input that cannot produce a correct opening (bad geometry, unknown obstacle)."""


# link_id is None for obstacles in the host document.
ObstacleId = namedtuple('ObstacleId', ['link_id', 'element_id'])

ObstacleHit = namedtuple('ObstacleHit', ['obstacle_id', 'proximity'])

ServiceElement = namedtuple('ServiceElement', [
    'element_id',
    'kind',
    'start',
    'direction',
    'length',
    'section',
    'diameter',
    'width',
    'height',
])

OpeningSpec = namedtuple('OpeningSpec', [
    'point',
    'obstacle_id',
    'width',
    'height',
    'source_id',
    'kind',
])


def make_obstacle_id(element_id, link_id=None):
    if element_id is None:
        raise PreconditionError('Obstacle without element id')
    return ObstacleId(None if link_id is None else int(link_id), int(element_id))


def _positive(value, what, element_id):
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise PreconditionError('Element {0}: {1} is missing'.format(element_id, what))
    if v <= 0.0:
        raise PreconditionError('Element {0}: {1} must be positive, got {2}'.format(element_id, what, v))
    return v


def make_service_element(element_id, kind, start, direction, length, section,
                         diameter=None, width=None, height=None):
    """Validate and freeze a duct/pipe snapshot.

    Direction is normalized here. Raises PreconditionError for a zero
    direction, non-positive length or a missing cross-section dimension.
    """
    if kind not in SERVICE_KINDS:
        raise PreconditionError('Element {0}: unknown service kind {1!r}'.format(element_id, kind))
    if section not in SECTION_KINDS:
        raise PreconditionError('Element {0}: unknown cross-section {1!r}'.format(element_id, section))

    try:
        start_t = hole_geometry.to_xyz_tuple(start)
        dir_t = hole_geometry.to_xyz_tuple(direction)
    except ValueError as ex:
        raise PreconditionError('Element {0}: {1}'.format(element_id, ex))

    unit = hole_geometry.normalize(dir_t)
    if unit is None:
        raise PreconditionError('Element {0}: zero-length direction'.format(element_id))

    length_v = _positive(length, 'length', element_id)

    if section == SECTION_ROUND:
        diameter = _positive(diameter, 'diameter', element_id)
        width = height = None
    else:
        width = _positive(width, 'width', element_id)
        height = _positive(height, 'height', element_id)
        diameter = None

    return ServiceElement(element_id, kind, start_t, unit, length_v, section, diameter, width, height)


def _as_hit(raw):
    if isinstance(raw, ObstacleHit):
        oid, prox = raw
    else:
        oid, prox = raw[0], raw[1]
    if not isinstance(oid, ObstacleId):
        oid = make_obstacle_id(oid[1], oid[0])
    return ObstacleHit(oid, float(prox))


def scan_hits(element, query):
    """Cast the element's ray and keep hits with 0 <= proximity < length."""
    hits = []
    for raw in query(element.start, element.direction) or []:
        hit = _as_hit(raw)
        if 0.0 <= hit.proximity < element.length:
            hits.append(hit)
    return hits


def order_hits(hits):
    """Ascending proximity; stable for equal proximities."""
    return sorted(hits, key=lambda h: h.proximity)


def dedupe_hits(hits):
    """One hit per ObstacleId, first seen wins."""
    seen = set()
    out = []
    for hit in hits:
        if hit.obstacle_id in seen:
            continue
        seen.add(hit.obstacle_id)
        out.append(hit)
    return out


def opening_size(element, margin=DEFAULT_CLEARANCE_FT):
    """Return (width, height) of the opening for this element."""
    m = float(margin)
    if element.section == SECTION_ROUND:
        d = element.diameter + m
        return d, d
    return element.width + m, element.height + m


def opening_for_hit(element, hit, margin=DEFAULT_CLEARANCE_FT):
    width, height = opening_size(element, margin)
    point = hole_geometry.point_along(element.start, element.direction, hit.proximity)
    return OpeningSpec(point, hit.obstacle_id, width, height, element.element_id, element.kind)


def check_known_obstacles(element, hits, known_obstacles):
    if known_obstacles is None:
        return
    for hit in hits:
        if hit.obstacle_id not in known_obstacles:
            raise PreconditionError('Element {0}: hit on unknown obstacle {1}'.format(
                element.element_id, tuple(hit.obstacle_id)))


def plan_element(element, query, margin=DEFAULT_CLEARANCE_FT, known_obstacles=None):
    """Scan, order, deduplicate and size the openings of one element.

    known_obstacles: optional container of ObstacleId; a retained hit
    outside it raises PreconditionError.
    """
    hits = dedupe_hits(order_hits(scan_hits(element, query)))
    check_known_obstacles(element, hits, known_obstacles)
    return [opening_for_hit(element, hit, margin) for hit in hits]


def plan_openings(elements, query, margin=DEFAULT_CLEARANCE_FT, known_obstacles=None):
    """Plan all elements. Returns (specs, skipped).

    skipped is a list of (element_id, reason) for elements whose planning
    raised PreconditionError; the other elements are unaffected.
    """
    specs = []
    skipped = []
    for element in elements or []:
        try:
            specs.extend(plan_element(element, query, margin=margin, known_obstacles=known_obstacles))
        except PreconditionError as ex:
            skipped.append((element.element_id, str(ex)))
    return specs, skipped
