# -*- coding: utf-8 -*-
"""Duct/pipe collection and snapshotting into hole_core.ServiceElement."""
from pyrevit import DB

import hole_core
from utils_revit import element_id_value


def iter_ducts(doc):
    if doc is None:
        return []
    return (DB.FilteredElementCollector(doc)
            .OfClass(DB.Mechanical.Duct)
            .WhereElementIsNotElementType())


def iter_pipes(doc):
    if doc is None:
        return []
    return (DB.FilteredElementCollector(doc)
            .OfClass(DB.Plumbing.Pipe)
            .WhereElementIsNotElementType())


def is_round_duct(duct):
    return duct.get_Parameter(DB.BuiltInParameter.RBS_CURVE_DIAMETER_PARAM) is not None


def get_line(elem):
    """Location line of a curve-based element; PreconditionError for arcs, splines, points."""
    loc = getattr(elem, 'Location', None)
    curve = getattr(loc, 'Curve', None) if loc is not None else None
    if curve is None:
        raise hole_core.PreconditionError(
            'Element {0}: no location curve'.format(element_id_value(elem.Id)))
    if not isinstance(curve, DB.Line):
        raise hole_core.PreconditionError(
            'Element {0}: location curve is not a straight line ({1})'.format(
                element_id_value(elem.Id), type(curve).__name__))
    return curve


def snapshot_element(elem, kind, source=None):
    """Freeze a duct or pipe into host coordinates."""
    line = get_line(elem)
    start = line.GetEndPoint(0)
    direction = line.Direction
    if source is not None:
        start = source.to_host_point(start)
        direction = source.to_host_vector(direction)

    eid = element_id_value(elem.Id)
    if kind == hole_core.SERVICE_PIPE or is_round_duct(elem):
        return hole_core.make_service_element(
            eid, kind, start, direction, line.Length,
            hole_core.SECTION_ROUND, diameter=elem.Diameter)
    return hole_core.make_service_element(
        eid, kind, start, direction, line.Length,
        hole_core.SECTION_RECTANGULAR, width=elem.Width, height=elem.Height)


def collect_snapshots(elements, kind, source=None):
    """Returns (snapshots, skipped); skipped holds (element_id, reason)."""
    snapshots = []
    skipped = []
    for elem in elements or []:
        try:
            snapshots.append(snapshot_element(elem, kind, source))
        except hole_core.PreconditionError as ex:
            skipped.append((element_id_value(elem.Id), str(ex)))
    return snapshots, skipped


def read_source(source, include_ducts=True, include_pipes=True):
    """Snapshot ducts and/or pipes of a SourceModel."""
    snapshots = []
    skipped = []
    if source is None:
        return snapshots, skipped
    if include_ducts:
        s, k = collect_snapshots(iter_ducts(source.doc), hole_core.SERVICE_DUCT, source)
        snapshots.extend(s)
        skipped.extend(k)
    if include_pipes:
        s, k = collect_snapshots(iter_pipes(source.doc), hole_core.SERVICE_PIPE, source)
        snapshots.extend(s)
        skipped.extend(k)
    return snapshots, skipped
