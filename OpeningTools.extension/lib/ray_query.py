# -*- coding: utf-8 -*-
"""Wall ray query over DB.ReferenceIntersector.

make_wall_query() returns a callable with the signature hole_core expects:
query(origin, direction) -> [(ObstacleId, proximity), ...].
"""
from pyrevit import DB

import hole_core
from utils_revit import element_id_value, is_valid_id


def find_3d_view(doc, name=None):
    """Named non-template 3D view, else the first non-template one, else None."""
    views = [v for v in DB.FilteredElementCollector(doc).OfClass(DB.View3D)
             if not v.IsTemplate]
    if name:
        for v in views:
            if v.Name == name:
                return v
    return views[0] if views else None


def collect_walls(doc):
    """Host walls keyed by ObstacleId."""
    walls = {}
    col = DB.FilteredElementCollector(doc).OfClass(DB.Wall).WhereElementIsNotElementType()
    for w in col:
        walls[hole_core.make_obstacle_id(element_id_value(w.Id))] = w
    return walls


def reference_obstacle_id(reference):
    """(link instance id, linked element id) for link hits, (None, element id) otherwise."""
    linked = reference.LinkedElementId
    if is_valid_id(linked):
        return hole_core.make_obstacle_id(element_id_value(linked), element_id_value(reference.ElementId))
    return hole_core.make_obstacle_id(element_id_value(reference.ElementId))


def make_intersector(view3d):
    return DB.ReferenceIntersector(
        DB.ElementClassFilter(DB.Wall),
        DB.FindReferenceTarget.Element,
        view3d)


def _to_xyz(p):
    if isinstance(p, DB.XYZ):
        return p
    return DB.XYZ(p[0], p[1], p[2])


def make_wall_query(intersector):
    def query(origin, direction):
        hits = []
        for rwc in intersector.Find(_to_xyz(origin), _to_xyz(direction)):
            hits.append((reference_obstacle_id(rwc.GetReference()), rwc.Proximity))
        return hits
    return query
