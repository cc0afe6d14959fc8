# -*- coding: utf-8 -*-

from pyrevit import DB

from utils_revit import (
    element_id_value,
    ensure_symbol_active,
    find_nearest_level,
    get_logger,
    is_valid_id,
    set_comments,
    set_double_param,
)


def format_family_type(symbol):
    """Return 'Family : Type' label."""
    if symbol is None:
        return ''
    fam_name = getattr(symbol, 'FamilyName', None) or ''
    if not fam_name:
        fam = getattr(symbol, 'Family', None)
        fam_name = fam.Name if fam else ''
    return u'{0} : {1}'.format(fam_name, symbol.Name).strip()


def iter_family_symbols(doc, category_bic=None):
    """Yield FamilySymbol, optionally filtered by category."""
    if doc is None:
        return
    col = DB.FilteredElementCollector(doc).OfClass(DB.FamilySymbol)
    if category_bic is not None:
        col = col.OfCategory(category_bic)
    for s in col:
        yield s


def _norm(s):
    return (s or u'').strip().lower()


def find_opening_symbol(doc, family_name, type_name=None,
                        category_bic=DB.BuiltInCategory.OST_GenericModel):
    """First FamilySymbol of `family_name` (and `type_name`, if given) in Generic Models."""
    n_fam = _norm(family_name)
    n_type = _norm(type_name)
    if not n_fam:
        return None
    for s in iter_family_symbols(doc, category_bic=category_bic):
        if _norm(getattr(s, 'FamilyName', None)) != n_fam:
            continue
        if n_type and _norm(s.Name) != n_type:
            continue
        return s
    return None


def get_wall_level(doc, wall, z_ft):
    level_id = getattr(wall, 'LevelId', None)
    if is_valid_id(level_id):
        lvl = doc.GetElement(level_id)
        if lvl is not None:
            return lvl
    return find_nearest_level(doc, z_ft)


def place_opening(doc, symbol, spec, wall, width_param, height_param, comment=None):
    """Create a wall-hosted opening for an OpeningSpec.

    Returns (instance, missing) where `missing` lists the size parameters
    that could not be written (absent or read-only on the family).
    """
    ensure_symbol_active(doc, symbol)

    point = DB.XYZ(spec.point[0], spec.point[1], spec.point[2])
    level = get_wall_level(doc, wall, spec.point[2])
    if level is None:
        raise Exception('No Level found in host doc to place opening.')

    inst = doc.Create.NewFamilyInstance(
        point,
        symbol,
        wall,
        level,
        DB.Structure.StructuralType.NonStructural
    )

    missing = []
    if not set_double_param(inst, width_param, spec.width):
        missing.append(width_param)
    if not set_double_param(inst, height_param, spec.height):
        missing.append(height_param)
    if comment is not None:
        set_comments(inst, comment)
    return inst, missing


def place_openings(doc, symbol, specs, walls, width_param, height_param,
                   comment_for=None, limit=None, continue_on_error=True):
    """Place every OpeningSpec whose obstacle is in `walls` (ObstacleId -> Wall).

    comment_for: optional callable(spec) -> Comments value.
    Returns (created, failed); failed holds (spec, reason).
    """
    logger = get_logger()
    created = []
    failed = []
    for spec in specs or []:
        if limit is not None and len(created) >= limit:
            failed.append((spec, 'limit reached'))
            continue
        wall = walls.get(spec.obstacle_id)
        if wall is None:
            failed.append((spec, 'wall not found'))
            continue
        comment = comment_for(spec) if comment_for else None
        try:
            inst, missing = place_opening(doc, symbol, spec, wall, width_param, height_param, comment)
        except Exception as ex:
            if not continue_on_error:
                raise
            logger.warning(u'Opening for element {0} in wall {1} failed: {2}'.format(
                spec.source_id, spec.obstacle_id.element_id, ex))
            failed.append((spec, str(ex)))
            continue
        if missing:
            logger.warning(u'Opening {0}: parameters not set: {1}'.format(
                element_id_value(inst.Id), u', '.join(missing)))
        created.append(inst)
    return created, failed
