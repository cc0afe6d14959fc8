# -*- coding: utf-8 -*-

import traceback

from pyrevit import DB
from pyrevit import forms
from pyrevit import revit
from pyrevit import script


TOOL_TITLE = 'Opening Tools'


def get_logger():
    return script.get_logger()


def _safe_log(logger_method, msg):
    try:
        logger_method(msg)
    except UnicodeEncodeError:
        try:
            # repr escapes non-ascii
            logger_method(repr(msg))
        except Exception:
            logger_method("<Log message encoding failed>")


def alert(msg, title=TOOL_TITLE, warn_icon=True):
    try:
        forms.alert(msg, title=title, warn_icon=warn_icon)
    except Exception:
        # UI unavailable (e.g. journal playback)
        _safe_log(get_logger().warning, msg)


def log_exception(prefix='Error'):
    logger = get_logger()
    _safe_log(logger.error, prefix)
    _safe_log(logger.error, traceback.format_exc())


def element_id_value(eid):
    """Integer value of an ElementId (Revit 2024+ exposes .Value)."""
    if eid is None:
        return None
    val = getattr(eid, 'Value', None)
    if val is None:
        val = getattr(eid, 'IntegerValue', None)
    return None if val is None else int(val)


def is_valid_id(eid):
    val = element_id_value(eid)
    return val is not None and val >= 0


def find_nearest_level(doc, z_ft):
    """Nearest Level by elevation to given Z (feet)."""
    levels = list(DB.FilteredElementCollector(doc).OfClass(DB.Level).ToElements())
    best = None
    best_d = None
    for lvl in levels:
        d = abs(float(lvl.Elevation) - float(z_ft))
        if best is None or d < best_d:
            best = lvl
            best_d = d
    return best


def ensure_symbol_active(doc, family_symbol):
    if family_symbol is None:
        return
    if not family_symbol.IsActive:
        family_symbol.Activate()
        doc.Regenerate()


def get_param(elem, name):
    if elem is None or not name:
        return None
    try:
        return elem.LookupParameter(name)
    except Exception:
        return None


def set_double_param(elem, param_name, value):
    """Set a length/number parameter. False if missing or read-only."""
    p = get_param(elem, param_name)
    if p is None or p.IsReadOnly:
        return False
    p.Set(float(value))
    return True


def set_string_param(elem, param_name, value):
    p = get_param(elem, param_name)
    if p is None or p.IsReadOnly:
        return False
    p.Set(u'' if value is None else value)
    return True


def set_comments(elem, value):
    if elem is None:
        return False

    p = elem.get_Parameter(DB.BuiltInParameter.ALL_MODEL_INSTANCE_COMMENTS)
    if p is not None and not p.IsReadOnly:
        p.Set(u'' if value is None else value)
        return True

    # Fallback by name
    if set_string_param(elem, 'Comments', value):
        return True
    return set_string_param(elem, u'Комментарии', value)


def tx(name, doc=None, swallow_warnings=False):
    """Transaction context manager. Rolls back on any exception.

    Usage:
        with tx(u'Расстановка отверстий', doc):
            ...
    """
    doc = doc or revit.doc
    t = DB.Transaction(doc, name)

    preproc = None
    if swallow_warnings:
        class _WarningsPreprocessor(DB.IFailuresPreprocessor):
            def PreprocessFailures(self, failuresAccessor):
                for m in failuresAccessor.GetFailureMessages():
                    if m.GetSeverity() == DB.FailureSeverity.Warning:
                        failuresAccessor.DeleteWarning(m)
                return DB.FailureProcessingResult.Continue

        preproc = _WarningsPreprocessor()

    class _Tx(object):
        def __enter__(self):
            t.Start()
            if preproc is not None:
                opts = t.GetFailureHandlingOptions()
                opts = opts.SetFailuresPreprocessor(preproc)
                t.SetFailureHandlingOptions(opts)
            return t

        def __exit__(self, exc_type, exc, tb):
            if exc_type:
                t.RollBack()
                return False
            try:
                t.Commit()
            except Exception:
                t.RollBack()
                raise
            return False

    return _Tx()
