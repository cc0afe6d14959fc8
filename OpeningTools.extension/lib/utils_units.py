# -*- coding: utf-8 -*-

"""Length conversion between millimeters and Revit internal feet.

Opening sizes and the clearance margin are stored in feet inside Revit;
the config and the run report speak millimeters.

Example:
    >>> from utils_units import mm_to_ft, ft_to_mm
    >>> round(mm_to_ft(30.48), 4)
    0.1
    >>> round(ft_to_mm(0.4), 1)
    121.9
"""
from typing import Optional, Union


MM_PER_FOOT: float = 304.8


def mm_to_ft(mm: Optional[Union[float, int, str]]) -> Optional[float]:
    """Millimeters to feet. None passes through."""
    if mm is None:
        return None
    return float(mm) / MM_PER_FOOT


def ft_to_mm(ft: Optional[Union[float, int, str]]) -> Optional[float]:
    """Feet to millimeters. None passes through."""
    if ft is None:
        return None
    return float(ft) * MM_PER_FOOT


def format_mm(ft: Optional[float]) -> str:
    """Feet value as a rounded millimeter label for reports, e.g. '122 мм'."""
    mm = ft_to_mm(ft)
    if mm is None:
        return u'-'
    return u'{0:.0f} мм'.format(mm)
