# -*- coding: utf-8 -*-

"""Opening Tools shared library.

This folder is auto-added to sys.path by pyRevit for this extension.
hole_geometry and hole_core import nothing from RevitAPI; the rest
talk to Revit through pyRevit.

Modules:
    hole_geometry: Vector helpers on (x, y, z) tuples
    hole_core: Ray hit filtering, deduplication and opening sizing
    config_loader: Configuration file loading
    utils_units: Unit conversion between mm and feet
    utils_revit: Logging, alerts, parameters, transactions
    link_reader: Source document (ОВ / ВК) resolution
    service_reader: Duct and pipe snapshots
    ray_query: Wall ReferenceIntersector query
    placement_engine: Opening family placement
    rollback_utils: Tagging and removal of placed openings
    hole_orchestrator: Full placement run
"""

__version__ = "0.1.0"
__author__ = "Opening Tools Team"
