# -*- coding: utf-8 -*-
"""Pytest fixtures for Opening Tools tests."""
import json
import os
import sys
import tempfile
import types
from unittest.mock import MagicMock

import pytest

ROOT = os.path.dirname(os.path.dirname(__file__))
EXT = os.path.join(ROOT, "OpeningTools.extension")
LIB = os.path.join(EXT, "lib")
if LIB not in sys.path:
    sys.path.insert(0, LIB)


# pyRevit only exists inside Revit; expose the mock DB namespace under its name.
if "pyrevit" not in sys.modules:
    from mocks.revit_api import DB as MockDB

    pyrevit_stub = types.ModuleType("pyrevit")
    pyrevit_stub.DB = MockDB
    pyrevit_stub.forms = MagicMock()
    pyrevit_stub.revit = MagicMock()
    pyrevit_stub.script = MagicMock()
    sys.modules["pyrevit"] = pyrevit_stub


@pytest.fixture
def temp_config_file():
    """Create a temporary config file and return its path. Cleans up after test."""
    files = []

    def _create(data, raw=None, encoding='utf-8'):
        f = tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False, encoding=encoding)
        if raw is not None:
            f.write(raw)
        else:
            json.dump(data, f, ensure_ascii=False)
        f.flush()
        f.close()
        files.append(f.name)
        return f.name

    yield _create

    for path in files:
        try:
            os.unlink(path)
        except OSError:
            pass


@pytest.fixture
def pyrevit_ui():
    """The forms/script test doubles, reset for each test."""
    import pyrevit

    pyrevit.forms.reset_mock(return_value=True, side_effect=True)
    pyrevit.script.reset_mock(return_value=True, side_effect=True)
    return pyrevit


@pytest.fixture
def straight_pipe():
    """Straight pipe: length 10 along X from the origin, diameter 0.2."""
    import hole_core

    return hole_core.make_service_element(
        1, hole_core.SERVICE_PIPE, (0, 0, 0), (1, 0, 0), 10.0,
        hole_core.SECTION_ROUND, diameter=0.2)
