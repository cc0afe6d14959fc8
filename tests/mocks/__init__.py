# -*- coding: utf-8 -*-
"""Mock modules for testing Revit-dependent code without Revit."""

from .revit_api import DB, mock_document, mock_duct, mock_hit, mock_line, mock_pipe, mock_xyz

__all__ = ["DB", "mock_xyz", "mock_line", "mock_pipe", "mock_duct", "mock_hit", "mock_document"]
