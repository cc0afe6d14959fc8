# -*- coding: utf-8 -*-
"""Resolve the documents that supply ducts and pipes.

A source is either a loaded Revit link of the active document (geometry is
moved into host coordinates with the link's total transform) or any other
open document (used as is).
"""
from pyrevit import DB
from pyrevit import forms

from utils_revit import get_logger


class SourceModel(object):
    """Document holding service elements plus its transform into the host."""

    def __init__(self, doc, title, transform=None, link_instance=None):
        self.doc = doc
        self.title = title
        self.transform = transform
        self.link_instance = link_instance

    @property
    def is_link(self):
        return self.link_instance is not None

    def to_host_point(self, pt):
        if self.transform is None:
            return pt
        return self.transform.OfPoint(pt)

    def to_host_vector(self, vec):
        if self.transform is None:
            return vec
        return self.transform.OfVector(vec)

    def label(self):
        if self.is_link:
            return u'{0}  [связь]'.format(self.title)
        return self.title

    def __repr__(self):
        return 'SourceModel({0!r}, link={1})'.format(self.title, self.is_link)


def normalize_title(title):
    t = (title or u'').strip().lower()
    if t.endswith(u'.rvt'):
        t = t[:-4]
    return t.strip()


def list_link_instances(doc):
    return list(DB.FilteredElementCollector(doc)
                .OfClass(DB.RevitLinkInstance)
                .WhereElementIsNotElementType()
                .ToElements())


def get_link_doc(link_instance):
    try:
        return link_instance.GetLinkDocument()
    except Exception:
        # Unloaded links raise in some Revit versions
        return None


def get_total_transform(link_instance):
    t = link_instance.GetTotalTransform()
    return t if t else DB.Transform.Identity


def iter_candidate_sources(doc):
    """Loaded links first, then the other open documents. Titles are unique."""
    seen = set()

    for inst in list_link_instances(doc):
        link_doc = get_link_doc(inst)
        if link_doc is None:
            continue
        key = normalize_title(link_doc.Title)
        if key in seen:
            continue
        seen.add(key)
        yield SourceModel(link_doc, link_doc.Title, get_total_transform(inst), inst)

    app = getattr(doc, 'Application', None)
    for other in (getattr(app, 'Documents', None) or []):
        if other is None or other.Equals(doc):
            continue
        if getattr(other, 'IsFamilyDocument', False):
            continue
        key = normalize_title(other.Title)
        if key in seen:
            continue
        seen.add(key)
        yield SourceModel(other, other.Title)


def find_source(doc, titles):
    """First candidate whose title equals one of `titles` (normalized), else None."""
    wanted = [normalize_title(t) for t in titles or [] if t]
    if not wanted:
        return None
    candidates = list(iter_candidate_sources(doc))
    for w in wanted:
        for src in candidates:
            if normalize_title(src.title) == w:
                return src
    return None


def pick_source(doc, title):
    """Ask the user to pick a source document. None if cancelled."""
    candidates = list(iter_candidate_sources(doc))
    if not candidates:
        return None
    by_label = dict((src.label(), src) for src in candidates)
    picked = forms.SelectFromList.show(
        sorted(by_label.keys()),
        title=title,
        multiselect=False,
        button_name=u'Выбрать',
    )
    if not picked:
        return None
    return by_label.get(picked)


def resolve_source(doc, titles, prompt_title):
    src = find_source(doc, titles)
    if src is not None:
        get_logger().debug(u'Source for {0}: {1!r}'.format(prompt_title, src))
        return src
    if titles:
        get_logger().warning(u'Configured documents not open: {0}'.format(u', '.join(titles)))
    return pick_source(doc, prompt_title)
