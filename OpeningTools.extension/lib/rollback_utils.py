# -*- coding: utf-8 -*-
"""Finding and removing openings placed by Opening Tools.

Placed openings carry a Comments tag of the form PREFIX:KIND:TIMESTAMP,
e.g. ``AUTO_HOLE:DUCT:20261019_143022``.

Example:
    >>> from rollback_utils import find_tagged_elements, delete_elements
    >>> elements = find_tagged_elements(doc, tool_filter="PIPE")
    >>> count = delete_elements(doc, elements)
"""
import re
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from pyrevit import DB

from utils_revit import get_logger, tx


DEFAULT_TAG_PREFIX = "AUTO_HOLE"


def _tag_pattern(prefix: str):
    return re.compile(
        r"^({0})(?::([A-Z_]+))?(?::(\d{{8}}_\d{{6}}))?$".format(re.escape(prefix)),
        re.IGNORECASE
    )


def parse_tag(comment: Optional[str], prefix: str = DEFAULT_TAG_PREFIX) -> Optional[Dict[str, str]]:
    """Parse an opening tag from an element comment.

    Returns:
        Dict with 'prefix', 'tool', 'timestamp' keys, or None if the
        comment is not a tag.

    Examples:
        >>> parse_tag("AUTO_HOLE:PIPE:20261019_143022")
        {'prefix': 'AUTO_HOLE', 'tool': 'PIPE', 'timestamp': '20261019_143022'}
        >>> parse_tag("AUTO_HOLE:DUCT")
        {'prefix': 'AUTO_HOLE', 'tool': 'DUCT', 'timestamp': None}
        >>> parse_tag("Отверстие 200x200")
    """
    if not comment:
        return None
    match = _tag_pattern(prefix).match(comment.strip())
    if not match:
        return None
    return {
        "prefix": match.group(1),
        "tool": match.group(2),
        "timestamp": match.group(3),
    }


def generate_tag(tool_name: str, prefix: str = DEFAULT_TAG_PREFIX,
                 include_timestamp: bool = True, now: Optional[datetime] = None) -> str:
    """Build a tag for the Comments of a placed opening.

    Examples:
        >>> generate_tag("duct", include_timestamp=False)
        'AUTO_HOLE:DUCT'
    """
    tool_name = tool_name.upper().replace(" ", "_")
    if include_timestamp:
        stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
        return "{}:{}:{}".format(prefix, tool_name, stamp)
    return "{}:{}".format(prefix, tool_name)


def _comment_of(elem) -> Optional[str]:
    p = elem.get_Parameter(DB.BuiltInParameter.ALL_MODEL_INSTANCE_COMMENTS)
    if p is None:
        return None
    return p.AsString()


def find_tagged_elements(doc, tool_filter: Optional[str] = None,
                         prefix: str = DEFAULT_TAG_PREFIX) -> List:
    """Generic Model instances whose Comments hold an opening tag."""
    if doc is None:
        return []

    collector = (
        DB.FilteredElementCollector(doc)
        .OfCategory(DB.BuiltInCategory.OST_GenericModel)
        .WhereElementIsNotElementType()
    )

    elements = []
    for elem in collector:
        parsed = parse_tag(_comment_of(elem), prefix)
        if not parsed:
            continue
        if tool_filter and (parsed.get("tool") or "").upper() != tool_filter.upper():
            continue
        elements.append(elem)
    return elements


def _tool_of(parsed: Dict[str, str]) -> Optional[str]:
    tool = parsed.get("tool")
    return tool.upper() if tool else None


def get_unique_tags(doc, prefix: str = DEFAULT_TAG_PREFIX) -> List[Tuple[Optional[str], int]]:
    """(TOOL, count) pairs, most frequent first.

    TOOL is None for openings tagged with the bare prefix.
    """
    tag_counts: Dict[Optional[str], int] = {}
    for elem in find_tagged_elements(doc, prefix=prefix):
        tool = _tool_of(parse_tag(_comment_of(elem), prefix))
        tag_counts[tool] = tag_counts.get(tool, 0) + 1
    return sorted(tag_counts.items(), key=lambda x: (-x[1], x[0] or ""))


def tag_label(tool: Optional[str], prefix: str = DEFAULT_TAG_PREFIX) -> str:
    """Display name of a tag group: 'AUTO_HOLE:PIPE', or the bare prefix."""
    if tool is None:
        return prefix.upper()
    return "{}:{}".format(prefix.upper(), tool.upper())


def group_label(tool: Optional[str], count: int, prefix: str = DEFAULT_TAG_PREFIX) -> str:
    return u"{0} ({1} шт.)".format(tag_label(tool, prefix), count)


def find_elements_for_tools(doc, tools: List[Optional[str]],
                            prefix: str = DEFAULT_TAG_PREFIX) -> List:
    """Tagged elements whose tool is one of `tools`; None selects tags without a tool."""
    wanted = set(t.upper() if t else None for t in tools or [])
    if not wanted:
        return []
    return [elem for elem in find_tagged_elements(doc, prefix=prefix)
            if _tool_of(parse_tag(_comment_of(elem), prefix)) in wanted]


def find_elements_for_labels(doc, tags: List[Tuple[Optional[str], int]], labels: List[str],
                             prefix: str = DEFAULT_TAG_PREFIX) -> List:
    """Elements of the groups whose group_label() is in `labels`.

    tags: result of get_unique_tags() the labels were built from.
    """
    picked = set(labels or [])
    tools = [tool for tool, count in tags if group_label(tool, count, prefix) in picked]
    return find_elements_for_tools(doc, tools, prefix=prefix)


def delete_elements(doc, elements: List, transaction_name: str = u"Удаление отверстий") -> int:
    """Delete elements in one transaction. Returns the number deleted."""
    if doc is None or not elements:
        return 0

    logger = get_logger()
    deleted = 0
    with tx(transaction_name, doc):
        for elem in elements:
            try:
                doc.Delete(elem.Id)
                deleted += 1
            except Exception as ex:
                # Already removed together with its host wall
                logger.debug(u"Delete {0} skipped: {1}".format(elem.Id, ex))
    return deleted
