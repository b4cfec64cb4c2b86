"""BeautifulSoup helpers locating and bookkeeping ``data-ice`` markers."""

from __future__ import annotations

from collections.abc import Iterable
import copy
from typing import Any

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.element import NavigableString, PageElement, Tag


MARKER_ATTR = "data-ice"
LOADED_ATTR = "data-ice-loaded"
LOADED_VALUE = "1"

FRAGMENT_PARSER = "html.parser"


def parse_document(html: str, parser: str = FRAGMENT_PARSER) -> BeautifulSoup:
    """Parse ``html`` with ``parser``, falling back to the bundled parser."""
    try:
        return BeautifulSoup(html, parser, multi_valued_attributes=None)
    except FeatureNotFound:
        return BeautifulSoup(html, FRAGMENT_PARSER, multi_valued_attributes=None)


def parse_fragment(html: str) -> list[PageElement]:
    """Return the top-level nodes of an HTML fragment, detached from any tree."""
    soup = BeautifulSoup(html, FRAGMENT_PARSER, multi_valued_attributes=None)
    return [node.extract() for node in list(soup.contents)]


def find_markers(root: Tag, marker_id: str) -> list[Tag]:
    """Return descendants of ``root`` tagged with ``marker_id`` in document order."""
    return [
        node
        for node in root.find_all(attrs={MARKER_ATTR: marker_id})
        if not is_inside_loaded(node)
    ]


def is_inside_loaded(node: Tag) -> bool:
    """Return True when an ancestor of ``node`` already received a sub-template."""
    return node.find_parent(attrs={LOADED_ATTR: True}) is not None


def mark_loaded(node: Tag) -> Tag:
    """Flag ``node`` as filled by a sub-template and return it for chaining."""
    node[LOADED_ATTR] = LOADED_VALUE
    return node


def strip_loaded(root: Tag) -> list[Tag]:
    """Remove loaded flags below ``root`` and return the affected nodes."""
    nodes = root.find_all(attrs={LOADED_ATTR: True})
    for node in nodes:
        del node[LOADED_ATTR]
    return nodes


def restore_loaded(nodes: Iterable[Tag]) -> None:
    for node in nodes:
        mark_loaded(node)


def coerce_attribute(value: Any) -> str:
    """Normalise a BeautifulSoup attribute value to a string."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, Iterable):
        return " ".join(str(item) for item in value)
    return str(value)


def clone(node: Tag) -> Tag:
    """Return a detached deep copy of ``node``."""
    return copy.copy(node)


def make_container(node: Tag) -> Tag:
    """Wrap ``node`` into a throwaway ``<div>`` that does not belong to any document."""
    container = BeautifulSoup("", FRAGMENT_PARSER).new_tag("div")
    container.append(node)
    return container


def separator() -> NavigableString:
    return NavigableString("\n")


def inner_html(node: Tag) -> str:
    return node.decode_contents()


def set_inner_html(node: Tag, html: str) -> None:
    """Replace the children of ``node`` with the parsed ``html`` fragment."""
    node.clear()
    for child in parse_fragment(html):
        node.append(child)


def remove_all(nodes: Iterable[Tag]) -> None:
    for node in nodes:
        node.extract()


__all__ = [
    "FRAGMENT_PARSER",
    "LOADED_ATTR",
    "LOADED_VALUE",
    "MARKER_ATTR",
    "clone",
    "coerce_attribute",
    "find_markers",
    "inner_html",
    "is_inside_loaded",
    "make_container",
    "mark_loaded",
    "parse_document",
    "parse_fragment",
    "remove_all",
    "restore_loaded",
    "separator",
    "set_inner_html",
    "strip_loaded",
]
