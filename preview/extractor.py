"""
Parse a fetched announcements page and pick out the fragments the preview reuses.
"""

from typing import NamedTuple

from lxml import etree
from lxml.html import HtmlElement, fragment_fromstring

from common.dom import find_by_class
from .errors import FragmentParseError, MissingFragmentError


class Markers(NamedTuple):
    title: str = "antitle"
    date: str = "andate"
    text: str = "antext"


class ExtractedTriple(NamedTuple):
    title: HtmlElement
    date: HtmlElement
    text: HtmlElement


def parse_fragment(html_text: str) -> HtmlElement:
    """Parse markup into a detached <div>, the way innerHTML fills a scratch element.

    For a full document only the body's content ends up in the div.
    """
    try:
        # lxml asserts when a full document has no <body>
        return fragment_fromstring(html_text, create_parent="div")
    except (etree.ParserError, ValueError, AssertionError) as e:
        raise FragmentParseError(f"could not parse fetched page: {e}") from e


def extract_triple(fragment: HtmlElement, markers: Markers = Markers()) -> ExtractedTriple:
    found = {}
    for field, marker in zip(ExtractedTriple._fields, markers):
        element = find_by_class(fragment, marker)
        if element is None:
            raise MissingFragmentError(marker)
        found[field] = element
    return ExtractedTriple(**found)
