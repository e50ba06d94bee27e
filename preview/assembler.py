"""
Build the preview block from an extracted triple and mount it into the host page.
"""

from lxml.html import HtmlElement, Element

from common.dom import find_by_class
from .errors import MissingFragmentError
from .extractor import ExtractedTriple
from .snippet import shorten_text


def _replace_text(element: HtmlElement, text: str) -> None:
    # same effect as assigning textContent
    for child in list(element):
        element.remove(child)
    element.text = text


def build_preview(
    triple: ExtractedTriple,
    budget: int,
    container_tag: str = "p",
    container_class: str = "antext",
) -> HtmlElement:
    """Move the triple's nodes into a new container, text node shortened.

    The nodes leave the parsed fragment; they are not copied. The container
    carries the same class as the text node so the page stylesheet applies
    to both.
    """
    container = Element(container_tag)
    container.set("class", container_class)

    _replace_text(triple.text, shorten_text(triple.text.text_content(), budget))

    for node in triple:
        # lxml moves tail text along with the element
        node.tail = None
        container.append(node)

    return container


def mount_preview(host: HtmlElement, container: HtmlElement, mount_marker: str = "announcements") -> HtmlElement:
    target = find_by_class(host, mount_marker)
    if target is None:
        raise MissingFragmentError(mount_marker, where="host page")
    target.append(container)
    return target
