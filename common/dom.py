"""
Element lookups by class marker and inline style editing on lxml trees.
"""

import math
from decimal import Decimal
from typing import Dict, Optional

from lxml import etree
from lxml.html import HtmlElement

_BY_CLASS = etree.XPath(
    "descendant::*[contains(concat(' ', normalize-space(@class), ' '), concat(' ', $name, ' '))]"
)


class MissingElementError(LookupError):
    """A required marker-tagged element is not in the document."""

    def __init__(self, marker: str):
        self.marker = marker
        super().__init__(f"no element marked '{marker}'")


def find_by_class(root: HtmlElement, name: str) -> Optional[HtmlElement]:
    """Return the first descendant of root whose class list contains name."""
    matches = _BY_CLASS(root, name=name)
    return matches[0] if matches else None


def require_by_class(root: HtmlElement, name: str) -> HtmlElement:
    element = find_by_class(root, name)
    if element is None:
        raise MissingElementError(name)
    return element


def parse_style(style: str) -> Dict[str, str]:
    declarations = {}
    for chunk in (style or "").split(";"):
        name, sep, value = chunk.partition(":")
        if sep and name.strip():
            declarations[name.strip().lower()] = value.strip()
    return declarations


def set_style(element: HtmlElement, prop: str, value: str) -> None:
    """Set one inline style property, keeping the other declarations."""
    declarations = parse_style(element.get("style", ""))
    declarations[prop] = value
    element.set("style", "; ".join(f"{k}: {v}" for k, v in declarations.items()))


def css_number(value: float) -> str:
    """Render a number the way a browser stringifies it into a style value.

    Same digits as repr(), laid out by the ECMAScript Number-to-String rules:
    plain notation for decimal exponents in [-6, 21), otherwise `1e-7` or `1e+21`.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = exponent + k  # position of the decimal point

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return sign + "0." + "0" * -n + digits

    mantissa = digits[0] + ("." + digits[1:] if k > 1 else "")
    return f"{sign}{mantissa}e{n - 1:+d}"
