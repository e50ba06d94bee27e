from dataclasses import dataclass
from enum import Enum
from typing import Optional

DEFAULT_BREAKPOINT = 768


class ViewportMode(Enum):
    WIDE = "wide"
    NARROW = "narrow"


@dataclass(frozen=True)
class Viewport:
    """One scroll sample as the browser reports it.

    The three offsets mirror window.pageYOffset, documentElement.scrollTop
    and body.scrollTop; engines fill in different ones.
    """

    inner_width: float
    page_y_offset: Optional[float] = None
    document_scroll_top: Optional[float] = None
    body_scroll_top: Optional[float] = None


def scroll_offset(viewport: Viewport) -> float:
    # zero falls through to the next source, same as the JS `||` chain
    return (
        viewport.page_y_offset
        or viewport.document_scroll_top
        or viewport.body_scroll_top
        or 0
    )


def viewport_mode(width: float, breakpoint: int = DEFAULT_BREAKPOINT) -> ViewportMode:
    return ViewportMode.WIDE if width >= breakpoint else ViewportMode.NARROW
