"""
Applies the scroll transforms to a page's header elements.

A variant says which recipe runs in which viewport mode. Desktop pages only
fade the top image on wide viewports; mobile-aware pages also shrink the
header on narrow ones.
"""

from typing import Dict, Mapping, Optional

import structlog
from lxml.html import HtmlElement

from common.config import ScrollSettings
from common.dom import MissingElementError, require_by_class, set_style
from .events import ScrollEventStream
from .transforms import RECIPES, StyleUpdates
from .viewport import DEFAULT_BREAKPOINT, Viewport, ViewportMode, scroll_offset, viewport_mode

logger = structlog.get_logger(__name__)

VariantRecipes = Mapping[ViewportMode, Optional[str]]

VARIANTS: Dict[str, VariantRecipes] = {
    "desktop": {ViewportMode.WIDE: "fade", ViewportMode.NARROW: None},
    "mobile": {ViewportMode.WIDE: "fade", ViewportMode.NARROW: "shrink"},
}


class ScrollTransformController:
    def __init__(
        self,
        targets: Mapping[str, HtmlElement],
        recipes: VariantRecipes,
        breakpoint: int = DEFAULT_BREAKPOINT,
    ):
        for name in recipes.values():
            if name is None:
                continue
            if name not in RECIPES:
                raise ValueError(f"unknown scroll recipe: {name}")
            for role in RECIPES[name].roles:
                if targets.get(role) is None:
                    raise MissingElementError(role)

        self.targets = dict(targets)
        self.recipes = dict(recipes)
        self.breakpoint = breakpoint
        self._stream: Optional[ScrollEventStream] = None

    @classmethod
    def from_document(cls, root: HtmlElement, settings: ScrollSettings = None) -> "ScrollTransformController":
        """Resolve the variant's target elements in root; a missing one raises."""
        settings = settings or ScrollSettings()
        recipes = VARIANTS[settings.variant]
        markers = {
            "fade": settings.fade_target,
            "scale": settings.scale_target,
            "height": settings.height_target,
        }

        targets = {}
        for name in recipes.values():
            if name is None:
                continue
            for role in RECIPES[name].roles:
                targets[role] = require_by_class(root, markers[role])

        return cls(targets, recipes, breakpoint=settings.breakpoint)

    @property
    def attached(self) -> bool:
        return self._stream is not None

    def attach(self, stream: ScrollEventStream) -> None:
        if self._stream is not None:
            raise RuntimeError("controller is already attached")
        stream.add_listener(self.handle_scroll)
        self._stream = stream
        logger.debug("scroll_controller_attached", breakpoint=self.breakpoint)

    def detach(self) -> None:
        if self._stream is None:
            return
        self._stream.remove_listener(self.handle_scroll)
        self._stream = None
        logger.debug("scroll_controller_detached")

    def handle_scroll(self, viewport: Viewport) -> StyleUpdates:
        # mode is recomputed on every event, the width may have changed
        offset = scroll_offset(viewport)
        mode = viewport_mode(viewport.inner_width, self.breakpoint)
        name = self.recipes.get(mode)
        if name is None:
            return {}

        updates = RECIPES[name].compute(offset)
        for role, declarations in updates.items():
            element = self.targets[role]
            for prop, value in declarations.items():
                set_style(element, prop, value)
        return updates
