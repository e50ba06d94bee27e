"""
Scroll-driven header transforms.

Each recipe maps a scroll offset to inline style updates, keyed by the role
of the element they go on:

    fade    opacity on the top image ("fade" role)
    shrink  scale on the header image ("scale" role) and height on the
            header content ("height" role)

Opacity is not clamped; past FADE_DISTANCE it goes negative and the browser
clamps it.
"""

from typing import Callable, Dict, NamedTuple, Tuple

from common.dom import css_number

StyleUpdates = Dict[str, Dict[str, str]]

FADE_DISTANCE = 200

SCALE_FLOOR = 0.8
# Zero upstream, which pins the scale at 1.0 and makes SCALE_FLOOR unreachable.
# Probably a leftover; kept so the rendered pages do not change.
SCALE_RATE = 0

HEIGHT_START = 200
HEIGHT_FLOOR = 60
HEIGHT_RATE = 0.5


def fade_opacity(offset: float, distance: float = FADE_DISTANCE) -> float:
    return 1 - offset / distance


def shrink_scale(offset: float) -> float:
    return max(SCALE_FLOOR, 1 - offset * SCALE_RATE)


def shrink_height(offset: float) -> float:
    return max(HEIGHT_FLOOR, HEIGHT_START - offset * HEIGHT_RATE)


def fade(offset: float) -> StyleUpdates:
    return {"fade": {"opacity": css_number(fade_opacity(offset))}}


def shrink(offset: float) -> StyleUpdates:
    return {
        "scale": {"transform": f"scale({css_number(shrink_scale(offset))})"},
        "height": {"height": f"{css_number(shrink_height(offset))}px"},
    }


class Recipe(NamedTuple):
    roles: Tuple[str, ...]
    compute: Callable[[float], StyleUpdates]


RECIPES: Dict[str, Recipe] = {
    "fade": Recipe(roles=("fade",), compute=fade),
    "shrink": Recipe(roles=("scale", "height"), compute=shrink),
}
