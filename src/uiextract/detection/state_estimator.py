"""Hover and active color estimation from a component's dominant color."""

from ..model import Color, ComponentStates, StateVariant

HOVER_FACTOR = 0.1
ACTIVE_FACTOR = -0.2
BRIGHTNESS_PIVOT = 128


class StateEstimator:
    """Derives interaction-state color variants.

    Light colors darken on hover and dark colors lighten; the active state
    always darkens by 20%.
    """

    def estimate(self, dominant: Color) -> ComponentStates:
        brightness = dominant.brightness
        is_light = brightness > BRIGHTNESS_PIVOT

        hover = StateVariant(
            background_color=dominant.adjusted(-HOVER_FACTOR if is_light else HOVER_FACTOR),
            brightness=brightness - 25 if is_light else brightness + 25,
        )
        active = StateVariant(
            background_color=dominant.adjusted(ACTIVE_FACTOR),
            brightness=max(0.0, brightness - 50),
        )
        return ComponentStates(
            default=StateVariant(background_color=dominant, brightness=brightness),
            hover=hover,
            active=active,
        )
