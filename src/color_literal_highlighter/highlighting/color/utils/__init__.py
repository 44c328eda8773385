"""
utils package.
=============

Does: Provide channel conversions (HSL, percentages, premultiplied alpha),
      hex formatting and brightness helpers shared by the color decoders.
"""

from .convert import (
    RGB,
    color_is_bright,
    expand_short_hex,
    hex_to_rgb,
    hsl_to_rgb,
    hue_to_rgb,
    percent_or_hex,
    premultiply,
    premultiply_byte,
    rgb_to_hex,
)

__all__ = [
    "RGB",
    "hue_to_rgb",
    "hsl_to_rgb",
    "percent_or_hex",
    "premultiply",
    "premultiply_byte",
    "rgb_to_hex",
    "hex_to_rgb",
    "expand_short_hex",
    "color_is_bright",
]

__docformat__ = "google"
