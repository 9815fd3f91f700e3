# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "msaview"
__author__ = "The msaview contributors"
__all__ = ["build_palette"]

import colorsys
from collections import OrderedDict
import numpy as np


def build_palette(keys, lightness=0.65, saturation=0.7, darken=0.1):
    """
    Assign fill and stroke colors to annotation keys, e.g. domain
    accessions.

    The hues are evenly spaced on the color wheel, starting at 15°,
    and assigned in the order of first appearance of the keys.
    The stroke color is the fill color with reduced lightness.

    Parameters
    ----------
    keys : iterable object of hashable
        The annotation keys.
        Repeated keys are ignored.
    lightness, saturation : float, optional
        The *HSL* lightness and saturation of the fill colors.
    darken : float, optional
        The lightness difference between fill and stroke color.

    Returns
    -------
    palette : OrderedDict
        Maps each key to a tuple of *(fill, stroke)* hex color strings.

    Examples
    --------

    >>> palette = build_palette(["PF00001", "PF00002", "PF00001"])
    >>> print(list(palette.keys()))
    ['PF00001', 'PF00002']
    >>> fill, stroke = palette["PF00001"]
    >>> print(fill, stroke)
    #e48767 #dd643c
    """
    unique_keys = list(OrderedDict.fromkeys(keys))
    n = len(unique_keys)
    hues = (15 + 360 * np.arange(n) / max(n, 1)) % 360
    palette = OrderedDict()
    for key, hue in zip(unique_keys, hues):
        fill = _hls_to_hex(hue / 360, lightness, saturation)
        stroke = _hls_to_hex(hue / 360, max(lightness - darken, 0), saturation)
        palette[key] = (fill, stroke)
    return palette


def _hls_to_hex(hue, lightness, saturation):
    rgb = colorsys.hls_to_rgb(hue, lightness, saturation)
    return "#" + "".join(f"{int(round(c * 255)):02x}" for c in rgb)
