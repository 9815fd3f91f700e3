# This source code is part of the msaview package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Gap-free packing of rectangles, used for placing annotation features in
sub-rows, so that no two features overlap.
"""

__name__ = "msaview"
__author__ = "The msaview contributors"
__all__ = ["DEFAULT_MAX_HEIGHT", "Rectangle", "RectIndex", "Layout",
           "layout_features"]

import math
from collections import OrderedDict, namedtuple
import numpy as np
from .error import LayoutCapacityError


DEFAULT_MAX_HEIGHT = 10000

Rectangle = namedtuple(
    "Rectangle", ["id", "min_x", "max_x", "min_y", "max_y", "data"]
)


class RectIndex(object):
    """
    A static spatial index of axis-aligned boxes.

    The index is built once from all boxes and cannot be modified
    afterwards.
    The boxes are sorted by their minimum *x* coordinate, so that only
    boxes starting left of the query end are tested for overlap.

    A box overlaps the query, if the *x* ranges overlap, including their
    end points, and the half-open *y* ranges ``[min_y, max_y)``
    overlap.
    Hence, boxes that only touch in *y* direction do not overlap.

    Parameters
    ----------
    boxes : ndarray, shape=(n,4), dtype=float, optional
        The boxes as *(min_x, min_y, max_x, max_y)*.

    Examples
    --------

    >>> index = RectIndex(np.array([[0, 0, 10, 1], [5, 1, 20, 2]]))
    >>> print(index.search(8, 0, 12, 1))
    [0]
    >>> print(index.search(8, 0, 12, 2))
    [0 1]
    >>> print(index.search(11, 0, 12, 1))
    []
    """

    def __init__(self, boxes=None):
        if boxes is None:
            boxes = np.zeros((0, 4))
        boxes = np.asarray(boxes, dtype=float)
        if boxes.ndim != 2 or boxes.shape[1] != 4:
            raise IndexError(
                f"Expected boxes with shape (n,4), but got {boxes.shape}"
            )
        self._order = np.argsort(boxes[:, 0], kind="stable")
        self._boxes = boxes[self._order]

    def __len__(self):
        return len(self._boxes)

    def search(self, min_x, min_y, max_x, max_y):
        """
        Find the boxes overlapping the query box.

        Parameters
        ----------
        min_x, min_y, max_x, max_y : float
            The query box.

        Returns
        -------
        indices : ndarray, dtype=int
            The sorted indices of the overlapping boxes, referring to
            the order of boxes given on construction.
        """
        # Only boxes starting at or before the end of the query
        stop = np.searchsorted(self._boxes[:, 0], max_x, side="right")
        candidates = self._boxes[:stop]
        overlap = (candidates[:, 2] >= min_x) \
                & (candidates[:, 1] < max_y) \
                & (candidates[:, 3] > min_y)
        return np.sort(self._order[:stop][overlap])


class Layout(object):
    """
    Place rectangles at the lowest free integer height, so that no two
    rectangles overlap.

    Each rectangle spans a closed *x* range ``[left, right]``.
    In *y* direction it occupies ``[y, y + height)``, so a rectangle
    can be placed directly on top of another one.

    Rectangles are identified by an ID:
    Adding a rectangle with an already known ID does not change the
    layout, the existing height is returned.

    Parameters
    ----------
    max_height : int, optional
        The maximum height, at which a rectangle may be placed.

    Examples
    --------

    >>> layout = Layout()
    >>> print(layout.add_rect("a", 0, 10, 2))
    0
    >>> print(layout.add_rect("b", 20, 30, 2))
    0
    >>> print(layout.add_rect("c", 5, 25, 2))
    2
    >>> print(layout.add_rect("a", 0, 10, 2))
    0
    >>> print(layout.total_height)
    4
    """

    def __init__(self, max_height=DEFAULT_MAX_HEIGHT):
        self._max_height = math.ceil(max_height)
        self._rectangles = OrderedDict()
        self._index = RectIndex()
        self._index_ids = []
        self._total_height = 0
        self._max_height_reached = False

    @property
    def max_height(self):
        return self._max_height

    @property
    def max_height_reached(self):
        """
        True, if a rectangle could not be placed due to the maximum
        height.
        """
        return self._max_height_reached

    @property
    def total_height(self):
        """
        The maximum upper edge of all placed rectangles.
        """
        return self._total_height

    @property
    def rectangles(self):
        return OrderedDict(self._rectangles)

    def add_rect(self, id, left, right, height, data=None):
        """
        Place a rectangle at the lowest height, where it does not
        overlap any placed rectangle.

        Parameters
        ----------
        id : hashable
            The ID of the rectangle.
        left, right : float
            The *x* range of the rectangle.
        height : float
            The height of the rectangle.
        data : object, optional
            Arbitrary data attached to the rectangle.

        Returns
        -------
        y : int
            The lower edge of the placed rectangle.
            If the ID is already known, the lower edge of the existing
            rectangle.

        Raises
        ------
        LayoutCapacityError
            If the rectangle would need to be placed above the maximum
            height.
            The rectangle is not added in this case.
        """
        if id in self._rectangles:
            return self._rectangles[id].min_y
        if right < left:
            raise ValueError(
                f"Right edge {right} is left of the left edge {left}"
            )
        if height < 0:
            raise ValueError(f"Height must not be negative, got {height}")

        y = 0
        while True:
            colliding = self._index.search(left, y, right, y + height)
            if len(colliding) == 0:
                break
            # Each candidate height below the upper edge of a colliding
            # rectangle collides as well
            upper_edge = max(
                self._rectangles[self._index_ids[i]].max_y
                for i in colliding
            )
            y = max(y + 1, math.ceil(upper_edge))
            if y > self._max_height:
                self._max_height_reached = True
                raise LayoutCapacityError(
                    f"Rectangle '{id}' cannot be placed below the maximum "
                    f"height of {self._max_height}"
                )

        self._rectangles[id] = Rectangle(
            id, left, right, y, y + height, data
        )
        self._rebuild_index()
        self._total_height = max(self._total_height, y + height)
        return y

    def _rebuild_index(self):
        self._index_ids = list(self._rectangles.keys())
        self._index = RectIndex(np.array(
            [(rect.min_x, rect.min_y, rect.max_x, rect.max_y)
             for rect in self._rectangles.values()],
            dtype=float
        ))

    def __getitem__(self, id):
        return self._rectangles[id]

    def __contains__(self, id):
        return id in self._rectangles

    def __len__(self):
        return len(self._rectangles)

    def __iter__(self):
        return iter(self._rectangles.values())


def layout_features(features, height=1, max_height=DEFAULT_MAX_HEIGHT):
    """
    Pack the domain features of a row into non-overlapping sub-rows.

    Parameters
    ----------
    features : iterable object of dict
        The features, each one with at least the keys ``'start'`` and
        ``'end'``, e.g. as returned by :func:`get_domain_features()`.
        Features with an ``'accession'`` are identified by the
        accession and their location, so that duplicates are placed
        only once.
    height : int, optional
        The height of each feature.
    max_height : int, optional
        The maximum height, at which a feature may be placed.

    Returns
    -------
    layout : Layout
        The layout, whose rectangles carry the features as data.

    Examples
    --------

    >>> features = [
    ...     {"start": 1, "end": 50, "accession": "PF1"},
    ...     {"start": 40, "end": 80, "accession": "PF2"},
    ...     {"start": 60, "end": 90, "accession": "PF3"},
    ... ]
    >>> layout = layout_features(features)
    >>> print([rect.min_y for rect in layout])
    [0, 1, 0]
    """
    layout = Layout(max_height)
    for i, feature in enumerate(features):
        accession = feature.get("accession")
        if accession is None:
            id = i
        else:
            id = (accession, feature["start"], feature["end"])
        layout.add_rect(
            id, feature["start"], feature["end"], height, feature
        )
    return layout
