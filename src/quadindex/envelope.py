# Copyright (C) 2018 DataStorm
#
# This file is part of QuadIndex.
#
# QuadIndex is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# QuadIndex is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# A copy of the GNU General Public License is available in the LICENSE
# file or at <http://www.gnu.org/licenses/>.
'''
Axis-aligned rectangles.

Items of a quadtree are located by the rectangle enclosing them. Rectangles
are given by their top-left corner and their size, with the y axis pointing
down: ``top == y`` and ``bottom == y + height``.

Both containment and intersection are closed: boundaries belong to the
rectangle. Hence a rectangle contains itself, and two rectangles touching by
an edge or a corner intersect.
'''
import collections

import numpy
import shapely.geometry


class Rectangle(collections.namedtuple('Rectangle', 'x y width height')):
    '''Axis-aligned rectangle with closed edges.'''
    __slots__ = ()

    def __new__(cls, x, y, width, height):
        if width < 0 or height < 0:
            raise ValueError(
                "Rectangle size must be non-negative, got width={} and "
                "height={}.".format(width, height)
            )
        return super(Rectangle, cls).__new__(cls, x, y, width, height)

    # namedtuple builds through tuple.__new__ here, also for _replace.
    @classmethod
    def _make(cls, iterable):
        return cls(*iterable)

    @classmethod
    def from_edges(cls, left, top, right, bottom):
        return cls(left, top, right - left, bottom - top)

    @classmethod
    def from_geometry(cls, geom):
        '''Bounding rectangle of a shapely-like geometry.'''
        return cls.from_edges(*geom.bounds)

    def __repr__(self):
        return "Rectangle(x={}, y={}, width={}, height={})".format(*self)

    @property
    def left(self):
        return self.x

    @property
    def top(self):
        return self.y

    @property
    def right(self):
        return self.x + self.width

    @property
    def bottom(self):
        return self.y + self.height

    @property
    def area(self):
        return self.width * self.height

    @property
    def center(self):
        return (self.x + 0.5 * self.width, self.y + 0.5 * self.height)

    @property
    def bounds(self):
        '''(minx, miny, maxx, maxy), as shapely geometries give it.'''
        return (self.left, self.top, self.right, self.bottom)

    @property
    def is_empty(self):
        '''Boolean: does the rectangle have no area?'''
        return self.width <= 0 or self.height <= 0

    def contains(self, other):
        '''Returns True if every point of `other` lies in or on `self`.'''
        return (self.left <= other.left and other.right <= self.right
                and self.top <= other.top and other.bottom <= self.bottom)

    def intersects(self, other):
        '''Returns True if `self` and `other` share at least one point.'''
        return (self.left <= other.right and other.left <= self.right
                and self.top <= other.bottom and other.top <= self.bottom)

    def quadrants(self):
        """
        Split into four equal quadrants.

        The order is fixed: top-left, bottom-left, top-right, bottom-right.
        The inner edges of adjacent quadrants are computed by the same
        expression, so the quadrants tile `self` without gap or overlap.
        """
        half_width = self.width / 2.
        half_height = self.height / 2.
        mid_x = self.x + half_width
        mid_y = self.y + half_height
        cls = type(self)
        return [
            cls(self.x, self.y, half_width, half_height),
            cls(self.x, mid_y, half_width, half_height),
            cls(mid_x, self.y, half_width, half_height),
            cls(mid_x, mid_y, half_width, half_height),
        ]

    def to_geometry(self):
        return shapely.geometry.box(*self.bounds)


def as_rectangle(obj):
    """
    Coerce `obj` to a :class:`Rectangle`.

    Accepts a Rectangle, any geometry exposing shapely's `bounds` attribute,
    or a sequence ``(x, y, width, height)``.
    """
    if isinstance(obj, Rectangle):
        return obj
    if hasattr(obj, "bounds"):
        return Rectangle.from_geometry(obj)
    return Rectangle(*obj)


def rectangles_from_bounds(coords, interleaved=True):
    """
    Rectangles from an array of bounds.

    Args:
        coords (array-like): Nx4 array of bounds.
        interleaved (bool, optional): If True, each row is
            ``(minx, maxx, miny, maxy)``. Otherwise rows are corners
            ``(minx, miny, maxx, maxy)``, as given by `GeoSeries.bounds`.
            Defaults to True.

    Returns:
        list of Rectangle
    """
    coords = numpy.asarray(coords, dtype=float)
    if coords.ndim != 2 or coords.shape[1] != 4:
        raise ValueError(
            "Bounds must be an array of shape Nx4, got shape {}."
            .format(coords.shape)
        )
    coords = coords.reshape(-1, 2, 2)
    if not interleaved:  # corners
        coords = numpy.swapaxes(coords, 1, 2)
    mins = coords[:, :, 0]
    sizes = coords[:, :, 1] - mins
    if (sizes < 0).any():
        raise ValueError("Bounds must have mins lower than maxs.")
    return [Rectangle(x, y, w, h)
            for (x, y), (w, h) in zip(mins.tolist(), sizes.tolist())]
