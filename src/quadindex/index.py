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
The quadtree index.

:class:`QuadTree` owns the configuration and the root node, and is the entry
point for inserts and queries. The nodes themselves are in
:mod:`quadindex.tree`.
'''
import warnings

import toolz

from .envelope import as_rectangle
from .tree import OutOfBoundsWarning, QuadTreeNode, Settings


class QuadTree():
    """
    Spatial index of items located by rectangles.

    The tree is not thread-safe. Inserts from several threads, or inserts
    while a query is being iterated, need external synchronization.

    Args:
        bounds (Rectangle or tuple): region covered by the tree. Items must
            lie entirely within it.
        node_capacity (int, optional): number of items a node holds before
            it attempts to subdivide. Defaults to 10.
        min_node_size (float, optional): nodes with an area lower or equal
            to it never subdivide. Defaults to 1.
        get_rect (callable, optional): returns the rectangle of an item, as
            a Rectangle or anything :func:`~quadindex.envelope.as_rectangle`
            accepts. It must give the same rectangle during the item's whole
            life in the tree. Defaults to
            :func:`~quadindex.envelope.as_rectangle`, so that rectangles,
            tuples and shapely geometries can be inserted directly.

    Attributes:
        root (QuadTreeNode): the root node.
        settings (Settings): the configuration shared by all nodes.
    """
    def __init__(self, bounds, node_capacity=10, min_node_size=1.,
                 get_rect=as_rectangle):
        if (isinstance(node_capacity, bool)
                or int(node_capacity) != node_capacity or node_capacity < 1):
            raise ValueError(
                "node_capacity must be a positive integer, got {}."
                .format(node_capacity)
            )
        if min_node_size < 0:
            raise ValueError(
                "min_node_size must be non-negative, got {}."
                .format(min_node_size)
            )
        if not callable(get_rect):
            raise TypeError("get_rect must be callable.")
        self.settings = Settings(int(node_capacity), min_node_size, get_rect)
        self.root = QuadTreeNode(as_rectangle(bounds), self.settings)

    def __repr__(self):
        return "<{} bounds={!r} count={}>".format(
            self.__class__.__name__, self.bounds, self.count())

    @property
    def bounds(self):
        return self.root.bounds

    @property
    def node_capacity(self):
        return self.settings.node_capacity

    @property
    def min_node_size(self):
        return self.settings.min_node_size

    @property
    def get_rect(self):
        return self.settings.get_rect

    @property
    def isempty(self):
        return self.root.isempty

    @property
    def depth(self):
        '''Number of levels of the tree.'''
        return self.root.depth

    def __len__(self):
        return self.count()

    def __iter__(self):
        return self.root.subtree_contents()

    def count(self):
        '''Total number of items stored in the tree.'''
        return sum(len(node.items) for node in self.nodes())

    def insert(self, item):
        """
        Insert `item` in the tree.

        Items outside the tree bounds are dropped with an
        :class:`~quadindex.tree.OutOfBoundsWarning`.

        Returns:
            bool: True if the item was inserted.
        """
        rect = as_rectangle(self.settings.get_rect(item))
        if not self.root.bounds.contains(rect):
            warnings.warn(
                "Item rectangle {!r} is out of the bounds {!r} of the "
                "quadtree. No action taken.".format(rect, self.root.bounds),
                OutOfBoundsWarning,
                stacklevel=2,
            )
            return False
        return self.root.insert(item)

    def insert_many(self, items):
        '''Insert `items` in order. Returns the number of items inserted.'''
        return toolz.count(filter(None, map(self.insert, items)))

    def query(self, area):
        """
        Items whose rectangle intersects `area`.

        Every call starts a new traversal. The result is lazy: it reflects
        the tree at iteration time, and iterating it never modifies the
        tree.

        Args:
            area (Rectangle or tuple): the query region.

        Returns:
            iterator on the matching items.
        """
        return self.root.query(as_rectangle(area))

    def nodes(self):
        '''All nodes of the tree, preorder, starting with the root.'''
        return self.root.nodes()

    def for_each(self, action):
        '''Call `action` on every node of the tree, preorder.'''
        self.root.for_each(action)
