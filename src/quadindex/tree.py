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
Quadtree nodes: insertion, subdivision and queries.

The tree data model is the following:
  1. A node has a bounding :class:`~quadindex.envelope.Rectangle`, a list of
     items stored directly at the node, and either no children or exactly
     four children.
  1. Children are the four equal quadrants of their parent, in the order
     top-left, bottom-left, top-right, bottom-right.
  1. Every item stored at or below a node lies within the node's bounds.
  1. An item is stored in the first child fully containing it. Items that
     no child contains stay at the node.
  1. Children are created lazily and never removed.

Unlike the standard quadtree, nodes have no hard limit on their contents.
The capacity only decides when a node attempts to subdivide.
'''
import collections
import warnings

import toolz

from .envelope import as_rectangle


class OutOfBoundsWarning(UserWarning):
    '''An item was not inserted because it lies outside the tree bounds.'''


# Shared by every node of a tree. Nodes keep no reference to their parent
# nor to the owning index.
Settings = collections.namedtuple(
    "Settings", "node_capacity min_node_size get_rect")


class QuadTreeNode():
    """
    Node of a region quadtree over rectangles.

    Args:
        bounds (Rectangle): region covered by the node.
        settings (Settings): capacity, minimum size and rectangle getter of
            the tree.

    Attributes:
        bounds (Rectangle): region covered by the node.
        items (list): items stored directly at this node.
        children (list of QuadTreeNode): empty, or the four quadrants.
    """
    __slots__ = ("bounds", "settings", "items", "children")

    def __init__(self, bounds, settings):
        self.bounds = bounds
        self.settings = settings
        self.items = []
        self.children = []

    def __repr__(self):
        return "<{} bounds={!r} items={} children={}>".format(
            self.__class__.__name__, self.bounds, len(self.items),
            len(self.children))

    @property
    def isleaf(self):
        return not self.children

    @property
    def isempty(self):
        '''Boolean: no direct items, and no area or no children.'''
        return (not self.items
                and (self.bounds.is_empty or not self.children))

    @property
    def count(self):
        '''Number of items in this node and all its descendants.'''
        return sum(len(node.items) for node in self.nodes())

    @property
    def depth(self):
        '''Number of levels of the subtree rooted at this node.'''
        max_level = 0
        node_stack = [(self, 1)]
        while node_stack:
            node, level = node_stack.pop()
            max_level = max(max_level, level)
            node_stack.extend((child, level + 1) for child in node.children)
        return max_level

    def subtree_contents(self):
        '''Items of the descendants, then items of this node.'''
        # Postorder walk: a node's items come once its children are done.
        node_stack = [(self, False)]
        while node_stack:
            node, expanded = node_stack.pop()
            if expanded:
                yield from node.items
                continue
            node_stack.append((node, True))
            node_stack.extend((child, False)
                              for child in reversed(node.children))

    # ==========================  Queries  ==================================

    def query(self, area):
        """
        Items whose rectangle intersects `area`.

        The generator is read-only: it can be abandoned at any point.

        Args:
            area (Rectangle): the query region.

        Returns:
            iterator on the matching items, each yielded once.
        """
        # Items not entirely contained by any of the four quadrants.
        for item in self.items:
            if area.intersects(self._rect(item)):
                yield item

        for child in self.children:
            if child.isempty:
                continue

            # Case 1: query area completely contained by the quadrant.
            # Go down that branch only. Siblings can only share the split
            # lines with it, so they are skipped unless the area lies on one.
            if child.bounds.contains(area):
                yield from child.query(area)
                if not self._on_split_lines(area):
                    break
                continue

            # Case 2: quadrant completely contained by the query area.
            # Its whole subtree matches without testing.
            if area.contains(child.bounds):
                yield from child.subtree_contents()
                continue

            # Case 3: query area intersects the quadrant.
            if child.bounds.intersects(area):
                yield from child.query(area)

    def _rect(self, item):
        return as_rectangle(self.settings.get_rect(item))

    def _on_split_lines(self, area):
        # Inner edges of the quadrants, as computed by Rectangle.quadrants.
        mid_x = self.children[2].bounds.x
        mid_y = self.children[1].bounds.y
        return (area.left <= mid_x <= area.right
                or area.top <= mid_y <= area.bottom)

    # ==========================  Inserts  ==================================

    def insert(self, item):
        """
        Insert `item` at this node or in the quadrant just large enough.

        Returns:
            bool: False if the item lies outside this node, in which case
            an :class:`OutOfBoundsWarning` is issued and nothing happens.
        """
        rect = self._rect(item)
        if not self.bounds.contains(rect):
            warnings.warn(
                "Item rectangle {!r} is out of the bounds {!r} of this "
                "quadtree node. No action taken.".format(rect, self.bounds),
                OutOfBoundsWarning,
                stacklevel=2,
            )
            return False

        # Subdivision may not happen: see create_children.
        capacity = self.settings.node_capacity
        if not self.children and len(self.items) >= capacity:
            self.create_children()
            self._move_items_to_children()

        # This node is full: store the item in a quadrant if it is small
        # enough.
        if len(self.items) > capacity:
            child = self._containing_child(rect)
            if child is not None:
                return child.insert(item)

        # Add, even if we are over capacity.
        self.items.append(item)
        return True

    def _containing_child(self, rect):
        for child in self.children:
            if child.bounds.contains(rect):
                return child
        return None

    def _move_items_to_children(self):
        groups = toolz.groupby(
            toolz.compose(self._containing_child, self._rect),
            self.items,
        )
        self.items = groups.pop(None, [])
        for child, items in groups.items():
            for item in items:
                child.insert(item)

    def create_children(self):
        '''Partition the node into its four quadrants, if large enough.'''
        if self.children:
            return
        # Smallest nodes never subdivide.
        if self.bounds.area <= self.settings.min_node_size:
            return
        self.children = [QuadTreeNode(quadrant, self.settings)
                         for quadrant in self.bounds.quadrants()]

    # =========================  Traversal  =================================

    def nodes(self):
        '''This node and all its descendants, preorder.'''
        node_stack = [self]
        while node_stack:
            node = node_stack.pop()
            yield node
            node_stack.extend(reversed(node.children))

    def for_each(self, action):
        '''Call `action` on this node and all its descendants, preorder.'''
        for node in self.nodes():
            action(node)
