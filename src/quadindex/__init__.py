"""
In-memory spatial indexing of rectangles with a region quadtree.

The tree covers a fixed rectangular region. Nodes hold the items that no
quadrant contains entirely, and split into four equal quadrants once they
hold enough items. Queries on a rectangular area classify every quadrant
against the area, so that whole branches are either skipped or returned
without testing their items.

Items are not required to be geometries: the tree locates them with a
function returning their rectangle.

>>> from quadindex import QuadTree, Rectangle
>>> tree = QuadTree(Rectangle(0, 0, 100, 100), node_capacity=4)
>>> tree.insert(Rectangle(25, 25, 5, 5))
True
>>> list(tree.query(Rectangle(20, 20, 10, 10)))
[Rectangle(x=25, y=25, width=5, height=5)]
"""
from .envelope import (  # noqa: F401
    Rectangle, as_rectangle, rectangles_from_bounds)
from .tree import OutOfBoundsWarning, QuadTreeNode, Settings  # noqa: F401
from .index import QuadTree  # noqa: F401

__version__ = "0.1.0"
