"""
Lazy section traversals. They work on any section type that exposes an ordered
``children`` sequence and a ``parent`` (``None`` for roots), which covers the sections of
both the mutable and the read-only morphologies.

The traversals are iterative, so trees of any depth can be walked. Each call returns a
fresh single-pass generator. Modifying the tree while a traversal is underway is
undefined behavior.
"""

from collections import deque
from collections.abc import Iterable


def _start(start):
    # A single section, an iterable of sections such as a root list, or a morphology.
    if start is None:
        return []
    if hasattr(start, "root_sections"):
        # Morphologies iterate over all of their sections, start from the roots only.
        return list(start._start(None))
    if isinstance(start, Iterable):
        return list(start)
    return [start]


def depth_first(start):
    """
    Iterate pre-order: each section is visited before its descendants, siblings in
    branch order.

    :param start: Section, iterable of sections or morphology to start from.
    """
    stack = _start(start)
    stack.reverse()
    while stack:
        section = stack.pop()
        yield section
        stack.extend(reversed(section.children))


def breadth_first(start):
    """
    Iterate level by level: all sections at one depth are visited before any section
    of the next depth, siblings in branch order.

    :param start: Section, iterable of sections or morphology to start from.
    """
    queue = deque(_start(start))
    while queue:
        section = queue.popleft()
        yield section
        queue.extend(section.children)


def upstream(section):
    """
    Iterate from a section up to its root, both included.
    """
    while section is not None:
        yield section
        section = section.parent


__all__ = ["breadth_first", "depth_first", "upstream"]
