"""
Conversion between mutable and read-only morphologies.

Sections are flattened in depth-first pre-order over the root list, children in branch
order. The position in that order becomes the section index of the read-only
morphology, the mutable id is kept as its ``source_id``. All dtypes are fixed, so
building the same tree twice produces byte-identical property stores.
"""

import numpy as np

from . import options
from .exceptions import (
    EmptySectionWarning,
    IdSequenceError,
    MissingParentError,
    SectionBuilderError,
    SomaError,
    StructuralError,
)
from .morphology import Morphology
from .properties import (
    NO_PARENT,
    CellLevel,
    PointLevel,
    Properties,
    SectionLevel,
    check_lengths,
)
from .reporting import report, warn
from .soma import Soma

_INDEX_DTYPE = np.int64
_TYPE_DTYPE = np.int32


def build_read_only(morphology):
    """
    Flatten a mutable morphology into a read-only one. The mutable morphology is
    validated first, nothing is built if it is inconsistent.

    :param morphology: Morphology to flatten.
    :type morphology: morphotree.mut.Morphology
    :rtype: morphotree.Morphology
    :raises morphotree.exceptions.MissingParentError: if a section refers to an absent
      parent.
    :raises morphotree.exceptions.IdSequenceError: if parent and child references
      disagree, or sections are unreachable or reachable more than once.
    :raises morphotree.exceptions.SectionBuilderError: if a section's point, diameter
      and perimeter counts disagree.
    """
    arena = morphology._sections
    order = _flatten_order(arena, morphology._roots)
    has_perimeters, empty = _check_sections(arena, order)
    dtype = np.dtype(options.precision)
    soma = _build_soma(morphology.soma, dtype)
    for id in empty:
        warn(f"Section {id} has no points.", EmptySectionWarning)

    index = {id: i for i, id in enumerate(order)}
    sizes = np.fromiter((len(arena[id].points) for id in order), _INDEX_DTYPE, len(order))
    offsets = np.zeros(len(order) + 1, dtype=_INDEX_DTYPE)
    np.cumsum(sizes, out=offsets[1:])
    n_points = int(offsets[-1])

    points = np.empty((n_points, 3), dtype=dtype)
    diameters = np.empty(n_points, dtype=dtype)
    perimeters = np.empty(n_points if has_perimeters else 0, dtype=dtype)
    types = np.empty(len(order), dtype=_TYPE_DTYPE)
    parents = np.empty(len(order), dtype=_INDEX_DTYPE)
    ids = np.array(order, dtype=_INDEX_DTYPE)
    child_counts = np.empty(len(order), dtype=_INDEX_DTYPE)
    child_indices = []
    for i, id in enumerate(order):
        data = arena[id]
        start, end = offsets[i], offsets[i + 1]
        points[start:end] = data.points
        diameters[start:end] = data.diameters
        if has_perimeters:
            perimeters[start:end] = data.perimeters
        types[i] = data.type
        parents[i] = NO_PARENT if data.parent is None else index[data.parent]
        child_counts[i] = len(data.children)
        child_indices.extend(index[child] for child in data.children)
    child_offsets = np.zeros(len(order) + 1, dtype=_INDEX_DTYPE)
    np.cumsum(child_counts, out=child_offsets[1:])

    properties = Properties(
        points,
        diameters,
        perimeters,
        SectionLevel(
            offsets,
            types,
            parents,
            child_offsets,
            np.array(child_indices, dtype=_INDEX_DTYPE),
            ids,
        ),
        CellLevel(morphology.cell_family, morphology.soma_type, morphology.version),
    )
    report(f"Flattened {len(order)} sections with {n_points} points.", level=4)
    return Morphology(properties, soma)


def _flatten_order(arena, roots):
    # Depth-first pre-order of the section ids, verifying the references on the way.
    for id, data in arena.items():
        if data.parent is not None and data.parent not in arena:
            raise MissingParentError(
                f"Section {id} refers to missing parent {data.parent}.", id, data.parent
            )
    seen = set()
    order = []
    stack = [(id, None) for id in reversed(roots)]
    while stack:
        id, parent = stack.pop()
        if id not in arena:
            raise IdSequenceError(f"Reference to missing section {id}.", id)
        if id in seen:
            raise IdSequenceError(f"Section {id} is referenced more than once.", id)
        if arena[id].parent != parent:
            raise IdSequenceError(
                f"Section {id} is attached to {parent},"
                f" but refers to {arena[id].parent} as its parent.",
                id,
            )
        seen.add(id)
        order.append(id)
        stack.extend((child, id) for child in reversed(arena[id].children))
    if len(order) != len(arena):
        orphan = next(id for id in arena if id not in seen)
        raise IdSequenceError(f"Section {orphan} is unreachable from the roots.", orphan)
    return order


def _check_sections(arena, order):
    # Check the per point invariants, return whether the sections carry perimeters
    # and which sections have no points.
    has_perimeters = any(len(arena[id].perimeters) for id in order)
    empty = []
    for id in order:
        data = arena[id]
        if data.points.ndim != 2 or data.points.shape[1] != 3:
            raise SectionBuilderError(
                f"Points of section {id} have shape {data.points.shape}.", id
            )
        check_lengths(data.points, data.diameters, data.perimeters, id)
        if has_perimeters and len(data.perimeters) != len(data.points):
            raise SectionBuilderError(
                f"Section {id} has no perimeters, while other sections do.", id
            )
        if not len(data.points):
            empty.append(id)
    return has_perimeters, empty


def _build_soma(soma, dtype):
    if len(soma.points) != len(soma.diameters):
        raise SomaError(
            f"Soma has {len(soma.points)} points, but {len(soma.diameters)} diameters."
        )
    return Soma(
        np.array(soma.points, dtype=dtype), np.array(soma.diameters, dtype=dtype)
    )


def reconstruct(morphology, into=None):
    """
    Reconstruct a mutable morphology from a read-only one. Sections are appended in
    index order, so a fresh mutable morphology gets ids equal to the section indices.

    :param morphology: Read-only morphology.
    :type morphology: morphotree.Morphology
    :param into: Empty mutable morphology to fill, a new one is created by default.
    :type into: morphotree.mut.Morphology
    :rtype: morphotree.mut.Morphology
    """
    if into is None:
        from .mut import Morphology as MutableMorphology

        into = MutableMorphology()
    elif len(into):
        raise StructuralError("Can only reconstruct into an empty morphology.")
    into.soma.points = morphology.soma.points
    into.soma.diameters = morphology.soma.diameters
    into.cell_family = morphology.cell_family
    into.soma_type = morphology.soma_type
    into.version = morphology.version
    props = morphology.properties
    ids = {}
    for i in range(len(morphology)):
        parent = props.parent_of(i)
        ids[i] = into.append_section(
            None if parent is None else ids[parent],
            props.type_of(i),
            PointLevel(props.points_of(i), props.diameters_of(i), props.perimeters_of(i)),
        )
    report(f"Reconstructed {len(ids)} sections.", level=4)
    return into


__all__ = ["build_read_only", "reconstruct"]
