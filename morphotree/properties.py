"""
Column oriented storage behind read-only morphologies. Every section's data is a range
of the flat point level arrays; the section level tables describe the ranges and the
topology using dense section indices.
"""

import numpy as np

from . import _util
from .enums import CellFamily, MorphologyVersion, SomaType
from .exceptions import RawDataError, SectionBuilderError

#: Parent index of root sections.
NO_PARENT = -1


def as_points(data, dtype=float, copy=False):
    """
    Coerce data to an ``(N, 3)`` array of point coordinates.

    :raises morphotree.exceptions.RawDataError: if the data is not a list of 3D points.
    """
    try:
        return _util.sanitize_ndarray(
            [] if data is None else data, (-1, 3), dtype, copy=copy
        )
    except (ValueError, TypeError) as e:
        raise RawDataError(f"Malformed point data: {e}.") from None


def as_values(data, name, dtype=float, copy=False):
    """
    Coerce data to a 1D array of per point values, such as diameters or perimeters.

    :raises morphotree.exceptions.RawDataError: if the data is not one dimensional.
    """
    try:
        return _util.sanitize_ndarray([] if data is None else data, (-1,), dtype, copy)
    except (ValueError, TypeError) as e:
        raise RawDataError(f"Malformed {name} data: {e}.") from None


def check_lengths(points, diameters, perimeters, section_id=None):
    """
    Check the per point array length invariants of a section.

    :raises morphotree.exceptions.SectionBuilderError: if the lengths don't agree.
    """
    where = f" of section {section_id}" if section_id is not None else ""
    if not _util.samelen(points, diameters):
        raise SectionBuilderError(
            f"Point and diameter count{where} differ:"
            f" {len(points)} points, {len(diameters)} diameters.",
            section_id,
        )
    if len(perimeters) and len(perimeters) != len(points):
        raise SectionBuilderError(
            f"Perimeter count{where} must be 0 or {len(points)},"
            f" got {len(perimeters)}.",
            section_id,
        )


class PointLevel:
    """
    The per point data of a section or soma: coordinates, diameters and optionally
    perimeters. The input data is copied.
    """

    def __init__(self, points=None, diameters=None, perimeters=None):
        self._points = as_points(points, copy=True)
        self._diameters = as_values(diameters, "diameter", copy=True)
        self._perimeters = as_values(perimeters, "perimeter", copy=True)
        check_lengths(self._points, self._diameters, self._perimeters)

    @property
    def points(self):
        return self._points

    @property
    def diameters(self):
        return self._diameters

    @property
    def perimeters(self):
        return self._perimeters

    def __len__(self):
        return len(self._points)


class SectionLevel:
    """
    Section tables of a flattened morphology, indexed by dense section index.

    :param offsets: Start of each section in the point level arrays, with an extra
      sentinel equal to the total number of points.
    :param types: Section type of each section.
    :param parents: Parent section index, or ``NO_PARENT``.
    :param child_offsets: Start of each section's children in ``child_indices``, with a
      sentinel.
    :param child_indices: Child section indices, grouped per parent, in branch order.
    :param ids: Id each section had in the mutable morphology it was built from.
    """

    def __init__(self, offsets, types, parents, child_offsets, child_indices, ids):
        self.offsets = offsets
        self.types = types
        self.parents = parents
        self.child_offsets = child_offsets
        self.child_indices = child_indices
        self.ids = ids

    def arrays(self):
        return (
            self.offsets,
            self.types,
            self.parents,
            self.child_offsets,
            self.child_indices,
            self.ids,
        )


class CellLevel:
    def __init__(
        self,
        cell_family=CellFamily.NEURON,
        soma_type=SomaType.UNDEFINED,
        version=MorphologyVersion.UNDEFINED,
    ):
        self.cell_family = CellFamily(cell_family)
        self.soma_type = SomaType(soma_type)
        self.version = MorphologyVersion(version)

    def __eq__(self, other):
        return (
            self.cell_family == other.cell_family
            and self.soma_type == other.soma_type
            and self.version == other.version
        )


class Properties:
    """
    Read-only property store of a flattened morphology. Every accessor is O(1).

    The store takes ownership of the given arrays: they, and the arrays of
    ``section_level``, are frozen in place, so the caller can no longer write to them.
    """

    def __init__(self, points, diameters, perimeters, section_level, cell_level=None):
        self._points = points
        self._diameters = diameters
        self._perimeters = perimeters
        self._sections = section_level
        self._cell = cell_level if cell_level is not None else CellLevel()
        _util.freeze(points, diameters, perimeters, *section_level.arrays())

    @property
    def points(self):
        return self._points

    @property
    def diameters(self):
        return self._diameters

    @property
    def perimeters(self):
        return self._perimeters

    @property
    def section_level(self):
        return self._sections

    @property
    def cell_level(self):
        return self._cell

    @property
    def n_sections(self):
        return len(self._sections.types)

    @property
    def n_points(self):
        return len(self._points)

    def point_range(self, index):
        offsets = self._sections.offsets
        return int(offsets[index]), int(offsets[index + 1])

    def points_of(self, index):
        start, end = self.point_range(index)
        return self._points[start:end]

    def diameters_of(self, index):
        start, end = self.point_range(index)
        return self._diameters[start:end]

    def perimeters_of(self, index):
        if not len(self._perimeters):
            return self._perimeters
        start, end = self.point_range(index)
        return self._perimeters[start:end]

    def type_of(self, index):
        return int(self._sections.types[index])

    def parent_of(self, index):
        """
        Return the parent index of a section, or ``None`` for root sections.
        """
        parent = int(self._sections.parents[index])
        return None if parent == NO_PARENT else parent

    def children_of(self, index):
        offsets = self._sections.child_offsets
        return self._sections.child_indices[offsets[index] : offsets[index + 1]]

    def id_of(self, index):
        return int(self._sections.ids[index])

    def roots(self):
        return np.flatnonzero(self._sections.parents == NO_PARENT)

    def tobytes(self):
        """
        Serialize all the stored data into a canonical byte string.
        """
        cell = self._cell
        header = np.array(
            [cell.cell_family, cell.soma_type, self.n_sections, self.n_points],
            dtype=np.int64,
        )
        return b"".join(
            [
                header.tobytes(),
                cell.version.value.encode(),
                self._points.tobytes(),
                self._diameters.tobytes(),
                self._perimeters.tobytes(),
                *(arr.tobytes() for arr in self._sections.arrays()),
            ]
        )

    def __eq__(self, other):
        # Structural comparison, the source ids don't take part.
        if not isinstance(other, Properties):
            return NotImplemented
        own, theirs = self._sections, other._sections
        return (
            self._cell == other._cell
            and all(
                a.shape == b.shape and np.array_equal(a, b)
                for a, b in (
                    (self._points, other._points),
                    (self._diameters, other._diameters),
                    (self._perimeters, other._perimeters),
                    (own.offsets, theirs.offsets),
                    (own.types, theirs.types),
                    (own.parents, theirs.parents),
                    (own.child_offsets, theirs.child_offsets),
                    (own.child_indices, theirs.child_indices),
                )
            )
        )

    __hash__ = None


__all__ = [
    "CellLevel",
    "NO_PARENT",
    "PointLevel",
    "Properties",
    "SectionLevel",
    "as_points",
    "as_values",
    "check_lengths",
]
