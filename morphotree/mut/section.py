from .. import _util, traversal
from ..enums import SectionType
from ..exceptions import RawDataError
from ..properties import as_points, as_values


class Section:
    """
    Handle on a section of a mutable :class:`~morphotree.mut.Morphology`. The handle
    stores nothing but its owner and id, every access goes through the owner. Ids are
    never reused, so a handle on a deleted section raises
    :class:`~morphotree.exceptions.NotFoundError` instead of silently pointing elsewhere.

    The buffer setters replace a buffer wholesale and only check that buffer's own
    shape; whether points, diameters and perimeters agree in length is checked when the
    morphology is built.
    """

    def __init__(self, morphology, id):
        self._morphology = morphology
        self._id = id

    @property
    def _data(self):
        return self._morphology._get_data(self._id)

    @_util.obj_str_insert
    def __repr__(self):
        return f"section {self._id}"

    def __eq__(self, other):
        if not isinstance(other, Section):
            return NotImplemented
        return self._morphology is other._morphology and self._id == other._id

    def __hash__(self):
        return hash((id(self._morphology), self._id))

    def __len__(self):
        return len(self._data.points)

    @property
    def id(self):
        return self._id

    @property
    def morphology(self):
        return self._morphology

    @property
    def type(self):
        return self._data.type

    @type.setter
    def type(self, value):
        self._data.type = _as_section_type(value)

    @property
    def points(self):
        return self._data.points

    @points.setter
    def points(self, value):
        self._data.points = as_points(value, copy=True)

    @property
    def diameters(self):
        return self._data.diameters

    @diameters.setter
    def diameters(self, value):
        self._data.diameters = as_values(value, "diameter", copy=True)

    @property
    def perimeters(self):
        return self._data.perimeters

    @perimeters.setter
    def perimeters(self, value):
        self._data.perimeters = as_values(value, "perimeter", copy=True)

    @property
    def parent(self):
        parent = self._data.parent
        return None if parent is None else Section(self._morphology, parent)

    @property
    def children(self):
        return [Section(self._morphology, child) for child in self._data.children]

    @property
    def is_root(self):
        return self._data.parent is None

    def depth_first(self):
        return traversal.depth_first(self)

    def breadth_first(self):
        return traversal.breadth_first(self)

    def upstream(self):
        return traversal.upstream(self)


def _as_section_type(value):
    try:
        if isinstance(value, str):
            return SectionType[value.upper()]
        return SectionType(value)
    except (KeyError, ValueError):
        raise RawDataError(f"Unknown section type {value!r}.") from None


__all__ = ["Section"]
