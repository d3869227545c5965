"""
Read-only morphologies. A :class:`Morphology` owns a frozen
:class:`~morphotree.properties.Properties` store and hands out lightweight
:class:`Section` views into it. The views keep their morphology alive and their arrays
are read-only slices of the store, no data is copied.
"""

from . import _util, traversal
from .enums import SectionType
from .exceptions import MultipleTreesError, NotFoundError


class Section:
    """
    View on one section of a read-only morphology.
    """

    def __init__(self, morphology, index):
        self._morphology = morphology
        self._index = index

    @_util.obj_str_insert
    def __repr__(self):
        return f"section {self._index} ({self.type.name.lower()}, {len(self)} points)"

    def __eq__(self, other):
        if not isinstance(other, Section):
            return NotImplemented
        return self._morphology is other._morphology and self._index == other._index

    def __hash__(self):
        return hash((id(self._morphology), self._index))

    def __len__(self):
        start, end = self._morphology._properties.point_range(self._index)
        return end - start

    @property
    def morphology(self):
        return self._morphology

    @property
    def id(self):
        """
        Index of the section in its morphology, the key for
        :meth:`Morphology.section`.
        """
        return self._index

    @property
    def source_id(self):
        """
        Id the section had in the mutable morphology this morphology was built from.
        """
        return self._morphology._properties.id_of(self._index)

    @property
    def type(self):
        return SectionType(self._morphology._properties.type_of(self._index))

    @property
    def points(self):
        return self._morphology._properties.points_of(self._index)

    @property
    def diameters(self):
        return self._morphology._properties.diameters_of(self._index)

    @property
    def perimeters(self):
        return self._morphology._properties.perimeters_of(self._index)

    @property
    def parent(self):
        parent = self._morphology._properties.parent_of(self._index)
        return None if parent is None else Section(self._morphology, parent)

    @property
    def children(self):
        return [
            Section(self._morphology, int(child))
            for child in self._morphology._properties.children_of(self._index)
        ]

    @property
    def is_root(self):
        return self._morphology._properties.parent_of(self._index) is None

    def depth_first(self):
        return traversal.depth_first(self)

    def breadth_first(self):
        return traversal.breadth_first(self)

    def upstream(self):
        return traversal.upstream(self)


class Morphology:
    """
    Immutable, flattened morphology. Safe to share between any number of readers.
    Create one with :meth:`from_mutable` or
    :meth:`morphotree.mut.Morphology.build_read_only`.
    """

    def __init__(self, properties, soma):
        self._properties = properties
        self._soma = soma

    @classmethod
    def from_mutable(cls, morphology):
        from .builder import build_read_only

        return build_read_only(morphology)

    def as_mutable(self):
        """
        Reconstruct an editable copy of this morphology.

        :rtype: morphotree.mut.Morphology
        """
        from .builder import reconstruct

        return reconstruct(self)

    @_util.obj_str_insert
    def __repr__(self):
        return (
            f"{len(self.root_sections)} roots, {len(self)} sections,"
            f" {self._properties.n_points} points"
        )

    def __len__(self):
        return self._properties.n_sections

    def __iter__(self):
        # Sections are stored in depth-first order.
        return (Section(self, i) for i in range(len(self)))

    def __eq__(self, other):
        if not isinstance(other, Morphology):
            return NotImplemented
        return self._soma == other._soma and self._properties == other._properties

    def __hash__(self):
        return id(self)

    @property
    def properties(self):
        return self._properties

    @property
    def soma(self):
        return self._soma

    @property
    def cell_family(self):
        return self._properties.cell_level.cell_family

    @property
    def soma_type(self):
        return self._properties.cell_level.soma_type

    @property
    def version(self):
        return self._properties.cell_level.version

    @property
    def points(self):
        return self._properties.points

    @property
    def diameters(self):
        return self._properties.diameters

    @property
    def perimeters(self):
        return self._properties.perimeters

    @property
    def section_types(self):
        return self._properties.section_level.types

    @property
    def section_offsets(self):
        return self._properties.section_level.offsets

    @property
    def root_sections(self):
        return [Section(self, int(i)) for i in self._properties.roots()]

    @property
    def sections(self):
        return list(self)

    def section(self, id):
        """
        Return the section at the given index.

        :raises morphotree.exceptions.NotFoundError: if there's no such section.
        """
        if isinstance(id, bool) or not 0 <= id < len(self):
            raise NotFoundError(f"No section with id {id}.", id)
        return Section(self, int(id))

    def single_root(self):
        """
        Return the root section of a morphology that consists of a single tree.

        :raises morphotree.exceptions.MultipleTreesError: if there are multiple roots.
        :raises morphotree.exceptions.NotFoundError: if there are no sections.
        """
        roots = self.root_sections
        if len(roots) > 1:
            raise MultipleTreesError(f"Morphology has {len(roots)} root sections.")
        if not roots:
            raise NotFoundError("Morphology has no sections.", None)
        return roots[0]

    def _start(self, section):
        if section is None:
            return self.root_sections
        if isinstance(section, Section):
            if section._morphology is not self:
                raise NotFoundError(
                    f"{section} belongs to another morphology.", section.id
                )
            return section
        return self.section(section)

    def depth_first(self, section=None):
        """
        Iterate depth-first over the subtree of ``section``, or over all sections.
        """
        return traversal.depth_first(self._start(section))

    def breadth_first(self, section=None):
        """
        Iterate breadth-first over the subtree of ``section``, or over all sections.
        """
        return traversal.breadth_first(self._start(section))

    def upstream(self, section):
        """
        Iterate from ``section`` up to its root.
        """
        if section is None:
            raise NotFoundError("Upstream traversal requires a start section.", None)
        return traversal.upstream(self._start(section))


__all__ = ["Morphology", "Section"]
