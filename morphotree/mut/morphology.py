"""
Mutable morphologies. Sections live in an arena owned by the :class:`Morphology`, keyed
by id, and refer to their parent and children by id only.
"""

from .. import _util, builder, traversal
from ..enums import CellFamily, DeletePolicy, MorphologyVersion, SomaType
from ..exceptions import (
    MissingParentError,
    MultipleTreesError,
    NotFoundError,
    RawDataError,
)
from ..morphology import Morphology as _ReadOnlyMorphology
from ..properties import PointLevel
from ..reporting import report
from .section import Section, _as_section_type
from .soma import Soma


class _SectionData:
    __slots__ = ("type", "points", "diameters", "perimeters", "parent", "children")

    def __init__(self, type, point_level, parent):
        self.type = type
        self.points = point_level.points.copy()
        self.diameters = point_level.diameters.copy()
        self.perimeters = point_level.perimeters.copy()
        self.parent = parent
        self.children = []


class Morphology:
    """
    Editable forest of sections attached to a soma.

    Not safe for concurrent use: modifying a morphology from several threads, or while
    one of its traversals is underway, is undefined behavior.

    :param source: Optional morphology to start from. A read-only
      :class:`morphotree.Morphology` is reconstructed, a mutable one is deep-copied.
    """

    def __init__(self, source=None):
        self._sections = {}
        self._roots = []
        self._next_id = 0
        self._soma = Soma()
        self.cell_family = CellFamily.NEURON
        self.soma_type = SomaType.UNDEFINED
        self.version = MorphologyVersion.UNDEFINED
        if source is None:
            pass
        elif isinstance(source, _ReadOnlyMorphology):
            builder.reconstruct(source, self)
        elif isinstance(source, Morphology):
            self._copy_from(source)
        else:
            raise TypeError(
                f"Can't create a morphology from {type(source).__name__} objects."
            )

    def _copy_from(self, other):
        self._soma.points = other.soma.points
        self._soma.diameters = other.soma.diameters
        self.cell_family = other.cell_family
        self.soma_type = other.soma_type
        self.version = other.version
        for root in other.root_sections:
            self.append_section(None, other.section(root), recursive=True)

    @_util.obj_str_insert
    def __repr__(self):
        return f"{len(self._roots)} roots, {len(self)} sections"

    def __len__(self):
        return len(self._sections)

    def __contains__(self, id):
        return id in self._sections

    def __iter__(self):
        return self.depth_first()

    @property
    def soma(self):
        return self._soma

    @property
    def sections(self):
        """
        All sections, by id.
        """
        return {id: Section(self, id) for id in self._sections}

    @property
    def root_sections(self):
        """
        Ids of the root sections, in order.
        """
        return self._roots.copy()

    def _get_data(self, id):
        try:
            return self._sections[id]
        except (KeyError, TypeError):
            raise NotFoundError(f"No section with id {id}.", id) from None

    def _id_of(self, section):
        if isinstance(section, Section):
            if section.morphology is not self:
                raise NotFoundError(
                    f"{section} belongs to another morphology.", section.id
                )
            section = section.id
        self._get_data(section)
        return section

    def _siblings(self, parent):
        # The list a section with the given parent is stored in.
        return self._roots if parent is None else self._sections[parent].children

    def section(self, id):
        """
        Return a handle on the section with the given id.

        :raises morphotree.exceptions.NotFoundError: if there's no such section.
        """
        self._get_data(id)
        return Section(self, id)

    def parent(self, id):
        """
        Return the parent id of a section, or ``None`` for root sections.
        """
        return self._get_data(id).parent

    def children(self, id):
        """
        Return the child ids of a section, in branch order.
        """
        return self._get_data(id).children.copy()

    def single_root(self):
        """
        Return the id of the root section of a morphology that consists of a single tree.

        :raises morphotree.exceptions.MultipleTreesError: if there are multiple roots.
        :raises morphotree.exceptions.NotFoundError: if there are no sections.
        """
        if len(self._roots) > 1:
            raise MultipleTreesError(f"Morphology has {len(self._roots)} root sections.")
        if not self._roots:
            raise NotFoundError("Morphology has no sections.", None)
        return self._roots[0]

    def append_section(self, parent, section, point_level=None, recursive=False):
        """
        Append a new section as the last child of ``parent``, or as the last root section
        if ``parent`` is ``None``.

        :param parent: Parent id or section, or ``None``.
        :param section: Either the type of the new section, described by
          ``point_level``, or an existing section of any morphology, mutable or not,
          whose data is copied.
        :type section: Union[morphotree.enums.SectionType, morphotree.mut.Section,
          morphotree.morphology.Section]
        :param point_level: Points, diameters and perimeters of a new section.
        :type point_level: morphotree.properties.PointLevel
        :param recursive: When copying a section, also copy its descendants.
        :returns: Id of the new section.
        :rtype: int
        :raises morphotree.exceptions.MissingParentError: if the parent doesn't exist.
        :raises morphotree.exceptions.SectionBuilderError: if the point level data
          lengths don't agree.
        """
        parent_id = self._parent_id(parent)
        if hasattr(section, "children"):
            if point_level is not None:
                raise TypeError("Can't give point level data when copying a section.")
            plan = self._copy_plan(section, recursive)
        else:
            if point_level is None:
                point_level = PointLevel()
            elif not isinstance(point_level, PointLevel):
                raise RawDataError(
                    f"Expected point level data, got {type(point_level).__name__}."
                )
            plan = [(None, _as_section_type(section), point_level, None)]
        # Everything is validated, from here on nothing can fail.
        ids = {}
        for key, type_, point_level, parent_key in plan:
            ids[key] = self._insert(
                parent_id if parent_key is None else ids[parent_key], type_, point_level
            )
        return ids[plan[0][0]]

    def _parent_id(self, parent):
        if parent is None:
            return None
        if isinstance(parent, Section):
            if parent.morphology is not self:
                raise MissingParentError(
                    f"Parent {parent} belongs to another morphology.", None, parent.id
                )
            parent = parent.id
        if isinstance(parent, bool) or parent not in self._sections:
            raise MissingParentError(
                f"Parent section {parent} does not exist.", None, parent
            )
        return parent

    def _copy_plan(self, section, recursive):
        # Validated copies of the sections to append, parents before children.
        sources = traversal.depth_first(section) if recursive else [section]
        plan = []
        for source in sources:
            point_level = PointLevel(
                source.points, source.diameters, source.perimeters
            )
            parent_key = None if source == section else source.parent
            plan.append((source, _as_section_type(source.type), point_level, parent_key))
        return plan

    def _insert(self, parent, type_, point_level):
        id = self._next_id
        self._next_id += 1
        self._sections[id] = _SectionData(type_, point_level, parent)
        self._siblings(parent).append(id)
        return id

    def delete_section(self, section, policy):
        """
        Delete a section.

        :param section: Id or handle of the section to delete.
        :param policy: :attr:`DeletePolicy.SUBTREE` deletes all descendants as well,
          :attr:`DeletePolicy.KEEP_CHILDREN` moves the children into the position of
          the deleted section in its parent's child list (or the root list), in order.
        :type policy: morphotree.enums.DeletePolicy
        :raises morphotree.exceptions.NotFoundError: if the section doesn't exist.
        """
        id = self._id_of(section)
        policy = DeletePolicy(policy)
        data = self._sections[id]
        siblings = self._siblings(data.parent)
        if policy is DeletePolicy.SUBTREE:
            doomed = [s.id for s in traversal.depth_first(Section(self, id))]
            siblings.remove(id)
            # Children before their parents.
            for doomed_id in reversed(doomed):
                del self._sections[doomed_id]
            report(f"Deleted section {id} and {len(doomed) - 1} descendants.", level=4)
        else:
            position = siblings.index(id)
            siblings[position : position + 1] = data.children
            for child in data.children:
                self._sections[child].parent = data.parent
            del self._sections[id]
            report(f"Deleted section {id}, kept {len(data.children)} children.", level=4)

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

    def _start(self, section):
        if section is None:
            return [Section(self, id) for id in self._roots]
        return Section(self, self._id_of(section))

    def build_read_only(self):
        """
        Flatten this morphology into an immutable one.

        :rtype: morphotree.Morphology
        """
        return builder.build_read_only(self)


__all__ = ["Morphology"]
