from enum import Enum

from errr import exception as _e
from errr import make_tree as _t


class ErrorKind(Enum):
    # Generic invalid tree condition.
    STRUCTURAL = "structural"
    # Malformed point, diameter or perimeter data.
    RAW_DATA = "raw_data"
    # Section ids don't follow the expected ordering/uniqueness scheme.
    ID_SEQUENCE = "id_sequence"
    # A single root tree was required, but a forest was given.
    MULTIPLE_ROOTS = "multiple_roots"
    # A parent id is absent from the tree.
    MISSING_PARENT = "missing_parent"
    # Build time consistency failure.
    SECTION_BUILDER = "section_builder"
    # Lookup of an absent (or deleted) id.
    NOT_FOUND = "not_found"
    # Soma data can't satisfy the request.
    SOMA = "soma"


_t(
    globals(),
    StructuralError=_e(
        RawDataError=_e(
            IdSequenceError=_e("section_id"),
            MultipleTreesError=_e(),
            MissingParentError=_e("section_id", "parent_id"),
            SectionBuilderError=_e("section_id"),
        ),
        NotFoundError=_e("section_id"),
        SomaError=_e(),
    ),
    OptionError=_e(
        ReadOnlyOptionError=_e("option", "tag"),
    ),
)

for _cls, _kind in (
    (StructuralError, ErrorKind.STRUCTURAL),
    (RawDataError, ErrorKind.RAW_DATA),
    (IdSequenceError, ErrorKind.ID_SEQUENCE),
    (MultipleTreesError, ErrorKind.MULTIPLE_ROOTS),
    (MissingParentError, ErrorKind.MISSING_PARENT),
    (SectionBuilderError, ErrorKind.SECTION_BUILDER),
    (NotFoundError, ErrorKind.NOT_FOUND),
    (SomaError, ErrorKind.SOMA),
):
    _cls.kind = _kind


# Warnings


class MorphologyWarning(UserWarning):
    pass


class EmptySectionWarning(MorphologyWarning):
    pass


__all__ = [
    "EmptySectionWarning",
    "ErrorKind",
    "IdSequenceError",
    "MissingParentError",
    "MorphologyWarning",
    "MultipleTreesError",
    "NotFoundError",
    "OptionError",
    "RawDataError",
    "ReadOnlyOptionError",
    "SectionBuilderError",
    "SomaError",
    "StructuralError",
]
