"""
`morphotree` models neuron morphologies as a forest of sections attached to a soma. It
offers an editable representation, :class:`morphotree.mut.Morphology`, and a flattened
read-only one, :class:`morphotree.Morphology`, with deterministic conversion between
both and iterative depth-first, breadth-first and upstream traversals.
"""

__version__ = "1.0.0"

from . import exceptions, mut, options, traversal
from .builder import build_read_only, reconstruct
from .enums import CellFamily, DeletePolicy, MorphologyVersion, SectionType, SomaType
from .morphology import Morphology, Section
from .properties import CellLevel, PointLevel, Properties, SectionLevel
from .soma import Soma

__all__ = [
    "CellFamily",
    "CellLevel",
    "DeletePolicy",
    "Morphology",
    "MorphologyVersion",
    "PointLevel",
    "Properties",
    "Section",
    "SectionLevel",
    "SectionType",
    "Soma",
    "SomaType",
    "build_read_only",
    "exceptions",
    "mut",
    "options",
    "reconstruct",
    "traversal",
]
