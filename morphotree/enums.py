"""
Tag sets used throughout the package. None of them affect topology rules, they're purely
descriptive.
"""

from enum import Enum, IntEnum


class SectionType(IntEnum):
    UNDEFINED = 0
    SOMA = 1
    AXON = 2
    BASAL_DENDRITE = 3
    APICAL_DENDRITE = 4


class CellFamily(IntEnum):
    NEURON = 0
    GLIA = 1


class SomaType(IntEnum):
    UNDEFINED = 0
    SINGLE_POINT = 1
    NEUROMORPHO_THREE_POINT_CYLINDERS = 2
    CYLINDERS = 3
    THREE_POINTS = 4
    SIMPLE_CONTOUR = 5


class MorphologyVersion(Enum):
    H5_1 = "h5v1"
    H5_2 = "h5v2"
    H5_1_1 = "h5v1.1"
    SWC_1 = "swc1"
    UNDEFINED = "undefined"


class DeletePolicy(Enum):
    # Remove the section and every descendant.
    SUBTREE = "subtree"
    # Remove only the section, and splice its children into its place.
    KEEP_CHILDREN = "keep_children"


__all__ = [
    "CellFamily",
    "DeletePolicy",
    "MorphologyVersion",
    "SectionType",
    "SomaType",
]
