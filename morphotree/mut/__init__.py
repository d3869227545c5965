"""
Editable morphologies. Build a morphology section by section, or reconstruct one from a
read-only :class:`morphotree.Morphology`, edit it, and flatten it back with
:meth:`Morphology.build_read_only`.
"""

from .morphology import Morphology
from .section import Section
from .soma import Soma

__all__ = ["Morphology", "Section", "Soma"]
