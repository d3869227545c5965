"""
Helpers to test code that works with morphologies.
"""

import numpy as _np

from ..enums import SectionType as _SectionType
from ..mut import Morphology as _MutableMorphology
from ..properties import PointLevel as _PointLevel


class NumpyTestCase:
    def assertClose(self, a, b, msg="", /, **kwargs):
        if msg:
            msg += ". "
        return self.assertTrue(
            _np.allclose(a, b, **kwargs), f"{msg}Expected {a}, got {b}"
        )

    def assertAll(self, a, msg="", /, **kwargs):
        a = _np.asarray(a)
        trues = _np.sum(a.astype(bool))
        all = a.size
        if msg:
            msg += ". "
        return self.assertTrue(
            _np.all(a, **kwargs), f"{msg}Only {trues} out of {all} True"
        )


class MorphologyAssertions:
    def assertSameStructure(self, a, b, msg=""):
        """
        Assert that two mutable morphologies have the same sections and topology, up to
        their ids: both are walked depth-first and compared pairwise.
        """
        if msg:
            msg += ". "
        self.assertEqual(len(a), len(b), f"{msg}Different section count")
        self.assertEqual(
            len(a.root_sections), len(b.root_sections), f"{msg}Different root count"
        )
        for sa, sb in zip(a.depth_first(), b.depth_first()):
            self.assertEqual(sa.type, sb.type, f"{msg}Type of {sa} and {sb} differs")
            for field in ("points", "diameters", "perimeters"):
                va, vb = getattr(sa, field), getattr(sb, field)
                self.assertEqual(va.shape, vb.shape, f"{msg}{field} of {sa} and {sb}")
                self.assertTrue(
                    _np.array_equal(va, vb), f"{msg}{field} of {sa} and {sb} differ"
                )
            self.assertEqual(
                len(sa.children), len(sb.children), f"{msg}Children of {sa} and {sb}"
            )
            self.assertEqual(sa.is_root, sb.is_root, f"{msg}{sa} and {sb} root state")


def point_level(n=2, offset=0, perimeters=False):
    """
    Make the point level data of a straight section of ``n`` points along the x-axis.
    """
    points = _np.zeros((n, 3))
    points[:, 0] = _np.arange(offset, offset + n)
    diameters = _np.linspace(1, 0.5, n) if n > 1 else _np.ones(n)
    return _PointLevel(points, diameters, diameters * 3 if perimeters else None)


def random_morphology(sections=50, roots=1, seed=None, perimeters=False):
    """
    Build a random mutable morphology with the given amount of sections and roots.
    Every section picks a random earlier section as its parent.
    """
    rng = _np.random.default_rng(seed)
    morpho = _MutableMorphology()
    morpho.soma.points = rng.random((3, 3))
    morpho.soma.diameters = rng.random(3) + 1
    types = list(_SectionType)[1:]
    ids = []
    for i in range(sections):
        parent = None if i < roots else ids[rng.integers(len(ids))]
        n = int(rng.integers(1, 6))
        pl = _PointLevel(
            rng.random((n, 3)) * 100,
            rng.random(n) + 0.1,
            rng.random(n) if perimeters else None,
        )
        ids.append(morpho.append_section(parent, types[rng.integers(len(types))], pl))
    return morpho


def chain_morphology(depth):
    """
    Build a mutable morphology that is a single unbranched chain of ``depth`` sections.
    """
    morpho = _MutableMorphology()
    parent = None
    for i in range(depth):
        parent = morpho.append_section(parent, _SectionType.AXON, point_level(2, i))
    return morpho


def depth_of(section):
    """
    Number of ancestors of a section.
    """
    depth = 0
    while (section := section.parent) is not None:
        depth += 1
    return depth
