import unittest

import numpy as np

from morphotree import PointLevel, Properties, SectionLevel, SectionType, mut
from morphotree.exceptions import *
from morphotree.properties import NO_PARENT
from morphotree.unittest import NumpyTestCase, point_level


class TestPointLevel(NumpyTestCase, unittest.TestCase):
    def test_defaults(self):
        pl = PointLevel()
        self.assertEqual((0, 3), pl.points.shape)
        self.assertEqual((0,), pl.diameters.shape)
        self.assertEqual((0,), pl.perimeters.shape)
        self.assertEqual(0, len(pl))

    def test_malformed(self):
        with self.assertRaises(RawDataError) as cm:
            PointLevel([(0, 0), (1, 1)], [1, 1])
        self.assertIs(ErrorKind.RAW_DATA, cm.exception.kind)
        with self.assertRaises(RawDataError):
            PointLevel([(0, 0, 0), (1, 1)], [1, 1])
        with self.assertRaises(RawDataError):
            PointLevel([(0, 0, "x")], [1])

    def test_mismatch_is_raw_data_error(self):
        with self.assertRaises(RawDataError):
            PointLevel([(0, 0, 0)], [1, 2])


class TestProperties(NumpyTestCase, unittest.TestCase):
    def setUp(self):
        m = mut.Morphology()
        m.append_section(None, SectionType.AXON, point_level(2, perimeters=True))
        m.append_section(0, SectionType.AXON, point_level(3, 2, perimeters=True))
        m.append_section(
            0, SectionType.APICAL_DENDRITE, point_level(1, 5, perimeters=True)
        )
        self.built = m.build_read_only()
        self.props = self.built.properties

    def test_counts(self):
        self.assertEqual(3, self.props.n_sections)
        self.assertEqual(6, self.props.n_points)

    def test_ranges(self):
        self.assertEqual((2, 5), self.props.point_range(1))
        self.assertClose([2, 3, 4], self.props.points_of(1)[:, 0])
        self.assertEqual(3, len(self.props.diameters_of(1)))
        self.assertClose(self.props.diameters_of(1) * 3, self.props.perimeters_of(1))

    def test_topology(self):
        self.assertIsNone(self.props.parent_of(0))
        self.assertEqual(0, self.props.parent_of(2))
        self.assertEqual([1, 2], self.props.children_of(0).tolist())
        self.assertEqual([], self.props.children_of(1).tolist())
        self.assertEqual([0], self.props.roots().tolist())
        self.assertEqual(NO_PARENT, self.props.section_level.parents[0])

    def test_types(self):
        self.assertEqual(int(SectionType.APICAL_DENDRITE), self.props.type_of(2))
        self.assertEqual([2, 2, 4], self.built.section_types.tolist())

    def test_section_view(self):
        section = self.built.section(1)
        self.assertEqual(1, section.id)
        self.assertEqual(1, section.source_id)
        self.assertIs(SectionType.AXON, section.type)
        self.assertEqual(3, len(section))
        self.assertEqual(self.built.section(0), section.parent)
        self.assertFalse(section.is_root)
        self.assertIs(self.built, section.morphology)
        self.assertIn("section 1", repr(section))

    def test_lookup(self):
        for bad in (-1, 3, True):
            with self.subTest(id=bad):
                with self.assertRaises(NotFoundError):
                    self.built.section(bad)

    def test_single_root(self):
        self.assertEqual(self.built.section(0), self.built.single_root())

    def test_equality(self):
        self.assertEqual(self.built, self.built.as_mutable().build_read_only())
        m = self.built.as_mutable()
        m.section(2).type = SectionType.AXON
        self.assertNotEqual(self.built, m.build_read_only())
        self.assertNotEqual(self.props, m.build_read_only().properties)

    def test_freezes_in_place(self):
        arrays = [np.zeros((1, 3)), np.ones(1), np.empty(0)]
        level = SectionLevel(
            np.array([0, 1]),
            np.array([2]),
            np.array([NO_PARENT]),
            np.array([0, 0]),
            np.empty(0, dtype=int),
            np.array([0]),
        )
        props = Properties(*arrays, level)
        self.assertIs(arrays[0], props.points, "arrays should be taken over, not copied")
        for arr in (*arrays, *level.arrays()):
            self.assertFalse(arr.flags.writeable, "caller's array left writeable")
