import unittest

import numpy as np

from morphotree import _util, mut
from morphotree.exceptions import *
from morphotree.unittest import NumpyTestCase, random_morphology


class TestArrayUtils(NumpyTestCase, unittest.TestCase):
    def test_sanitize_empty(self):
        for empty in ([], [[]], np.empty((0, 7))):
            with self.subTest(empty=empty):
                arr = _util.sanitize_ndarray(empty, (-1, 3), float)
                self.assertEqual((0, 3), arr.shape)

    def test_sanitize_shape(self):
        arr = _util.sanitize_ndarray([[1, 2, 3]], (-1, 3), float)
        self.assertEqual(np.float64, arr.dtype)
        with self.assertRaises(ValueError):
            _util.sanitize_ndarray([1, 2, 3], (-1, 3))
        with self.assertRaises(ValueError):
            _util.sanitize_ndarray([[1, 2]], (-1, 3))

    def test_sanitize_copy(self):
        src = np.zeros(3)
        self.assertTrue(np.shares_memory(src, _util.sanitize_ndarray(src, (-1,))))
        copied = _util.sanitize_ndarray(src, (-1,), copy=True)
        self.assertFalse(np.shares_memory(src, copied))

    def test_freeze(self):
        a, b = np.zeros(2), np.ones(2)
        self.assertIs(a, _util.freeze(a))
        _util.freeze(a, b)
        with self.assertRaises(ValueError):
            b[0] = 5

    def test_samelen(self):
        self.assertTrue(_util.samelen([1], [2], "a"))
        self.assertFalse(_util.samelen([1], []))
        self.assertTrue(_util.samelen())


class TestStr(unittest.TestCase):
    def test_str(self):
        m = random_morphology(5, seed=0)
        for obj in (m, m.section(0), m.build_read_only(), m.build_read_only().soma):
            with self.subTest(obj=type(obj)):
                self.assertNotEqual(object.__repr__(obj), repr(obj))


class TestErrorKinds(unittest.TestCase):
    def test_kinds(self):
        for cls, kind in (
            (StructuralError, ErrorKind.STRUCTURAL),
            (RawDataError, ErrorKind.RAW_DATA),
            (IdSequenceError, ErrorKind.ID_SEQUENCE),
            (MultipleTreesError, ErrorKind.MULTIPLE_ROOTS),
            (MissingParentError, ErrorKind.MISSING_PARENT),
            (SectionBuilderError, ErrorKind.SECTION_BUILDER),
            (NotFoundError, ErrorKind.NOT_FOUND),
            (SomaError, ErrorKind.SOMA),
        ):
            with self.subTest(cls=cls.__name__):
                self.assertIs(kind, cls.kind)
                self.assertTrue(issubclass(cls, StructuralError))

    def test_details(self):
        err = MissingParentError("Missing.", 4, 2)
        self.assertEqual(4, err.section_id)
        self.assertEqual(2, err.parent_id)
        self.assertIsInstance(err, RawDataError)
        self.assertNotIsInstance(NotFoundError("Gone.", 1), RawDataError)

    def test_catch_by_kind(self):
        m = mut.Morphology()
        try:
            m.section(0)
        except StructuralError as e:
            self.assertIs(ErrorKind.NOT_FOUND, e.kind)
            self.assertEqual(0, e.section_id)
        else:
            self.fail("Lookup of missing section should fail")
