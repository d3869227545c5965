import sys
import unittest

from morphotree import SectionType, mut, traversal
from morphotree.exceptions import NotFoundError
from morphotree.unittest import (
    chain_morphology,
    depth_of,
    point_level,
    random_morphology,
)


def _tree():
    # 0 -> (1 -> (3, 4), 2 -> 5), 6 -> 7
    m = mut.Morphology()
    for parent in (None, 0, 0, 1, 1, 2, None, 6):
        m.append_section(parent, SectionType.BASAL_DENDRITE, point_level())
    return m


class _TraversalTests:
    """
    Traversal tests that run on both morphology representations. ``make`` turns a
    mutable morphology into the representation under test, ``key`` maps a visited
    section to the id it had in the mutable morphology.
    """

    def make(self, m):
        raise NotImplementedError()

    def key(self, section):
        raise NotImplementedError()

    def test_depth_first_order(self):
        morpho = self.make(_tree())
        self.assertEqual(
            [0, 1, 3, 4, 2, 5, 6, 7], [self.key(s) for s in morpho.depth_first()]
        )

    def test_breadth_first_order(self):
        morpho = self.make(_tree())
        self.assertEqual(
            [0, 6, 1, 2, 7, 3, 4, 5], [self.key(s) for s in morpho.breadth_first()]
        )

    def test_subtree(self):
        morpho = self.make(_tree())
        start = next(s for s in morpho.depth_first() if self.key(s) == 1)
        self.assertEqual([1, 3, 4], [self.key(s) for s in start.depth_first()])
        self.assertEqual([1, 3, 4], [self.key(s) for s in start.breadth_first()])

    def test_upstream(self):
        morpho = self.make(_tree())
        leaf = next(s for s in morpho.depth_first() if self.key(s) == 5)
        self.assertEqual([5, 2, 0], [self.key(s) for s in leaf.upstream()])
        self.assertEqual([5, 2, 0], [self.key(s) for s in morpho.upstream(leaf)])

    def test_completeness(self):
        for seed in range(4):
            with self.subTest(seed=seed):
                morpho = self.make(random_morphology(150, roots=seed + 1, seed=seed))
                for order in (morpho.depth_first, morpho.breadth_first):
                    keys = [self.key(s) for s in order()]
                    self.assertEqual(150, len(keys), "not every section visited")
                    self.assertEqual(150, len(set(keys)), "section visited twice")

    def test_parent_before_child(self):
        morpho = self.make(random_morphology(150, roots=3, seed=21))
        seen = set()
        for section in morpho.depth_first():
            if section.parent is not None:
                self.assertIn(section.parent, seen, "child visited before parent")
            seen.add(section)

    def test_breadth_levels(self):
        morpho = self.make(random_morphology(150, roots=3, seed=22))
        depths = [depth_of(s) for s in morpho.breadth_first()]
        self.assertEqual(sorted(depths), depths, "deeper section visited too early")

    def test_upstream_length(self):
        morpho = self.make(random_morphology(80, seed=23))
        for section in morpho.depth_first():
            path = list(section.upstream())
            self.assertEqual(depth_of(section) + 1, len(path))
            self.assertTrue(path[-1].is_root)

    def test_single_pass(self):
        morpho = self.make(_tree())
        it = morpho.depth_first()
        self.assertEqual(8, len(list(it)))
        self.assertEqual([], list(it), "exhausted iterator yielded again")
        self.assertEqual(8, len(list(morpho.depth_first())), "fresh iterator empty")

    def test_deep_tree(self):
        depth = sys.getrecursionlimit() * 3
        morpho = self.make(chain_morphology(depth))
        self.assertEqual(depth, sum(1 for _ in morpho.depth_first()))
        self.assertEqual(depth, sum(1 for _ in morpho.breadth_first()))
        leaf = list(morpho.depth_first())[-1]
        self.assertEqual(depth, sum(1 for _ in leaf.upstream()))

    def test_empty(self):
        morpho = self.make(mut.Morphology())
        self.assertEqual([], list(morpho.depth_first()))
        self.assertEqual([], list(morpho.breadth_first()))

    def test_upstream_needs_start(self):
        morpho = self.make(_tree())
        with self.assertRaises(NotFoundError):
            morpho.upstream(None)


class TestMutableTraversal(_TraversalTests, unittest.TestCase):
    def make(self, m):
        return m

    def key(self, section):
        return section.id

    def test_by_id(self):
        m = _tree()
        self.assertEqual([2, 5], [s.id for s in m.depth_first(2)])
        self.assertEqual([4, 1, 0], [s.id for s in m.upstream(4)])
        with self.assertRaises(NotFoundError):
            m.depth_first(42)

    def test_iter(self):
        m = _tree()
        self.assertEqual([s.id for s in m.depth_first()], [s.id for s in m])


class TestReadOnlyTraversal(_TraversalTests, unittest.TestCase):
    def make(self, m):
        return m.build_read_only()

    def key(self, section):
        return section.source_id

    def test_index_order_is_depth_first(self):
        built = random_morphology(100, roots=2, seed=9).build_read_only()
        self.assertEqual(list(range(100)), [s.id for s in built.depth_first()])
        self.assertEqual(list(built), list(built.depth_first()))

    def test_foreign_section(self):
        a = _tree().build_read_only()
        b = _tree().build_read_only()
        with self.assertRaises(NotFoundError):
            a.depth_first(b.section(0))


class TestGeneric(unittest.TestCase):
    def test_root_list(self):
        m = _tree()
        roots = [m.section(i) for i in m.root_sections]
        self.assertEqual(
            [0, 1, 3, 4, 2, 5, 6, 7], [s.id for s in traversal.depth_first(roots)]
        )
        self.assertEqual([6, 7], [s.id for s in traversal.depth_first(roots[1])])

    def test_whole_morphology(self):
        m = _tree()
        built = m.build_read_only()
        for order in (traversal.depth_first, traversal.breadth_first):
            with self.subTest(order=order.__name__):
                self.assertEqual(
                    [s.id for s in getattr(m, order.__name__)()],
                    [s.id for s in order(m)],
                )
                self.assertEqual(list(getattr(built, order.__name__)()), list(order(built)))
        chain = chain_morphology(3)
        self.assertEqual([0, 1, 2], [s.id for s in traversal.depth_first(chain)])
        self.assertEqual(
            [0, 1, 2], [s.id for s in traversal.depth_first(chain.build_read_only())]
        )

    def test_lazy(self):
        m = _tree()
        it = traversal.breadth_first(m.section(0))
        first = next(it)
        self.assertEqual(0, first.id)
        self.assertEqual([1, 2], [s.id for s in (next(it), next(it))])

    def test_none(self):
        self.assertEqual([], list(traversal.depth_first(None)))
        self.assertEqual([], list(traversal.upstream(None)))
