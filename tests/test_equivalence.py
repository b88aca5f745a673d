import numpy as np
from numpy.testing import assert_array_equal

from vertex_weld.mesh.equivalence import (
    UnionFind,
    group_members,
    resolve_equivalence_classes,
    select_representatives,
)


def test_union_find_larger_root_wins():
    uf = UnionFind(5)
    assert uf.union(0, 3) == 3
    assert uf.union(3, 1) == 3
    assert uf.find(0) == uf.find(1) == 3
    assert uf.find(2) == 2
    assert len(uf) == 5


def test_union_find_long_chain_without_recursion_limit():
    n = 50000
    uf = UnionFind(n)
    for i in range(n - 1):
        uf.union(i, i + 1)
    assert uf.find(0) == n - 1


def test_no_pairs_gives_singletons():
    labels = resolve_equivalence_classes(4, np.empty((0, 2), dtype=np.int64))
    assert len(set(labels.tolist())) == 4


def test_transitive_closure():
    # 0-1 und 1-2 nah, 0-2 nicht: trotzdem eine Klasse
    labels = resolve_equivalence_classes(5, [[0, 1], [1, 2], [3, 4]])
    assert labels[0] == labels[1] == labels[2]
    assert labels[3] == labels[4]
    assert labels[0] != labels[3]


def test_representative_is_max_index():
    labels = resolve_equivalence_classes(6, [[4, 0], [0, 2], [1, 5]])
    assert_array_equal(select_representatives(labels), [4, 5, 4, 3, 4, 5])


def test_representative_independent_of_labels():
    # Beliebige Labels (nicht die Wurzel): Maximum wird trotzdem explizit bestimmt
    labels = np.array([0, 0, 1, 0, 1])
    assert_array_equal(select_representatives(labels), [3, 3, 4, 3, 4])


def test_representative_independent_of_union_order():
    pairs = [[0, 1], [1, 2], [2, 3], [5, 6]]
    forward = select_representatives(resolve_equivalence_classes(7, pairs))
    backward = select_representatives(resolve_equivalence_classes(7, pairs[::-1]))
    assert_array_equal(forward, backward)
    assert_array_equal(forward, [3, 3, 3, 3, 4, 6, 6])


def test_group_members():
    labels = resolve_equivalence_classes(5, [[3, 0], [2, 4]])
    groups = group_members(labels)
    assert [g.tolist() for g in groups] == [[0, 3], [1], [2, 4]]


def test_empty():
    labels = resolve_equivalence_classes(0, [])
    assert labels.shape == (0,)
    assert select_representatives(labels).shape == (0,)
    assert group_members(labels) == []
