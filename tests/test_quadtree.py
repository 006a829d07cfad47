from nirvana.ecs import Entity
from nirvana.quadtree import QuadTree


def fill(tree, count, x=10, y=10):
    entities = [Entity(x, y, 5, 5) for _ in range(count)]
    for e in entities:
        assert tree.insert(e)
    return entities


def test_out_of_bounds_insert_is_rejected():
    tree = QuadTree(0, 0, 100, 100)
    assert not tree.insert(Entity(200, 10, 5, 5))
    assert not tree.insert(Entity(10, -50, 5, 5))
    assert tree.entities == {}


def test_edge_touching_entity_is_accepted():
    tree = QuadTree(0, 0, 100, 100)
    e = Entity(100, 100, 5, 5)
    assert tree.insert(e)
    assert e in tree.entities


def test_root_holds_up_to_capacity_as_leaf():
    tree = QuadTree(0, 0, 100, 100)
    entities = fill(tree, QuadTree.MAX_OBJECTS)
    assert tree.is_leaf
    assert list(tree.leaves()) == [tree]
    assert set(tree.entities) == set(entities)


def test_overflow_subdivides_into_four_quadrants():
    tree = QuadTree(0, 0, 100, 100)
    fill(tree, QuadTree.MAX_OBJECTS)
    extra = Entity(60, 60, 5, 5)
    assert tree.insert(extra)
    leaves = list(tree.leaves())
    assert len(leaves) == 4
    assert tree.entities == {}
    assert all(leaf.depth == tree.depth + 1 for leaf in leaves)
    nw, ne, sw, se = leaves
    assert (nw.xpos, nw.ypos) == (tree.xpos, tree.ypos)
    assert (se.xpos, se.ypos) == (tree.xpos + nw.width, tree.ypos + nw.height)
    assert extra in se.entities
    assert sum(len(leaf.entities) for leaf in leaves) == 1


def test_straddling_entity_lands_in_every_touching_leaf():
    tree = QuadTree(0, 0, 100, 100)
    fill(tree, QuadTree.MAX_OBJECTS)
    tree.insert(Entity(80, 80, 5, 5))
    centre = Entity(45, 45, 10, 10)
    tree.insert(centre)
    assert all(centre in leaf.entities for leaf in tree.leaves())


def test_max_depth_leaf_ignores_capacity():
    tree = QuadTree(0, 0, 100, 100, depth=QuadTree.MAX_DEPTH)
    entities = fill(tree, QuadTree.MAX_OBJECTS * 2)
    assert tree.is_leaf
    assert len(tree.entities) == len(entities)


def test_construct_skips_removed_and_none():
    tree = QuadTree(0, 0, 100, 100)
    alive, removed = Entity(1, 1, 2, 2), Entity(2, 2, 2, 2)
    removed.mark_remove = True
    tree.construct([alive, None, removed])
    assert list(tree.entities) == [alive]


def test_clean_drops_removed_and_departed():
    tree = QuadTree(0, 0, 100, 100)
    stay, leave, dead = Entity(1, 1, 2, 2), Entity(3, 3, 2, 2), Entity(5, 5, 2, 2)
    tree.construct([stay, leave, dead])
    leave.xpos = 500
    dead.mark_remove = True
    tree.clean()
    assert list(tree.entities) == [stay]


def test_combine_collapses_empty_leaves_only():
    tree = QuadTree(0, 0, 100, 100)
    fill(tree, QuadTree.MAX_OBJECTS)
    extra = Entity(60, 60, 5, 5)
    tree.insert(extra)
    tree.combine()
    assert not tree.is_leaf
    extra.mark_remove = True
    for leaf in tree.leaves():
        leaf.clean()
    tree.combine()
    assert tree.is_leaf
    assert list(tree.leaves()) == [tree]


def test_combine_on_leaf_is_harmless():
    tree = QuadTree(0, 0, 100, 100)
    e = Entity(1, 1, 1, 1)
    tree.insert(e)
    tree.combine()
    assert list(tree.entities) == [e]