from types import SimpleNamespace

from app.utils.hierarchy import build_hierarchy, find_unreachable, iter_hierarchy


def staff(id, reports_to=None):
    return SimpleNamespace(id=id, reports_to=reports_to)


def shape(nodes):
    """Nested (id, [children]) tuples, convenient for equality checks"""
    return [(node.id, shape(node.children)) for node in nodes]


def test_builds_single_tree():
    roots = build_hierarchy([staff(1), staff(2, 1), staff(3, 1), staff(4, 2)])

    assert shape(roots) == [(1, [(2, [(4, [])]), (3, [])])]


def test_input_order_does_not_change_parenting():
    roots = build_hierarchy([staff(4, 2), staff(3, 1), staff(2, 1), staff(1)])

    assert [root.id for root in roots] == [1]
    assert sorted(child.id for child in roots[0].children) == [2, 3]
    child_two = next(child for child in roots[0].children if child.id == 2)
    assert [child.id for child in child_two.children] == [4]


def test_null_manager_is_root():
    roots = build_hierarchy([staff(1), staff(2), staff(3, 2)])

    assert [root.id for root in roots] == [1, 2]


def test_unknown_manager_is_promoted_to_root():
    roots = build_hierarchy([staff(1), staff(2, 99), staff(3, 2)])

    assert shape(roots) == [(1, []), (2, [(3, [])])]


def test_empty_input():
    assert build_hierarchy([]) == []


def test_every_member_appears_exactly_once():
    members = [staff(1), staff(2, 1), staff(3, 1), staff(4, 2), staff(5, 4), staff(6), staff(7, 6), staff(8, 42)]
    roots = build_hierarchy(members)

    seen = [node.id for node, _ in iter_hierarchy(roots)]
    assert sorted(seen) == [m.id for m in members]
    assert len(seen) == len(set(seen))


def test_idempotent():
    members = [staff(1), staff(2, 1), staff(3, 1), staff(4, 2)]

    assert shape(build_hierarchy(members)) == shape(build_hierarchy(members))


def test_accepts_generator():
    roots = build_hierarchy(staff(i, i - 1 if i > 1 else None) for i in range(1, 4))

    assert shape(roots) == [(1, [(2, [(3, [])])])]


def test_cycle_members_are_dropped_and_reported():
    members = [staff(1), staff(2, 3), staff(3, 2), staff(4, 3)]
    roots = build_hierarchy(members)

    assert shape(roots) == [(1, [])]
    assert find_unreachable(members, roots) == [2, 3, 4]


def test_self_report_is_unreachable():
    members = [staff(1, 1), staff(2)]
    roots = build_hierarchy(members)

    assert [root.id for root in roots] == [2]
    assert find_unreachable(members, roots) == [1]


def test_no_unreachable_members_in_a_forest():
    members = [staff(1), staff(2, 1), staff(3)]

    assert find_unreachable(members, build_hierarchy(members)) == []


def test_iter_hierarchy_is_preorder_with_levels():
    roots = build_hierarchy([staff(1), staff(2, 1), staff(3, 1), staff(4, 2), staff(5)])

    assert [(node.id, level) for node, level in iter_hierarchy(roots)] == [
        (1, 0), (2, 1), (4, 2), (3, 1), (5, 0),
    ]
