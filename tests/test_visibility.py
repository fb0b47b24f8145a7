from familytree.layout.builder import build_tree
from familytree.layout.visibility import filter_records, hidden_set


def _graph(records):
    return build_tree(records.people, records.marriages, records.parent_child)


def test_collapsed_couple_hides_descendants_and_their_spouses(collapse_family):
    hidden = hidden_set({"A|B"}, set(), _graph(collapse_family))

    assert hidden == {"C", "D", "E"}


def test_collapsed_single_hides_own_children_only(make):
    records = make.records(
        people=[make.person(i) for i in ["mom", "kid", "kid_spouse", "grandkid", "other"]],
        marriages=[make.marriage("kid", "kid_spouse")],
        parent_child=[make.link("mom", "kid"), make.link("kid", "grandkid")],
    )

    hidden = hidden_set(set(), {"mom"}, _graph(records))

    assert hidden == {"kid", "kid_spouse", "grandkid"}


def test_nothing_collapsed_hides_nothing(collapse_family):
    assert hidden_set(set(), set(), _graph(collapse_family)) == set()


def test_unknown_keys_are_ignored(collapse_family):
    assert hidden_set({"X|Y", "malformed"}, {"nobody"}, _graph(collapse_family)) == set()


def test_cyclic_parentage_terminates(make):
    records = make.records(
        people=[make.person(i) for i in "abc"],
        parent_child=[make.link("a", "b"), make.link("b", "c"), make.link("c", "a")],
    )

    hidden = hidden_set(set(), {"a"}, _graph(records))

    assert hidden == {"a", "b", "c"}


def test_deep_chain_uses_no_recursion(make):
    n = 5000
    records = make.records(
        people=[make.person(f"p{i}") for i in range(n)],
        parent_child=[make.link(f"p{i}", f"p{i + 1}") for i in range(n - 1)],
    )

    hidden = hidden_set(set(), {"p0"}, _graph(records))

    assert len(hidden) == n - 1


def test_filter_records_drops_touching_rows(collapse_family):
    kept = filter_records(collapse_family, {"C", "D", "E"})

    assert [p.id for p in kept.people] == ["A", "B"]
    assert [(m.partner_a, m.partner_b) for m in kept.marriages] == [("A", "B")]
    assert kept.parent_child == []
    assert len(collapse_family.people) == 5
