from familytree.layout.builder import build_tree


def test_every_person_gets_one_empty_node(make):
    node_by_id = build_tree([make.person("a"), make.person("b")], [], [])

    assert set(node_by_id) == {"a", "b"}
    assert node_by_id["a"].children == []
    assert node_by_id["a"].partners == []
    assert node_by_id["a"].parents is None


def test_partner_and_parent_child_symmetry(make):
    people = [make.person(i) for i in "abcd"]
    marriages = [make.marriage("a", "b"), make.marriage("c", "d")]
    links = [make.link("a", "c"), make.link("b", "c"), make.link("a", "d")]

    node_by_id = build_tree(people, marriages, links)

    for m in marriages:
        assert m.partner_b in node_by_id[m.partner_a].partners
        assert m.partner_a in node_by_id[m.partner_b].partners
    for pc in links:
        assert pc.child_id in node_by_id[pc.parent_id].children
        assert pc.parent_id in node_by_id[pc.child_id].parents
    assert node_by_id["c"].parents == ["a", "b"]
    assert node_by_id["a"].children == ["c", "d"]


def test_dangling_references_are_ignored(make):
    node_by_id = build_tree(
        [make.person("a")],
        [make.marriage("a", "ghost"), make.marriage("ghost", "phantom")],
        [make.link("ghost", "a"), make.link("a", "nobody")],
    )

    assert set(node_by_id) == {"a"}
    assert node_by_id["a"].partners == []
    assert node_by_id["a"].children == []
    assert node_by_id["a"].parents is None


def test_duplicate_marriages_are_kept(make):
    node_by_id = build_tree(
        [make.person("a"), make.person("b")],
        [make.marriage("a", "b", "m1"), make.marriage("b", "a", "m2")],
        [],
    )

    assert node_by_id["a"].partners == ["b", "b"]
    assert node_by_id["b"].partners == ["a", "a"]


def test_self_marriage_is_tolerated(make):
    node_by_id = build_tree([make.person("a")], [make.marriage("a", "a")], [])

    assert node_by_id["a"].partners == ["a", "a"]


def test_inputs_are_not_mutated(make):
    people = [make.person("a", first_name="Ann")]
    build_tree(people, [], [make.link("a", "a")])

    assert people[0].model_dump()["first_name"] == "Ann"
    assert not hasattr(people[0], "children")
