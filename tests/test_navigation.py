import pytest

from familytree.layout.builder import build_tree
from familytree.layout.navigation import (
    MAX_SCALE,
    MIN_SCALE,
    center_on,
    display_name,
    family_of,
    fit_to_view,
    generation_collapse_sets,
    generation_roster,
    search_people,
    toggle_collapse,
)
from familytree.models.tree_model import Bounds, PositionedNode


@pytest.fixture
def family(make):
    return make.records(
        people=[
            make.person("gp", 0, first_name="Van", last_name="Tran", gender="M"),
            make.person("gm", 0, first_name="Thi", last_name="Le", gender="F"),
            make.person("dad", 1, first_name="Minh", last_name="Tran", gender="M", birth_date="1960"),
            make.person("mom", 1, first_name="Lan", last_name="Ho", gender="F"),
            make.person("aunt", 1, first_name="Mai", last_name="Tran", preferred_name="Maggie", birth_date="1955"),
            make.person("kid", 2, first_name="An", last_name="Tran"),
            make.person("cousin", 2, first_name="Bao", last_name="Tran"),
        ],
        marriages=[make.marriage("gp", "gm"), make.marriage("dad", "mom")],
        parent_child=[
            make.link("gp", "dad"),
            make.link("gm", "dad"),
            make.link("gp", "aunt"),
            make.link("gm", "aunt"),
            make.link("dad", "kid"),
            make.link("mom", "kid"),
            make.link("aunt", "cousin"),
        ],
    )


@pytest.fixture
def graph(family):
    return build_tree(family.people, family.marriages, family.parent_child)


def test_display_name_prefers_preferred_name(graph):
    assert display_name(graph["aunt"]) == "Maggie Tran"
    assert display_name(graph["mom"]) == "Lan Ho"


def test_search_is_case_insensitive_substring(graph):
    assert {n.id for n in search_people(graph, "  TRAN ")} == {"gp", "dad", "aunt", "kid", "cousin"}
    assert [n.id for n in search_people(graph, "maggie")] == ["aunt"]
    assert search_people(graph, "") == []


def test_roster_orders_siblings(family, graph):
    roster = generation_roster(family.people, graph)

    assert list(roster) == [0, 1, 2]
    # children of gp+gm by birth year, then the in-law without parents
    assert roster[1] == ["aunt", "dad", "mom"]


def test_collapse_all_sets(family, graph):
    couples, singles = generation_collapse_sets(graph, family.marriages, generation=1)

    assert couples == {"dad|mom"}
    assert singles == {"aunt"}


def test_toggle_couple_collapses_then_expands(graph):
    couples, singles = toggle_collapse("dad", graph, set(), set())
    assert couples == {"dad|mom"}
    assert singles == set()

    couples, singles = toggle_collapse("mom", graph, couples, singles)
    assert couples == set()


def test_toggle_single(graph):
    _, singles = toggle_collapse("aunt", graph, [], [])
    assert singles == {"aunt"}

    _, singles = toggle_collapse("aunt", graph, [], singles)
    assert singles == set()


def test_family_of(graph):
    fam = family_of("dad", graph)

    assert [n.id for n in fam["parents"]] == ["gp", "gm"]
    assert [n.id for n in fam["partners"]] == ["mom"]
    assert [n.id for n in fam["children"]] == ["kid"]


def test_fit_to_view_centers_bounds():
    vp = fit_to_view(Bounds(minX=-100, maxX=100, minY=-50, maxY=50), 800, 400)

    assert vp.scale == pytest.approx(MAX_SCALE)
    assert vp.x == pytest.approx(400)
    assert vp.y == pytest.approx(200)


def test_fit_to_view_clamps_large_trees():
    vp = fit_to_view(Bounds(minX=0, maxX=100000, minY=0, maxY=100), 800, 600, sidebar_width=320)

    assert vp.scale == MIN_SCALE


def test_center_on():
    vp = center_on(PositionedNode(id="a", x=100, y=220, depth=1), 1000, 800, 1.0)

    assert (vp.scale, vp.x, vp.y) == (1.0, 400, 180)
