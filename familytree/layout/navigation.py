from dataclasses import dataclass
from typing import Iterable

from familytree.layout.blocks import birth_rank, couple_key
from familytree.models.person_model import Marriage, Person, TreeNode
from familytree.models.tree_model import Bounds, PositionedNode

MIN_SCALE = 0.3
MAX_SCALE = 2.0

@dataclass
class Viewport:
    scale: float
    x: float
    y: float

def display_name(node: Person) -> str:
    return f"{node.preferred_name or node.first_name or ''} {node.last_name or ''}".strip()

def search_people(node_by_id: dict[str, TreeNode], query: str) -> list[TreeNode]:
    q = (query or "").strip().lower()
    if not q:
        return []
    return [n for n in node_by_id.values() if q in display_name(n).lower()]

def generation_roster(
    people: Iterable[Person], node_by_id: dict[str, TreeNode]
) -> dict[int, list[str]]:
    """
    Sidebar listing: recorded generation -> ids.

    Within a generation, people with recorded parents come first, siblings
    cluster by their sorted parents key and then follow birth order.
    """
    groups: dict[int, list[Person]] = {}
    for person in people:
        groups.setdefault(int(person.generation or 0), []).append(person)

    def sort_key(person: Person):
        node = node_by_id.get(person.id)
        parents = (node.parents if node else None) or []
        return (0 if parents else 1, "|".join(sorted(parents)), birth_rank(node))

    return {gen: [p.id for p in sorted(groups[gen], key=sort_key)] for gen in sorted(groups)}

def generation_collapse_sets(
    node_by_id: dict[str, TreeNode], marriages: Iterable[Marriage], generation: int = 1
) -> tuple[set[str], set[str]]:
    """Couple keys and single ids that "collapse all" folds for one recorded generation."""
    members = {n.id for n in node_by_id.values() if int(n.generation or 0) == generation}
    couples = {
        couple_key(m.partner_a, m.partner_b)
        for m in marriages
        if m.partner_a in members and m.partner_b in members
    }
    singles = {
        pid for pid in members if not node_by_id[pid].partners and node_by_id[pid].children
    }
    return couples, singles

def toggle_collapse(
    person_id: str,
    node_by_id: dict[str, TreeNode],
    collapsed_couples: Iterable[str],
    collapsed_singles: Iterable[str],
) -> tuple[set[str], set[str]]:
    """
    Flip the collapse state of everything anchored at `person_id`.

    Uses the unfiltered graph. A person without partners toggles as a
    single; otherwise all of their pairings expand when every one is
    collapsed, and collapse otherwise.
    """
    couples = set(collapsed_couples)
    singles = set(collapsed_singles)
    node = node_by_id.get(person_id)
    partners = node.partners if node else []
    if not partners:
        singles.symmetric_difference_update({person_id})
        return couples, singles

    keys = {couple_key(person_id, mate) for mate in partners}
    if keys <= couples:
        couples -= keys
    else:
        couples |= keys
    return couples, singles

def family_of(person_id: str, node_by_id: dict[str, TreeNode]) -> dict[str, list[TreeNode]]:
    node = node_by_id[person_id]

    def pick(ids: list[str]) -> list[TreeNode]:
        return [node_by_id[i] for i in ids if i in node_by_id]

    return {
        "parents": pick(node.parents or []),
        "partners": pick(node.partners),
        "children": pick(node.children),
    }

def _clamp_scale(scale: float) -> float:
    return max(MIN_SCALE, min(MAX_SCALE, scale))

def fit_to_view(bounds: Bounds, width: float, height: float, sidebar_width: float = 0.0) -> Viewport:
    """Scale and translation that fit `bounds` into the visible canvas with 10% padding."""
    vw = width - sidebar_width
    vh = height
    span_x = max(bounds.maxX - bounds.minX, 1.0)
    span_y = max(bounds.maxY - bounds.minY, 1.0)
    scale = _clamp_scale(min(vw / span_x, vh / span_y) * 0.9)
    center_x = (bounds.minX + bounds.maxX) / 2
    center_y = (bounds.minY + bounds.maxY) / 2
    return Viewport(
        scale=scale,
        x=vw / 2 + sidebar_width / 2 - center_x * scale,
        y=vh / 2 - center_y * scale,
    )

def center_on(position: PositionedNode, width: float, height: float, scale: float) -> Viewport:
    scale = _clamp_scale(scale)
    return Viewport(scale=scale, x=width / 2 - position.x * scale, y=height / 2 - position.y * scale)
