from typing import Collection, Iterable

from familytree.layout.blocks import couple_key
from familytree.layout.placement import LayoutOptions
from familytree.models.person_model import Marriage, ParentChild, TreeNode
from familytree.models.tree_model import GenerationGuide, MarriageEdge, ParentEdge, PositionedNode

def is_child_of_collapsed_couple(
    child_id: str, node_by_id: dict[str, TreeNode], collapsed_couples: Collection[str]
) -> bool:
    node = node_by_id.get(child_id)
    parents = (node.parents if node else None) or []
    if len(parents) < 2:
        return False
    return couple_key(parents[0], parents[1]) in collapsed_couples

def dedupe_nodes(nodes: Iterable[PositionedNode]) -> list[PositionedNode]:
    """One node per id; a later position overrides an earlier one."""
    by_id: dict[str, PositionedNode] = {}
    for node in nodes:
        by_id[node.id] = node
    return list(by_id.values())

def parent_edges(
    node_by_id: dict[str, TreeNode],
    marriages: Iterable[Marriage],
    parent_child: Iterable[ParentChild],
    position_by_id: dict[str, PositionedNode],
    collapsed_couples: Collection[str] = (),
    options: LayoutOptions | None = None,
) -> list[ParentEdge]:
    """
    Parent -> child connectors.

    A child whose first two recorded parents are married to each other gets
    a single edge from the couple's midpoint. Every other parent link gets
    its own edge. Links into a collapsed couple's children, and links with
    an unpositioned end, are not emitted.
    """
    options = options or LayoutOptions()
    half_h = options.card_height / 2
    parent_child = list(parent_child)

    married = {couple_key(m.partner_a, m.partner_b) for m in marriages}
    parents_by_child: dict[str, list[str]] = {}
    for pc in parent_child:
        plist = parents_by_child.setdefault(pc.child_id, [])
        if pc.parent_id not in plist:
            plist.append(pc.parent_id)

    edges: list[ParentEdge] = []
    handled: set[str] = set()
    for child_id, plist in parents_by_child.items():
        if is_child_of_collapsed_couple(child_id, node_by_id, collapsed_couples):
            handled.add(child_id)
            continue
        if len(plist) < 2:
            continue
        key = couple_key(plist[0], plist[1])
        if key not in married:
            continue
        a, _, b = key.partition("|")
        pa, pb, c = position_by_id.get(a), position_by_id.get(b), position_by_id.get(child_id)
        if pa is None or pb is None or c is None:
            continue
        edges.append(
            ParentEdge(
                key=f"{a}-{b}-{child_id}",
                x1=(pa.x + pb.x) / 2,
                y1=max(pa.y, pb.y) + half_h,
                x2=c.x,
                y2=c.y - half_h,
            )
        )
        handled.add(child_id)

    for pc in parent_child:
        if pc.child_id in handled:
            continue
        p = position_by_id.get(pc.parent_id)
        c = position_by_id.get(pc.child_id)
        if p is None or c is None:
            continue
        edges.append(ParentEdge(key=pc.id, x1=p.x, y1=p.y + half_h, x2=c.x, y2=c.y - half_h))
    return edges

def marriage_edges(
    marriages: Iterable[Marriage],
    position_by_id: dict[str, PositionedNode],
    options: LayoutOptions | None = None,
) -> list[MarriageEdge]:
    """Dashed partner connectors between the facing card edges of each positioned pair."""
    options = options or LayoutOptions()
    half_w = options.card_width / 2
    edges: list[MarriageEdge] = []
    for m in marriages:
        a = position_by_id.get(m.partner_a)
        b = position_by_id.get(m.partner_b)
        if a is None or b is None:
            continue
        left, right = (a, b) if a.x <= b.x else (b, a)
        edges.append(MarriageEdge(key=m.id, x1=left.x + half_w, x2=right.x - half_w, y=left.y))
    return edges

def generation_guides(
    nodes: list[PositionedNode], options: LayoutOptions | None = None
) -> list[GenerationGuide]:
    options = options or LayoutOptions()
    if not nodes:
        return []
    left = min(n.x for n in nodes) - options.guide_margin
    right = max(n.x for n in nodes) + options.guide_margin
    return [
        GenerationGuide(depth=d, y=d * options.level_gap, x1=left, x2=right, label=f"Generation {d}")
        for d in sorted({n.depth for n in nodes})
    ]
