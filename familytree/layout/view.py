import logging
from dataclasses import dataclass, field
from typing import Collection

from familytree.layout.builder import build_tree
from familytree.layout.edges import (
    dedupe_nodes,
    generation_guides,
    is_child_of_collapsed_couple,
    marriage_edges,
    parent_edges,
)
from familytree.layout.placement import LayoutOptions, layout_tree
from familytree.layout.visibility import filter_records, hidden_set
from familytree.models.person_model import RecordSet, TreeNode
from familytree.models.tree_model import (
    Bounds,
    GenerationGuide,
    MarriageEdge,
    ParentEdge,
    PositionedNode,
)

logger = logging.getLogger(__name__)

@dataclass
class TreeView:
    node_by_id: dict[str, TreeNode]
    nodes: list[PositionedNode]
    position_by_id: dict[str, PositionedNode]
    parent_edges: list[ParentEdge] = field(default_factory=list)
    marriage_edges: list[MarriageEdge] = field(default_factory=list)
    guides: list[GenerationGuide] = field(default_factory=list)
    hidden: set[str] = field(default_factory=set)
    bounds: Bounds | None = None

def layout_bounds(nodes: list[PositionedNode], options: LayoutOptions) -> Bounds | None:
    """Extent of all cards, not just their centers."""
    if not nodes:
        return None
    return Bounds(
        minX=min(n.x for n in nodes) - options.card_width / 2,
        maxX=max(n.x for n in nodes) + options.card_width / 2,
        minY=min(n.y for n in nodes) - options.card_height / 2,
        maxY=max(n.y for n in nodes) + options.card_height / 2,
    )

def compute_tree_view(
    records: RecordSet,
    collapsed_couples: Collection[str] = (),
    collapsed_singles: Collection[str] = (),
    options: LayoutOptions | None = None,
    anchor_collapsed_couples: bool = False,
) -> TreeView:
    """
    Run one complete pass over an immutable record snapshot.

    The unfiltered graph is only used to work out which ids the collapse
    state hides. The surviving records then go through a second, independent
    build before layout and edge emission. A collapsed couple keeps both
    partners on screen unless `anchor_collapsed_couples` draws it as its
    anchor alone.
    """
    options = options or LayoutOptions()
    collapsed_couples = set(collapsed_couples)
    collapsed_singles = set(collapsed_singles)

    full = build_tree(records.people, records.marriages, records.parent_child)
    hidden = hidden_set(collapsed_couples, collapsed_singles, full)
    visible = filter_records(records, hidden)

    node_by_id = build_tree(visible.people, visible.marriages, visible.parent_child)
    layout = layout_tree(
        node_by_id, options, collapsed_couples if anchor_collapsed_couples else ()
    )

    nodes = [
        n
        for n in dedupe_nodes(layout.nodes)
        if not is_child_of_collapsed_couple(n.id, node_by_id, collapsed_couples)
    ]
    view = TreeView(
        node_by_id=node_by_id,
        nodes=nodes,
        position_by_id=layout.position_by_id,
        parent_edges=parent_edges(
            node_by_id,
            visible.marriages,
            visible.parent_child,
            layout.position_by_id,
            collapsed_couples,
            options,
        ),
        marriage_edges=marriage_edges(visible.marriages, layout.position_by_id, options),
        guides=generation_guides(nodes, options),
        hidden=hidden,
        bounds=layout_bounds(nodes, options),
    )
    logger.debug(
        "Tree view: %d people, %d hidden, %d positioned, %d parent edges",
        len(records.people), len(hidden), len(nodes), len(view.parent_edges),
    )
    return view
