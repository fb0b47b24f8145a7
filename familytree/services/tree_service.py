from familytree.core.config import settings
from familytree.db.store import RecordStore
from familytree.layout.blocks import normalize_couple_key
from familytree.layout.builder import build_tree
from familytree.layout.placement import LayoutOptions
from familytree.layout.view import TreeView, compute_tree_view

def layout_options() -> LayoutOptions:
    return LayoutOptions(
        level_gap=settings.LAYOUT_LEVEL_GAP,
        partner_gap=settings.LAYOUT_PARTNER_GAP,
        card_width=settings.LAYOUT_CARD_WIDTH,
        card_height=settings.LAYOUT_CARD_HEIGHT,
        block_margin=settings.LAYOUT_BLOCK_MARGIN,
        guide_margin=settings.LAYOUT_GUIDE_MARGIN,
    )

def collapse_state(collapsed_couples=(), collapsed_singles=()) -> dict:
    return {
        "collapsedCouples": sorted({normalize_couple_key(k) for k in collapsed_couples}),
        "collapsedSingles": sorted(set(collapsed_singles)),
    }

async def get_tree_view(store: RecordStore, collapsed_couples=(), collapsed_singles=()) -> TreeView:
    records = await store.load_records()
    return compute_tree_view(
        records,
        {normalize_couple_key(k) for k in collapsed_couples},
        collapsed_singles,
        layout_options(),
        anchor_collapsed_couples=settings.LAYOUT_ANCHOR_COLLAPSED_COUPLES,
    )

async def get_full_graph(store: RecordStore):
    """Unfiltered node graph plus the records it was built from."""
    records = await store.load_records()
    return build_tree(records.people, records.marriages, records.parent_child), records

def tree_to_dict(view: TreeView) -> dict:
    return {
        "nodes": view.nodes,
        "edges": view.parent_edges,
        "marriageEdges": view.marriage_edges,
        "guides": view.guides,
        "bounds": view.bounds,
        "nodeById": view.node_by_id,
        "hidden": sorted(view.hidden),
    }
