import logging
from dataclasses import dataclass, field
from typing import Collection

from familytree.layout.blocks import Block, assemble_blocks
from familytree.layout.generations import group_by_generation, normalize_generations
from familytree.models.person_model import TreeNode
from familytree.models.tree_model import PositionedNode

logger = logging.getLogger(__name__)

@dataclass
class LayoutOptions:
    level_gap: float = 220.0
    partner_gap: float = 150.0
    card_width: float = 140.0
    card_height: float = 150.0
    block_margin: float = 30.0
    guide_margin: float = 200.0

    def block_width(self, block: Block) -> float:
        if block.is_couple:
            return self.partner_gap + self.card_width
        return self.card_width

@dataclass
class Layout:
    nodes: list[PositionedNode] = field(default_factory=list)
    position_by_id: dict[str, PositionedNode] = field(default_factory=dict)
    generations: dict[str, int] = field(default_factory=dict)

def _name_key(node_by_id: dict[str, TreeNode], pid: str) -> str:
    node = node_by_id.get(pid)
    if node is None:
        return " "
    return f"{node.last_name or ''} {node.first_name or ''}".lower()

def order_blocks(blocks: list[Block], node_by_id: dict[str, TreeNode]) -> list[Block]:
    """Sibling groups by mean parent x, then blocks by (birth rank, "<last> <first>")."""
    groups: dict[str, list[Block]] = {}
    for block in blocks:
        groups.setdefault(block.parents_key, []).append(block)

    ordered_groups = sorted(
        groups.values(),
        key=lambda blks: sum(b.weight for b in blks) / len(blks),
    )
    ordered: list[Block] = []
    for blks in ordered_groups:
        ordered.extend(sorted(blks, key=lambda b: (b.rank, _name_key(node_by_id, b.ids[0]))))
    return ordered

def place_blocks(
    blocks: list[Block],
    generation: int,
    options: LayoutOptions,
    position_by_id: dict[str, PositionedNode],
) -> list[PositionedNode]:
    """
    Pack ordered blocks left to right and center the row around zero.

    Couples straddle their block center `partner_gap` apart, singletons sit
    on it. Writes into `position_by_id` and returns this row's nodes.
    """
    y = generation * options.level_gap
    row: list[PositionedNode] = []
    cursor = 0.0
    for block in blocks:
        width = options.block_width(block)
        center = cursor + width / 2
        if block.is_couple:
            left_id, right_id = block.ids
            row.append(PositionedNode(id=left_id, x=center - options.partner_gap / 2, y=y, depth=generation))
            row.append(PositionedNode(id=right_id, x=center + options.partner_gap / 2, y=y, depth=generation))
        else:
            row.append(PositionedNode(id=block.ids[0], x=center, y=y, depth=generation))
        cursor += width + options.block_margin

    # Each row is centered on x = 0 on its own
    if row:
        xs = [pn.x for pn in row]
        mid = (min(xs) + max(xs)) / 2
        for pn in row:
            pn.x -= mid
            position_by_id[pn.id] = pn
    return row

def layout_tree(
    node_by_id: dict[str, TreeNode],
    options: LayoutOptions | None = None,
    collapsed_couples: Collection[str] = (),
) -> Layout:
    """Position every node of a filtered graph, one generation row at a time."""
    options = options or LayoutOptions()
    gen_by_id = normalize_generations(node_by_id)
    layout = Layout(generations=gen_by_id)

    for generation, ids in group_by_generation(gen_by_id).items():
        if not ids:
            continue
        blocks = assemble_blocks(
            ids, generation, node_by_id, gen_by_id, layout.position_by_id, collapsed_couples
        )
        row = place_blocks(order_blocks(blocks, node_by_id), generation, options, layout.position_by_id)
        layout.nodes.extend(row)

    logger.debug(
        "Placed %d of %d people across %d generations",
        len(layout.position_by_id), len(node_by_id), len(set(gen_by_id.values())),
    )
    return layout
