import re
from dataclasses import dataclass
from typing import Collection

from familytree.models.person_model import TreeNode
from familytree.models.tree_model import PositionedNode

# Unknown birth dates sort after any parseable year
UNKNOWN_BIRTH_RANK = 2**53 - 1

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

@dataclass
class Block:
    ids: list[str]
    rank: int
    parents_key: str
    weight: float

    @property
    def is_couple(self) -> bool:
        return len(self.ids) == 2

def couple_key(a: str, b: str) -> str:
    """Order-independent key for a pair of partners."""
    return f"{a}|{b}" if a < b else f"{b}|{a}"

def normalize_couple_key(key: str) -> str:
    """Sorted form of a client-supplied "a|b" key; keys without a separator pass through."""
    a, sep, b = key.partition("|")
    return couple_key(a, b) if sep else key

def birth_rank(node: TreeNode | None) -> int:
    """Leading integer of the birth date ("1950-03-02" -> 1950), else UNKNOWN_BIRTH_RANK."""
    if node is None or node.birth_date is None:
        return UNKNOWN_BIRTH_RANK
    match = _LEADING_INT.match(str(node.birth_date))
    if not match:
        return UNKNOWN_BIRTH_RANK
    return int(match.group(1))

def parents_key(ids: list[str], node_by_id: dict[str, TreeNode]) -> str:
    parent_ids: set[str] = set()
    for pid in ids:
        parent_ids.update(node_by_id[pid].parents or [])
    return "|".join(sorted(parent_ids)) or f"single:{ids[0]}"

def parent_average_x(
    ids: list[str],
    node_by_id: dict[str, TreeNode],
    position_by_id: dict[str, PositionedNode],
) -> float:
    """Mean x of the members' already-positioned parents, 0 when none are placed."""
    parent_ids: list[str] = []
    for pid in ids:
        for parent in node_by_id[pid].parents or []:
            if parent not in parent_ids:
                parent_ids.append(parent)
    xs = [position_by_id[p].x for p in parent_ids if p in position_by_id]
    if not xs:
        return 0.0
    return sum(xs) / len(xs)

def _couple_anchor(a: TreeNode, b: TreeNode) -> tuple[str, str]:
    if a.gender == "M":
        return a.id, b.id
    if b.gender == "M":
        return b.id, a.id
    return a.id, b.id

def assemble_blocks(
    ids: list[str],
    generation: int,
    node_by_id: dict[str, TreeNode],
    gen_by_id: dict[str, int],
    position_by_id: dict[str, PositionedNode],
    collapsed_couples: Collection[str] = (),
) -> list[Block]:
    """
    Partition one generation into blocks.

    A member pairs with its first partner that sits in the same generation
    and is not yet placed; the male partner (else the first member seen)
    becomes the left anchor. A couple whose key is in `collapsed_couples`
    shrinks to a singleton block of the anchor, the partner is left out of
    this pass. Rank, parents key and weight cover both partners either way.
    """
    seen: set[str] = set()
    blocks: list[Block] = []
    for pid in ids:
        if pid in seen:
            continue
        seen.add(pid)
        node = node_by_id[pid]
        partner = next(
            (
                p
                for p in node.partners
                if p in node_by_id and p not in seen and gen_by_id.get(p, 0) == generation
            ),
            None,
        )
        if partner is None:
            blocks.append(
                Block(
                    ids=[pid],
                    rank=birth_rank(node),
                    parents_key=parents_key([pid], node_by_id),
                    weight=parent_average_x([pid], node_by_id, position_by_id),
                )
            )
            continue

        seen.add(partner)
        male_id, female_id = _couple_anchor(node, node_by_id[partner])
        members = [male_id, female_id]
        block = Block(
            ids=members,
            rank=min(birth_rank(node_by_id[male_id]), birth_rank(node_by_id[female_id])),
            parents_key=parents_key(members, node_by_id),
            weight=parent_average_x(members, node_by_id, position_by_id),
        )
        if couple_key(male_id, female_id) in collapsed_couples:
            block.ids = [male_id]
        blocks.append(block)
    return blocks
