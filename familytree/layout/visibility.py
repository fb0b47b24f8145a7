from typing import Iterable

from familytree.models.person_model import RecordSet, TreeNode

def _hide_subtree(start: str, node_by_id: dict[str, TreeNode], hidden: set[str]) -> None:
    # Explicit stack; `hidden` doubles as the visited set so cycles terminate
    stack = [start]
    while stack:
        cur = stack.pop()
        if cur in hidden:
            continue
        hidden.add(cur)
        node = node_by_id.get(cur)
        if node is None:
            continue
        stack.extend(node.children)
        stack.extend(node.partners)

def _hide_children_of(anchors: Iterable[str], node_by_id: dict[str, TreeNode], hidden: set[str]) -> None:
    children: list[str] = []
    for anchor in anchors:
        node = node_by_id.get(anchor)
        if node is None:
            continue
        for child in node.children:
            if child not in children:
                children.append(child)
    for child in children:
        _hide_subtree(child, node_by_id, hidden)
        # Spouses who married into the family go with the child
        for spouse in node_by_id[child].partners if child in node_by_id else []:
            _hide_subtree(spouse, node_by_id, hidden)

def hidden_set(
    collapsed_couples: Iterable[str],
    collapsed_singles: Iterable[str],
    node_by_id: dict[str, TreeNode],
) -> set[str]:
    """
    Ids hidden by the current collapse state.

    For a collapsed couple "a|b" the children of both partners are hidden
    together with their descendants and everyone married to them; a
    collapsed single hides the closure of its own children. Computed on the
    unfiltered graph.
    """
    hidden: set[str] = set()
    for key in collapsed_couples:
        a, _, b = key.partition("|")
        _hide_children_of([a, b], node_by_id, hidden)
    for single_id in collapsed_singles:
        _hide_children_of([single_id], node_by_id, hidden)
    return hidden

def filter_records(records: RecordSet, hidden: set[str]) -> RecordSet:
    """Drop hidden people and every relationship record touching one of them."""
    people = [p for p in records.people if p.id not in hidden]
    kept = {p.id for p in people}
    return RecordSet(
        people=people,
        marriages=[m for m in records.marriages if m.partner_a in kept and m.partner_b in kept],
        parent_child=[
            pc for pc in records.parent_child if pc.parent_id in kept and pc.child_id in kept
        ],
    )
