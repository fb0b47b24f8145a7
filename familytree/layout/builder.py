from typing import Iterable

from familytree.models.person_model import Marriage, ParentChild, Person, TreeNode

def build_tree(
    people: Iterable[Person],
    marriages: Iterable[Marriage],
    parent_child: Iterable[ParentChild],
) -> dict[str, TreeNode]:
    node_by_id: dict[str, TreeNode] = {}
    for person in people:
        node_by_id[person.id] = TreeNode(**person.model_dump(), children=[], partners=[])

    for m in marriages:
        a = node_by_id.get(m.partner_a)
        b = node_by_id.get(m.partner_b)
        if a is None or b is None:
            continue
        a.partners.append(m.partner_b)
        b.partners.append(m.partner_a)

    for pc in parent_child:
        parent = node_by_id.get(pc.parent_id)
        child = node_by_id.get(pc.child_id)
        if parent is None or child is None:
            continue
        parent.children.append(pc.child_id)
        if child.parents is None:
            child.parents = []
        child.parents.append(pc.parent_id)

    return node_by_id
