from familytree.models.person_model import TreeNode

def recorded_generation(node: TreeNode) -> int:
    return int(node.generation or 0)

def partner_adjacency(node_by_id: dict[str, TreeNode]) -> dict[str, list[str]]:
    """Undirected partner graph restricted to ids present in `node_by_id`."""
    adj: dict[str, list[str]] = {}
    for node in node_by_id.values():
        for partner in node.partners:
            if partner not in node_by_id:
                continue
            adj.setdefault(node.id, []).append(partner)
            adj.setdefault(partner, []).append(node.id)
    return adj

def marriage_components(node_by_id: dict[str, TreeNode]) -> list[list[str]]:
    """
    Connected components of the partner graph, found with an explicit stack.

    Every id belongs to exactly one component; unmarried people form
    singleton components. Components appear in first-seen node order.
    """
    adj = partner_adjacency(node_by_id)
    seen: set[str] = set()
    components: list[list[str]] = []
    for start in node_by_id:
        if start in seen:
            continue
        seen.add(start)
        stack = [start]
        comp: list[str] = []
        while stack:
            cur = stack.pop()
            comp.append(cur)
            for nb in adj.get(cur, []):
                if nb not in seen:
                    seen.add(nb)
                    stack.append(nb)
        components.append(comp)
    return components

def normalize_generations(
    node_by_id: dict[str, TreeNode],
    generations: dict[str, int] | None = None,
) -> dict[str, int]:
    """
    Resolve one generation per person so spouses always share a row.

    Each marriage component takes the minimum generation among its members.
    `generations` seeds the per-id values (defaults to the recorded
    generation, missing as 0); feeding a previous result back in returns
    the same mapping.
    """
    if generations is None:
        gen_by_id = {pid: recorded_generation(n) for pid, n in node_by_id.items()}
    else:
        gen_by_id = {
            pid: generations.get(pid, recorded_generation(n)) for pid, n in node_by_id.items()
        }

    for comp in marriage_components(node_by_id):
        low = min(gen_by_id[pid] for pid in comp)
        for pid in comp:
            gen_by_id[pid] = low
    return gen_by_id

def group_by_generation(gen_by_id: dict[str, int]) -> dict[int, list[str]]:
    """Generation -> member ids, generations ascending, members in node order."""
    groups: dict[int, list[str]] = {}
    for pid, gen in gen_by_id.items():
        groups.setdefault(gen, []).append(pid)
    return {gen: groups[gen] for gen in sorted(groups)}
