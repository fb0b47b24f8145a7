from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional
from familytree.db.store import RecordStore
from familytree.layout.navigation import (
    center_on,
    fit_to_view,
    generation_collapse_sets,
    generation_roster,
    search_people,
    toggle_collapse,
)
from familytree.models.person_model import TreeNode
from familytree.models.tree_model import CollapseState, RosterGeneration, ToggleCollapseIn, TreeOut
from familytree.services.tree_service import collapse_state, get_full_graph, get_tree_view, tree_to_dict
from familytree.utils.deps import get_current_session, get_store

router = APIRouter(prefix="/api/v1/tree", tags=["Tree"], dependencies=[Depends(get_current_session)])

@router.get("", response_model=TreeOut)
async def get_tree_route(
    collapsedCouple: List[str] = Query([]),
    collapsedSingle: List[str] = Query([]),
    store: RecordStore = Depends(get_store),
):
    view = await get_tree_view(store, collapsedCouple, collapsedSingle)
    return tree_to_dict(view)

@router.get("/search", response_model=list[TreeNode])
async def search_route(
    q: str = "",
    collapsedCouple: List[str] = Query([]),
    collapsedSingle: List[str] = Query([]),
    store: RecordStore = Depends(get_store),
):
    view = await get_tree_view(store, collapsedCouple, collapsedSingle)
    return search_people(view.node_by_id, q)

@router.get("/roster", response_model=list[RosterGeneration])
async def roster_route(
    collapsedCouple: List[str] = Query([]),
    collapsedSingle: List[str] = Query([]),
    store: RecordStore = Depends(get_store),
):
    view = await get_tree_view(store, collapsedCouple, collapsedSingle)
    roster = generation_roster(view.node_by_id.values(), view.node_by_id)
    return [{"generation": g, "people": [view.node_by_id[i] for i in ids]} for g, ids in roster.items()]

@router.get("/collapse-sets", response_model=CollapseState)
async def collapse_sets_route(generation: int = 1, store: RecordStore = Depends(get_store)):
    node_by_id, records = await get_full_graph(store)
    couples, singles = generation_collapse_sets(node_by_id, records.marriages, generation)
    return collapse_state(couples, singles)

@router.post("/toggle-collapse", response_model=CollapseState)
async def toggle_collapse_route(body: ToggleCollapseIn, store: RecordStore = Depends(get_store)):
    node_by_id, _ = await get_full_graph(store)
    if body.personId not in node_by_id:
        raise HTTPException(status_code=404, detail="Person not found")
    current = collapse_state(body.collapsedCouples, body.collapsedSingles)
    couples, singles = toggle_collapse(
        body.personId, node_by_id, current["collapsedCouples"], current["collapsedSingles"]
    )
    return collapse_state(couples, singles)

@router.get("/viewport")
async def viewport_route(
    width: float = Query(gt=0),
    height: float = Query(gt=0),
    sidebarWidth: float = Query(default=0, ge=0),
    focusId: Optional[str] = None,
    scale: float = 1.2,
    collapsedCouple: List[str] = Query([]),
    collapsedSingle: List[str] = Query([]),
    store: RecordStore = Depends(get_store),
):
    """Initial fit-to-view transform, or a transform centered on one person."""
    view = await get_tree_view(store, collapsedCouple, collapsedSingle)
    if focusId is not None:
        pos = view.position_by_id.get(focusId)
        if pos is None:
            raise HTTPException(status_code=404, detail="Person is not on screen")
        vp = center_on(pos, width, height, scale)
    elif view.bounds is None:
        raise HTTPException(status_code=404, detail="Tree is empty")
    else:
        vp = fit_to_view(view.bounds, width, height, sidebarWidth)
    return {"scale": vp.scale, "x": vp.x, "y": vp.y}
