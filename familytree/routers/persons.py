from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional
from familytree.db.store import RecordStore
from familytree.layout.navigation import display_name, family_of
from familytree.models.common import APIMessage
from familytree.models.person_model import FamilyOut, Person, PersonCreate, PersonUpdate
from familytree.services.person_service import create_person, update_person, delete_person
from familytree.services.tree_service import get_full_graph
from familytree.utils.deps import get_current_session, get_store

router = APIRouter(prefix="/api/v1/persons", tags=["Persons"], dependencies=[Depends(get_current_session)])

@router.post("", response_model=Person)
async def create_person_route(body: PersonCreate, store: RecordStore = Depends(get_store)):
    return await create_person(store, body)

@router.get("", response_model=list[Person])
async def list_persons(q: Optional[str] = Query(None), gender: Optional[str] = None, generation: Optional[int] = None,
                       store: RecordStore = Depends(get_store)):
    records = await store.load_records()
    people = records.people
    if q:
        people = [p for p in people if q.lower() in display_name(p).lower()]
    if gender:
        people = [p for p in people if p.gender == gender]
    if generation is not None:
        people = [p for p in people if (p.generation or 0) == generation]
    return sorted(people, key=lambda p: ((p.generation or 0), display_name(p).lower()))

@router.get("/{personId}/family", response_model=FamilyOut)
async def family_route(personId: str, store: RecordStore = Depends(get_store)):
    node_by_id, _ = await get_full_graph(store)
    if personId not in node_by_id:
        raise HTTPException(status_code=404, detail="Person not found")
    return {"person": node_by_id[personId], **family_of(personId, node_by_id)}

@router.patch("/{personId}", response_model=Person)
async def update_person_route(personId: str, body: PersonUpdate, store: RecordStore = Depends(get_store)):
    return await update_person(store, personId, body.model_dump(exclude_unset=True))

@router.delete("/{personId}", response_model=APIMessage)
async def delete_person_route(personId: str, store: RecordStore = Depends(get_store)):
    await delete_person(store, personId)
    return {"message": "Person deleted"}
