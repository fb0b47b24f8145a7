from fastapi import APIRouter, Depends
from pydantic import BaseModel
from familytree.db.store import RecordStore
from familytree.models.common import APIMessage
from familytree.models.person_model import Marriage, ParentChild
from familytree.services.relationship_service import add_parent_of, remove_parent_of, add_marriage, remove_marriage
from familytree.utils.deps import get_current_session, get_store

router = APIRouter(prefix="/api/v1/relationships", tags=["Relationships"], dependencies=[Depends(get_current_session)])

class ParentOfIn(BaseModel):
    parentId: str
    childId: str

class MarriageIn(BaseModel):
    partnerA: str
    partnerB: str

@router.post("/parent-of", response_model=ParentChild)
async def create_parent_of(body: ParentOfIn, store: RecordStore = Depends(get_store)):
    return await add_parent_of(store, body.parentId, body.childId)

@router.delete("/parent-of", response_model=APIMessage)
async def delete_parent_of(body: ParentOfIn, store: RecordStore = Depends(get_store)):
    await remove_parent_of(store, body.parentId, body.childId)
    return {"message": "Relationship removed"}

@router.post("/marriages", response_model=Marriage)
async def create_marriage(body: MarriageIn, store: RecordStore = Depends(get_store)):
    return await add_marriage(store, body.partnerA, body.partnerB)

@router.delete("/marriages/{marriageId}", response_model=APIMessage)
async def delete_marriage(marriageId: str, store: RecordStore = Depends(get_store)):
    await remove_marriage(store, marriageId)
    return {"message": "Marriage removed"}
