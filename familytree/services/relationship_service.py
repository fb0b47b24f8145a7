from fastapi import HTTPException
from familytree.db.store import RecordStore
from familytree.models.person_model import Marriage, ParentChild

async def add_parent_of(store: RecordStore, parent_id: str, child_id: str) -> ParentChild:
    if parent_id == child_id:
        raise HTTPException(status_code=400, detail="A person cannot be their own parent")
    link = await store.add_parent_of(parent_id, child_id)
    if link is None:
        raise HTTPException(status_code=404, detail="Parent or child not found")
    return link

async def remove_parent_of(store: RecordStore, parent_id: str, child_id: str):
    if not await store.remove_parent_of(parent_id, child_id):
        raise HTTPException(status_code=404, detail="Relationship not found")
    return True

async def add_marriage(store: RecordStore, partner_a: str, partner_b: str) -> Marriage:
    if partner_a == partner_b:
        raise HTTPException(status_code=400, detail="A person cannot marry themselves")
    marriage = await store.add_marriage(partner_a, partner_b)
    if marriage is None:
        raise HTTPException(status_code=404, detail="Partner not found")
    return marriage

async def remove_marriage(store: RecordStore, marriage_id: str):
    if not await store.remove_marriage(marriage_id):
        raise HTTPException(status_code=404, detail="Marriage not found")
    return True
