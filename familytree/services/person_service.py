import uuid
from fastapi import HTTPException
from familytree.db.store import RecordStore
from familytree.models.person_model import Person, PersonCreate

RELATION_FIELDS = {"fatherId", "motherId", "partnerId"}

async def create_person(store: RecordStore, body: PersonCreate) -> Person:
    records = await store.load_records()
    known = {p.id for p in records.people}
    for ref in (body.fatherId, body.motherId, body.partnerId):
        if ref and ref not in known:
            raise HTTPException(status_code=404, detail=f"Person {ref} not found")

    person = Person(id=str(uuid.uuid4()), **body.model_dump(exclude=RELATION_FIELDS))
    person = await store.create_person(person)

    # Parent and partner rows the add-person form creates alongside the person
    for parent_id in (body.fatherId, body.motherId):
        if parent_id:
            await store.add_parent_of(parent_id, person.id)
    if body.partnerId:
        await store.add_marriage(person.id, body.partnerId)
    return person

async def update_person(store: RecordStore, person_id: str, patch: dict) -> Person:
    if not patch:
        raise HTTPException(status_code=400, detail="Nothing to update")
    # Do not allow changing identity fields
    patch.pop("id", None)
    person = await store.update_person(person_id, patch)
    if person is None:
        raise HTTPException(status_code=404, detail="Person not found")
    return person

async def delete_person(store: RecordStore, person_id: str):
    if not await store.delete_person(person_id):
        raise HTTPException(status_code=404, detail="Person not found")
    return True
