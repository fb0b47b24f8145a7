import json
import logging
import os
import tempfile
import uuid
from pathlib import Path
from familytree.db.store import RecordStore
from familytree.models.person_model import Marriage, ParentChild, Person, RecordSet

logger = logging.getLogger(__name__)

class JsonStore(RecordStore):
    """
    File-backed store: one JSON document with "people", "marriages" and
    "parent_child" arrays. The whole file is rewritten on every change.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._records = self._read()

    def _read(self) -> RecordSet:
        if not self.path.exists():
            logger.warning("Data file %s not found, starting empty", self.path)
            return RecordSet()
        data = json.loads(self.path.read_text(encoding="utf-8"))
        return RecordSet(
            people=data.get("people") or [],
            marriages=data.get("marriages") or [],
            parent_child=data.get("parent_child") or [],
        )

    def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(self._records.model_dump(), ensure_ascii=False, indent=2)
        # The data file is only ever replaced whole, never rewritten in place
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
        tmp = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
            tmp.replace(self.path)
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise

    def _find(self, person_id: str) -> Person | None:
        return next((p for p in self._records.people if p.id == person_id), None)

    async def load_records(self) -> RecordSet:
        return self._records.model_copy(deep=True)

    async def create_person(self, person: Person) -> Person:
        self._records.people.append(person)
        self._write()
        logger.info("Created person %s", person.id)
        return person

    async def update_person(self, person_id: str, patch: dict) -> Person | None:
        for i, p in enumerate(self._records.people):
            if p.id == person_id:
                updated = Person(**{**p.model_dump(), **patch, "id": person_id})
                self._records.people[i] = updated
                self._write()
                logger.info("Updated person %s", person_id)
                return updated
        return None

    async def delete_person(self, person_id: str) -> bool:
        if self._find(person_id) is None:
            return False
        rec = self._records
        rec.people = [p for p in rec.people if p.id != person_id]
        rec.marriages = [m for m in rec.marriages if person_id not in (m.partner_a, m.partner_b)]
        rec.parent_child = [pc for pc in rec.parent_child if person_id not in (pc.parent_id, pc.child_id)]
        self._write()
        logger.info("Deleted person %s", person_id)
        return True

    async def add_parent_of(self, parent_id: str, child_id: str) -> ParentChild | None:
        if self._find(parent_id) is None or self._find(child_id) is None:
            return None
        for pc in self._records.parent_child:
            if pc.parent_id == parent_id and pc.child_id == child_id:
                return pc
        link = ParentChild(id=str(uuid.uuid4()), parent_id=parent_id, child_id=child_id)
        self._records.parent_child.append(link)
        self._write()
        return link

    async def remove_parent_of(self, parent_id: str, child_id: str) -> bool:
        before = len(self._records.parent_child)
        self._records.parent_child = [
            pc for pc in self._records.parent_child
            if not (pc.parent_id == parent_id and pc.child_id == child_id)
        ]
        if len(self._records.parent_child) == before:
            return False
        self._write()
        return True

    async def add_marriage(self, partner_a: str, partner_b: str) -> Marriage | None:
        if self._find(partner_a) is None or self._find(partner_b) is None:
            return None
        for m in self._records.marriages:
            if {m.partner_a, m.partner_b} == {partner_a, partner_b}:
                return m
        marriage = Marriage(id=str(uuid.uuid4()), partner_a=partner_a, partner_b=partner_b)
        self._records.marriages.append(marriage)
        self._write()
        return marriage

    async def remove_marriage(self, marriage_id: str) -> bool:
        before = len(self._records.marriages)
        self._records.marriages = [m for m in self._records.marriages if m.id != marriage_id]
        if len(self._records.marriages) == before:
            return False
        self._write()
        return True
