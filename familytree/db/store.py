import logging
from abc import ABC, abstractmethod
from familytree.core.config import settings
from familytree.models.person_model import Marriage, ParentChild, Person, RecordSet

logger = logging.getLogger(__name__)

class RecordStore(ABC):
    """Read/write access to the people, marriages and parent_child tables."""

    @abstractmethod
    async def load_records(self) -> RecordSet: ...

    @abstractmethod
    async def create_person(self, person: Person) -> Person: ...

    @abstractmethod
    async def update_person(self, person_id: str, patch: dict) -> Person | None: ...

    @abstractmethod
    async def delete_person(self, person_id: str) -> bool:
        """Remove the person together with every marriage and parent link touching them."""

    @abstractmethod
    async def add_parent_of(self, parent_id: str, child_id: str) -> ParentChild | None: ...

    @abstractmethod
    async def remove_parent_of(self, parent_id: str, child_id: str) -> bool: ...

    @abstractmethod
    async def add_marriage(self, partner_a: str, partner_b: str) -> Marriage | None: ...

    @abstractmethod
    async def remove_marriage(self, marriage_id: str) -> bool: ...

    async def close(self) -> None:
        return None

class Store:
    backend: RecordStore | None = None

store = Store()

async def open_store() -> RecordStore:
    if settings.STORE_BACKEND == "json":
        from familytree.db.json_store import JsonStore
        store.backend = JsonStore(settings.DATA_FILE)
    else:
        from familytree.db.neo4j import Neo4jStore, connect_to_neo4j
        store.backend = Neo4jStore(await connect_to_neo4j())
    logger.info("Record store ready: %s", settings.STORE_BACKEND)
    return store.backend

async def close_store():
    if store.backend:
        await store.backend.close()
        store.backend = None
