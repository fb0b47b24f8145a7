import logging
import uuid
from neo4j import AsyncGraphDatabase, AsyncDriver
from familytree.core.config import settings
from familytree.db.store import RecordStore
from familytree.models.person_model import Marriage, ParentChild, Person, RecordSet

logger = logging.getLogger(__name__)

PERSON_FIELDS = set(Person.model_fields)

class Neo4j:
    driver: AsyncDriver | None = None

neo4j = Neo4j()

async def connect_to_neo4j():
    neo4j.driver = AsyncGraphDatabase.driver(
        settings.NEO4J_URI,
        auth=(settings.NEO4J_USER, settings.NEO4J_PASSWORD),
    )
    async with neo4j.driver.session() as session:
        await session.run(
            "CREATE CONSTRAINT person_id_unique IF NOT EXISTS FOR (p:Person) REQUIRE p.id IS UNIQUE"
        )
    return neo4j.driver

async def close_neo4j():
    if neo4j.driver:
        await neo4j.driver.close()
        neo4j.driver = None

def _node_to_person(node) -> Person:
    data = dict(node)
    return Person(**{k: data.get(k) for k in PERSON_FIELDS})

class Neo4jStore(RecordStore):
    """(:Person) nodes linked by [:MARRIED_TO] and [:PARENT_OF], each relationship carrying an id."""

    def __init__(self, driver: AsyncDriver):
        self.driver = driver

    async def load_records(self) -> RecordSet:
        async with self.driver.session() as session:
            res = await session.run("MATCH (p:Person) RETURN p ORDER BY p.createdAt, p.id")
            people = [_node_to_person(r["p"]) async for r in res]
            res = await session.run("""
                MATCH (a:Person)-[r:MARRIED_TO]->(b:Person)
                RETURN r.id AS id, a.id AS partner_a, b.id AS partner_b
            """)
            marriages = [Marriage(**r) for r in await res.data()]
            res = await session.run("""
                MATCH (p:Person)-[r:PARENT_OF]->(c:Person)
                RETURN r.id AS id, p.id AS parent_id, c.id AS child_id
            """)
            parent_child = [ParentChild(**r) for r in await res.data()]
        return RecordSet(people=people, marriages=marriages, parent_child=parent_child)

    async def create_person(self, person: Person) -> Person:
        async with self.driver.session() as session:
            res = await session.run("""
                CREATE (n:Person)
                SET n = $props, n.createdAt = datetime()
                RETURN n
            """, props=person.model_dump(exclude_none=True))
            node = (await res.single())["n"]
        logger.info("Created person %s", person.id)
        return _node_to_person(node)

    async def update_person(self, person_id: str, patch: dict) -> Person | None:
        patch = {k: v for k, v in patch.items() if k in PERSON_FIELDS and k != "id"}
        async with self.driver.session() as session:
            res = await session.run("""
                MATCH (n:Person {id:$pid})
                SET n += $patch
                RETURN n
            """, pid=person_id, patch=patch)
            rec = await res.single()
        if not rec:
            return None
        logger.info("Updated person %s", person_id)
        return _node_to_person(rec["n"])

    async def delete_person(self, person_id: str) -> bool:
        async with self.driver.session() as session:
            res = await session.run("""
                MATCH (n:Person {id:$pid})
                DETACH DELETE n
                RETURN count(*) AS c
            """, pid=person_id)
            c = (await res.single())["c"]
        if c:
            logger.info("Deleted person %s", person_id)
        return c > 0

    async def add_parent_of(self, parent_id: str, child_id: str) -> ParentChild | None:
        async with self.driver.session() as session:
            res = await session.run("""
                MATCH (p:Person {id:$parentId}), (c:Person {id:$childId})
                MERGE (p)-[r:PARENT_OF]->(c)
                ON CREATE SET r.id = $rid
                RETURN r.id AS id, p.id AS parent_id, c.id AS child_id
            """, parentId=parent_id, childId=child_id, rid=str(uuid.uuid4()))
            rec = await res.single()
        return ParentChild(**rec.data()) if rec else None

    async def remove_parent_of(self, parent_id: str, child_id: str) -> bool:
        async with self.driver.session() as session:
            res = await session.run("""
                MATCH (:Person {id:$parentId})-[r:PARENT_OF]->(:Person {id:$childId})
                DELETE r
                RETURN count(r) AS c
            """, parentId=parent_id, childId=child_id)
            return (await res.single())["c"] > 0

    async def add_marriage(self, partner_a: str, partner_b: str) -> Marriage | None:
        async with self.driver.session() as session:
            res = await session.run("""
                MATCH (a:Person {id:$a}), (b:Person {id:$b})
                MERGE (a)-[r:MARRIED_TO]-(b)
                ON CREATE SET r.id = $rid
                RETURN r.id AS id, startNode(r).id AS partner_a, endNode(r).id AS partner_b
            """, a=partner_a, b=partner_b, rid=str(uuid.uuid4()))
            rec = await res.single()
        return Marriage(**rec.data()) if rec else None

    async def remove_marriage(self, marriage_id: str) -> bool:
        async with self.driver.session() as session:
            res = await session.run("""
                MATCH ()-[r:MARRIED_TO {id:$mid}]->()
                DELETE r
                RETURN count(r) AS c
            """, mid=marriage_id)
            return (await res.single())["c"] > 0

    async def close(self) -> None:
        await close_neo4j()
