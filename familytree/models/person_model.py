from pydantic import BaseModel, Field
from typing import Optional, List, Literal

Gender = Literal["M", "F"]
LifeStatus = Literal["Living", "Deceased"]

class Person(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    preferred_name: Optional[str] = None
    gender: Optional[Gender] = None
    generation: Optional[int] = None
    birth_date: Optional[str] = None
    birth_place: Optional[str] = None
    death_date: Optional[str] = None
    death_place: Optional[str] = None
    status: Optional[LifeStatus] = None
    phone: Optional[str] = None
    facebook: Optional[str] = None
    photo: Optional[str] = None

class Marriage(BaseModel):
    id: str
    partner_a: str
    partner_b: str

class ParentChild(BaseModel):
    id: str
    parent_id: str
    child_id: str

class TreeNode(Person):
    # Relationship lists keep input order and are never deduplicated
    children: List[str] = Field(default_factory=list)
    partners: List[str] = Field(default_factory=list)
    parents: Optional[List[str]] = None

class RecordSet(BaseModel):
    """Snapshot of the three record tables handed to one layout pass."""
    people: List[Person] = Field(default_factory=list)
    marriages: List[Marriage] = Field(default_factory=list)
    parent_child: List[ParentChild] = Field(default_factory=list)

class PersonCreate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    preferred_name: Optional[str] = None
    gender: Optional[Gender] = None
    generation: Optional[int] = None
    birth_date: Optional[str] = None
    birth_place: Optional[str] = None
    death_date: Optional[str] = None
    death_place: Optional[str] = None
    status: Optional[LifeStatus] = "Living"
    phone: Optional[str] = None
    facebook: Optional[str] = None
    photo: Optional[str] = None
    fatherId: Optional[str] = None
    motherId: Optional[str] = None
    partnerId: Optional[str] = None

class PersonUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    preferred_name: Optional[str] = None
    gender: Optional[Gender] = None
    generation: Optional[int] = None
    birth_date: Optional[str] = None
    birth_place: Optional[str] = None
    death_date: Optional[str] = None
    death_place: Optional[str] = None
    status: Optional[LifeStatus] = None
    phone: Optional[str] = None
    facebook: Optional[str] = None
    photo: Optional[str] = None

class FamilyOut(BaseModel):
    person: TreeNode
    parents: list[TreeNode]
    partners: list[TreeNode]
    children: list[TreeNode]
