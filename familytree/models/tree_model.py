from pydantic import BaseModel, Field
from typing import Optional, List
from familytree.models.person_model import TreeNode

class PositionedNode(BaseModel):
    id: str
    x: float
    y: float
    depth: int

class ParentEdge(BaseModel):
    key: str
    x1: float
    y1: float
    x2: float
    y2: float

class MarriageEdge(BaseModel):
    key: str
    x1: float
    x2: float
    y: float

class GenerationGuide(BaseModel):
    depth: int
    y: float
    x1: float
    x2: float
    label: str

class Bounds(BaseModel):
    minX: float
    maxX: float
    minY: float
    maxY: float

class TreeOut(BaseModel):
    nodes: List[PositionedNode]
    edges: List[ParentEdge]
    marriageEdges: List[MarriageEdge]
    guides: List[GenerationGuide]
    bounds: Optional[Bounds] = None
    nodeById: dict[str, TreeNode]
    hidden: List[str] = Field(default_factory=list)

class CollapseState(BaseModel):
    collapsedCouples: List[str] = Field(default_factory=list)
    collapsedSingles: List[str] = Field(default_factory=list)

class ToggleCollapseIn(CollapseState):
    personId: str

class RosterGeneration(BaseModel):
    generation: int
    people: List[TreeNode]
