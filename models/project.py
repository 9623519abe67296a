from pydantic import Field
from typing import Optional, List
import uuid

from models.base import CamelModel


class ProjectStatus:
    PLANNING = "Planning"
    IN_PROGRESS = "In Progress"
    ON_HOLD = "On Hold"
    COMPLETED = "Completed"

    ALL = [PLANNING, IN_PROGRESS, ON_HOLD, COMPLETED]


class ProjectCreate(CamelModel):
    name: str
    project_code: Optional[str] = None
    address: str = ""
    start_date: str = ""
    completion_date: Optional[str] = None
    budget: float
    status: str = ProjectStatus.PLANNING
    completion_percentage: float = 0.0
    spent: Optional[float] = None
    client: Optional[str] = None


class Project(ProjectCreate):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))


# ── Execution levels ──────────────────────────────────────

class ExecutionLevelCreate(CamelModel):
    project_id: str
    level_name: Optional[str] = None
    # Free-form pour records, e.g. {"label": "Pour 1", "date": "2024-03-02", "remarks": "..."}
    pours: List[dict] = Field(default_factory=list)


class ExecutionLevel(ExecutionLevelCreate):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    level_name: str = ""
