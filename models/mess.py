from pydantic import Field
import uuid

from models.base import CamelModel


class MessEntryCreate(CamelModel):
    project_id: str
    worker_count: int = 0
    rate: float = 0.0
    amount_paid: float = 0.0


class MessEntry(MessEntryCreate):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    total_amount: float = 0.0
    balance: float = 0.0
