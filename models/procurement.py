from pydantic import Field
import uuid

from models.base import CamelModel


class PurchaseCreate(CamelModel):
    project_id: str
    date: str
    description: str     # material name; inventory matches on it
    quantity: float = 0.0
    unit: str = ""
    rate: float = 0.0


class PurchaseEntry(PurchaseCreate):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    total_amount: float = 0.0
    serial_no: int = 0
