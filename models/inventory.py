from pydantic import Field
import uuid

from models.base import CamelModel


class StockConsumptionCreate(CamelModel):
    project_id: str
    material_name: str
    quantity: float
    unit: str = ""
    activity: str = ""
    date: str


class StockConsumption(StockConsumptionCreate):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
