from pydantic import Field
from typing import Optional
import uuid

from models.base import CamelModel


class BillCreate(CamelModel):
    project_id: str
    bill_no: str
    work_nature: str = ""
    amount: float
    billing_month: str = ""
    gst_amount: Optional[float] = None
    grand_total: Optional[float] = None
    certify_date: Optional[str] = None


class Bill(BillCreate):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    serial_no: int = 0


class ClientPaymentCreate(CamelModel):
    project_id: str
    date: str
    amount: float
    remarks: str = ""


class ClientPayment(ClientPaymentCreate):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
