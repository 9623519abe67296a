from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional


class BackupDocument(BaseModel):
    """Every collection is independently optional; `projects` is required."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    projects: List[dict]
    workers: Optional[List[dict]] = None
    bills: Optional[List[dict]] = None
    client_payments: Optional[List[dict]] = Field(None, alias="clientPayments")
    kharchi: Optional[List[dict]] = None
    advances: Optional[List[dict]] = None
    purchases: Optional[List[dict]] = None
    execution: Optional[List[dict]] = Field(None, alias="executionData")
    mess: Optional[List[dict]] = Field(None, alias="messEntries")
    worker_payments: Optional[List[dict]] = Field(None, alias="workerPayments")
    attendance: Optional[List[dict]] = None
    consumption: Optional[List[dict]] = None

    def collections(self) -> Dict[str, List[dict]]:
        return {name: value for name, value in self.__dict__.items() if value is not None}
