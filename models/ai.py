from pydantic import BaseModel, Field
from typing import List


class EstimateRequest(BaseModel):
    description: str


class EstimateItem(BaseModel):
    description: str
    quantity: float
    unit: str
    unitPrice: float
    total: float


class ChatMessage(BaseModel):
    role: str  # "user" | "assistant"
    content: str


class ChatRequest(BaseModel):
    message: str
    history: List[ChatMessage] = Field(default_factory=list)
