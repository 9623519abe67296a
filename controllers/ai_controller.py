from fastapi import HTTPException
import os
import json
import logging
from typing import List

from openai import AsyncOpenAI

from config import OPENAI_ESTIMATOR_MODEL, OPENAI_CHAT_MODEL
from database import sync_monitor
from models.ai import EstimateRequest, EstimateItem, ChatRequest

logger = logging.getLogger(__name__)

OFFLINE_REPLY = "Connection lost. I am in offline mode. I will be back when the internet is restored."

ESTIMATOR_SYSTEM_MESSAGE = """You are an expert construction estimator.
Provide detailed, itemized lists of materials and labor required for construction projects.
Be precise with units and conservative with pricing in Indian Rupees.
Respond with a JSON object of the form:
{"items": [{"description": str, "quantity": number, "unit": str, "unitPrice": number, "total": number}]}
where total is quantity * unitPrice."""

SUPERINTENDENT_SYSTEM_MESSAGE = """You are a seasoned Construction Site Superintendent with 30 years of experience in India.
You are knowledgeable about IS codes, safety regulations, project scheduling, concrete, framing, electrical, and plumbing basics.
You are tough but helpful, prioritizing safety and quality above all else.
Keep answers concise and actionable."""


def _client() -> AsyncOpenAI:
    api_key = os.environ.get('OPENAI_API_KEY')
    if not api_key:
        raise HTTPException(status_code=500, detail="AI service not configured")
    return AsyncOpenAI(api_key=api_key)


async def generate_estimate(request: EstimateRequest) -> List[EstimateItem]:
    if not sync_monitor.online:
        raise HTTPException(status_code=503, detail="You are currently offline. Please connect to the internet to use AI features.")
    openai_client = _client()
    try:
        completion = await openai_client.chat.completions.create(
            model=OPENAI_ESTIMATOR_MODEL,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": ESTIMATOR_SYSTEM_MESSAGE},
                {"role": "user", "content": (
                    f'Generate a detailed construction cost estimate for the following project: "{request.description}". '
                    "Break it down into materials and labor. Be realistic with current market prices in India (INR)."
                )},
            ],
        )
        text = completion.choices[0].message.content
        if not text:
            return []
        data = json.loads(text.strip())
        return [EstimateItem(**item) for item in data.get("items", [])]
    except Exception as e:
        logger.error(f"AI estimate error: {str(e)}")
        raise HTTPException(status_code=500, detail=f"AI service error: {str(e)}")


async def chat(request: ChatRequest) -> dict:
    if not sync_monitor.online:
        return {"response": OFFLINE_REPLY, "model": None}
    openai_client = _client()
    messages = [{"role": "system", "content": SUPERINTENDENT_SYSTEM_MESSAGE}]
    messages += [{"role": m.role, "content": m.content} for m in request.history]
    messages.append({"role": "user", "content": request.message})
    try:
        completion = await openai_client.chat.completions.create(model=OPENAI_CHAT_MODEL, messages=messages)
        return {"response": completion.choices[0].message.content, "model": OPENAI_CHAT_MODEL}
    except Exception as e:
        logger.error(f"AI chat error: {str(e)}")
        raise HTTPException(status_code=500, detail=f"AI service error: {str(e)}")
