"""
Assistant router — natural-language questions about the business.
Endpoint: /api/assistant/...
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from database import get_db
from core.dependencies import get_as_of
from services import assistant
from services.billing import BillingService

router = APIRouter()


class AskBody(BaseModel):
    question: str


@router.post("/ask")
async def ask_assistant(
    body: AskBody,
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
):
    question = body.question.strip()
    if not question:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Question is empty")

    stats = BillingService(db).get_stats(as_of)
    try:
        reply = await assistant.ask(question, stats)
    except assistant.AssistantNotConfigured as e:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, str(e))
    return {"question": question, "reply": reply, "as_of": as_of}
