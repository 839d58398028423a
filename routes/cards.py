from fastapi import APIRouter, Depends, Form, HTTPException, status
from pydantic import ValidationError

from db.repository import CardRepository
from models.card import CardCreate
from routes.deps import get_clock, get_repository, http_error
from utils.clock import Clock
from utils.errors import LinguatronError

router = APIRouter()

@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_card(
    deck_id: int = Form(...),
    question: str = Form(...),
    answer: str = Form(...),
    repo: CardRepository = Depends(get_repository),
    clock: Clock = Depends(get_clock),
):
    """Add a card to a deck. New cards start in Learning and are due immediately."""
    try:
        payload = CardCreate(deck_id=deck_id, question=question, answer=answer)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Question and answer are required")
    try:
        card = repo.create_card(payload.deck_id, payload.question, payload.answer, clock.now())
    except LinguatronError as e:
        raise http_error(e)
    return {
        "message": f"Card with question '{card.question}' and answer '{card.answer}' created successfully!",
        "card": card.model_dump(mode="json"),
    }
