import random
from typing import Any, Dict

from fastapi import APIRouter, Depends, Form, Query

from db.repository import CardRepository
from models.card import Stage
from routes.deps import get_clock, get_match_threshold, get_repository, get_rng, get_rules, http_error
from utils.clock import Clock
from utils.errors import LinguatronError
from utils.scheduler import SchedulingRules
from utils.study import Prompt, next_prompt, record_answer

router = APIRouter()

def prompt_payload(prompt: Prompt, deck_id: int, stage: Stage) -> Dict[str, Any]:
    if not prompt.card_available:
        return {
            "deck_id": deck_id,
            "stage": stage.value,
            "card_available": False,
            "message": f"No {stage.value} cards left for this deck. Create some new cards",
        }
    card = prompt.card
    return {
        "deck_id": deck_id,
        "stage": stage.value,
        "card_available": True,
        "card": card.model_dump(mode="json", exclude={"answer"}),
        "multiple_choice": prompt.multiple_choice,
        "choices": [{"id": choice.id, "answer": choice.answer} for choice in prompt.choices],
    }

@router.get("/{deck_id}")
async def learning_session(
    deck_id: int,
    stage: Stage = Query(default=Stage.LEARNING),
    repo: CardRepository = Depends(get_repository),
    clock: Clock = Depends(get_clock),
    rng: random.Random = Depends(get_rng),
):
    """Most due card of the deck for the given stage, with its choices."""
    try:
        prompt = next_prompt(repo, deck_id, stage, clock, rng)
    except LinguatronError as e:
        raise http_error(e)
    return prompt_payload(prompt, deck_id, stage)

@router.post("/answer")
async def submit_answer(
    card_id: int = Form(..., alias="card-id"),
    answer: str = Form(""),
    repo: CardRepository = Depends(get_repository),
    clock: Clock = Depends(get_clock),
    rng: random.Random = Depends(get_rng),
    rules: SchedulingRules = Depends(get_rules),
    threshold: float = Depends(get_match_threshold),
):
    """Grade a typed answer, reschedule the card and return the next prompt."""
    try:
        result = record_answer(repo, card_id, answer, clock, rules, threshold)
        stage = result.previous.stage
        prompt = next_prompt(repo, result.card.deck_id, stage, clock, rng)
    except LinguatronError as e:
        raise http_error(e)
    return {
        "result": {
            "correct": result.correct,
            "user_answer": result.user_answer,
            "expected_answer": result.card.answer,
            "card": result.card.model_dump(mode="json"),
        },
        "next": prompt_payload(prompt, result.card.deck_id, stage),
    }
