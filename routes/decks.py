from fastapi import APIRouter, Depends, Form, HTTPException, status
from pydantic import ValidationError

from db.repository import CardRepository
from models.deck import DeckCreate
from routes.deps import get_repository, http_error
from utils.errors import LinguatronError

router = APIRouter()

@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_deck(deckname: str = Form(..., description="Deck name"), repo: CardRepository = Depends(get_repository)):
    """Create a deck. Duplicate names are allowed."""
    try:
        payload = DeckCreate(name=deckname)
    except ValidationError:
        raise HTTPException(status_code=400, detail="Name is required")
    try:
        deck = repo.create_deck(payload.name)
    except LinguatronError as e:
        raise http_error(e)
    return {"message": f"Deck '{deck.name}' created successfully!", "deck": deck.model_dump()}

@router.get("/")
async def list_decks(repo: CardRepository = Depends(get_repository)):
    """List all decks."""
    try:
        decks = repo.list_decks()
    except LinguatronError as e:
        raise http_error(e)
    return {"decks": [deck.model_dump() for deck in decks]}

@router.get("/{deck_id}")
async def deck_detail(deck_id: int, repo: CardRepository = Depends(get_repository)):
    """Deck with all of its cards."""
    try:
        deck = repo.get_deck(deck_id)
        cards = repo.list_cards(deck_id)
    except LinguatronError as e:
        raise http_error(e)
    return {
        "deck": deck.model_dump(),
        "cards": [card.model_dump(mode="json") for card in cards],
    }

@router.delete("/{deck_id}")
async def delete_deck(deck_id: int, repo: CardRepository = Depends(get_repository)):
    """Delete a deck and, by cascade, its cards."""
    try:
        repo.delete_deck(deck_id)
    except LinguatronError as e:
        raise http_error(e)
    return {"deleted": deck_id}
