from pydantic import BaseModel, validator

class DeckBase(BaseModel):
    name: str

class DeckCreate(DeckBase):
    @validator('name')
    def name_required(cls, v):
        if not v or not v.strip():
            raise ValueError("Deck name is required")
        return v.strip()

class Deck(DeckBase):
    id: int

    class Config:
        from_attributes = True
