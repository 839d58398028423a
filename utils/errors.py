"""Exceptions raised by the scheduling engine and its repository."""


class LinguatronError(Exception):
    """Base class for all application errors."""


class NotFound(LinguatronError):
    pass


class CardNotFound(NotFound):
    def __init__(self, card_id: int):
        super().__init__(f"Card {card_id} not found")
        self.card_id = card_id


class DeckNotFound(NotFound):
    def __init__(self, deck_id: int):
        super().__init__(f"Deck {deck_id} not found")
        self.deck_id = deck_id


class EmptyCandidateSet(LinguatronError):
    """No card is eligible for presentation. Not a data error."""


class MalformedTimestamp(LinguatronError):
    """A stored instant is missing or does not use the canonical format."""

    label = "timestamp"

    def __init__(self, value, card_id=None):
        where = f" on card {card_id}" if card_id is not None else ""
        super().__init__(f"Malformed {self.label}{where}: {value!r}")
        self.value = value
        self.card_id = card_id


class MalformedDueDate(MalformedTimestamp):
    label = "due date"


class StorageFailure(LinguatronError):
    pass


class StaleCard(StorageFailure):
    """The card changed in storage between fetch and save."""

    def __init__(self, card_id: int):
        super().__init__(f"Card {card_id} was modified concurrently")
        self.card_id = card_id
