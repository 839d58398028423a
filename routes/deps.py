"""FastAPI dependencies handing collaborators to the study service."""

import random
from typing import Any, Dict

from fastapi import Depends, HTTPException, status
from loguru import logger

from config import load_config
from db.database import get_db
from db.repository import CardRepository
from utils.clock import Clock, SystemClock
from utils.errors import (
    LinguatronError,
    MalformedTimestamp,
    NotFound,
    StaleCard,
    StorageFailure,
)
from utils.grading import match_threshold
from utils.scheduler import SchedulingRules, rules_from_config

_system_clock = SystemClock()

def get_config() -> Dict[str, Any]:
    return load_config()

def get_repository(conn = Depends(get_db)) -> CardRepository:
    return CardRepository(conn)

def get_clock() -> Clock:
    return _system_clock

def get_rng() -> random.Random:
    return random.Random()

def get_rules(config: Dict[str, Any] = Depends(get_config)) -> SchedulingRules:
    return rules_from_config(config)

def get_match_threshold(config: Dict[str, Any] = Depends(get_config)) -> float:
    return match_threshold(config)

def http_error(exc: LinguatronError) -> HTTPException:
    """Translate an application error into the HTTP error a route raises."""
    if isinstance(exc, NotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, MalformedTimestamp):
        logger.error("Data integrity fault: {}", exc)
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Data integrity error: {exc}")
    if isinstance(exc, StaleCard):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    if isinstance(exc, StorageFailure):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
