"""
Translation of application exceptions to HTTP errors.

Routers catch GamificationError and re-raise the result of http_error():

    try:
        duel = duel_service.accept(duel_id, user_id)
    except GamificationError as e:
        raise http_error(e)
"""
from typing import Dict, Type

from fastapi import HTTPException

from application.exceptions import (
    GamificationError,
    InsufficientResource,
    InvalidInput,
    InvalidProof,
    InvalidTransition,
    NotFound,
)

ERROR_STATUS: Dict[Type[GamificationError], int] = {
    InvalidInput: 400,
    InvalidProof: 400,
    InvalidTransition: 409,
    InsufficientResource: 403,
    NotFound: 404,
}


def http_error(exc: GamificationError) -> HTTPException:
    """HTTPException with the status mapped from the exception type (400 fallback)."""
    for exc_type, status_code in ERROR_STATUS.items():
        if isinstance(exc, exc_type):
            return HTTPException(status_code=status_code, detail=exc.message)
    return HTTPException(status_code=400, detail=exc.message)
