# catalog/api/states.py

from typing import List

from fastapi import APIRouter, Request

from catalog.db import gateway
from catalog.db.engine import request_engine
from catalog.errors import EntityNotFound
from catalog.models.states import StateOut
from catalog.validation import validate_uf

router = APIRouter(prefix="/estados", tags=["states"])


@router.get("", response_model=List[StateOut])
def list_states(request: Request) -> List[StateOut]:
    """
    Return every state ordered by name.
    """
    rows = gateway.list_states(request_engine(request))
    return [StateOut(**row) for row in rows]


@router.get("/{uf}", response_model=StateOut)
def get_state(uf: str, request: Request) -> StateOut:
    """
    Look up a single state by its two-letter UF (case-insensitive).
    """
    uf = validate_uf(uf)

    row = gateway.get_state(request_engine(request), uf)
    if row is None:
        raise EntityNotFound("State not found")

    return StateOut(**row)
