# catalog/api/cities.py

import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Query, Request, Response, status

from catalog.db import gateway
from catalog.db.engine import request_engine
from catalog.db.references import WriteOutcome
from catalog.errors import DuplicateConflict, EntityNotFound, ReferenceNotFound
from catalog.models.cities import CityIn, CityOut
from catalog.validation import page_offset, validate_city_payload, validate_id, validate_page

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cidades", tags=["cities"])

_BODY_DOC = {"requestBody": {"content": {"application/json": {"schema": CityIn.model_json_schema()}}}}


def _raise_for_outcome(result: gateway.WriteResult) -> None:
    if result.ok:
        return
    if result.outcome == WriteOutcome.REFERENCE_VIOLATION:
        raise ReferenceNotFound()
    if result.outcome == WriteOutcome.NOT_FOUND:
        raise EntityNotFound("City not found")
    if result.outcome == WriteOutcome.DUPLICATE:
        raise DuplicateConflict()


@router.get("", response_model=List[CityOut])
def list_cities(
    request: Request,
    page: Optional[str] = Query(default=None, description="1-based page (default 1)"),
    limit: Optional[str] = Query(default=None, description="page size, clamped to 1..100 (default 100)"),
) -> List[CityOut]:
    """
    Return one page of cities ordered by name.
    """
    page_value, limit_value = validate_page(page, limit)
    rows = gateway.list_cities(
        request_engine(request),
        limit=limit_value,
        offset=page_offset(page_value, limit_value),
    )
    return [CityOut(**row) for row in rows]


@router.get("/{city_id}", response_model=CityOut)
def get_city(city_id: str, request: Request) -> CityOut:
    city_id = validate_id(city_id)

    row = gateway.get_city(request_engine(request), city_id)
    if row is None:
        raise EntityNotFound("City not found")

    return CityOut(**row)


@router.post(
    "",
    response_model=CityOut,
    status_code=status.HTTP_201_CREATED,
    openapi_extra=_BODY_DOC,
)
def create_city(request: Request, body: Any = Body(default=None)) -> CityOut:
    """
    Create a city. The state UF must exist and (name, state_uf) must be new.
    """
    name, state_uf = validate_city_payload(body)

    result = gateway.insert_city(request_engine(request), name, state_uf)
    _raise_for_outcome(result)

    logger.info("Created city %s (%s/%s)", result.row["id"], name, state_uf)
    return CityOut(**result.row)


@router.put("/{city_id}", response_model=CityOut, openapi_extra=_BODY_DOC)
def update_city(city_id: str, request: Request, body: Any = Body(default=None)) -> CityOut:
    """
    Replace name and state_uf of an existing city.
    """
    city_id = validate_id(city_id)
    name, state_uf = validate_city_payload(body)

    result = gateway.update_city(request_engine(request), city_id, name, state_uf)
    _raise_for_outcome(result)

    logger.info("Updated city %s (%s/%s)", city_id, name, state_uf)
    return CityOut(**result.row)


@router.delete("/{city_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_city(city_id: str, request: Request) -> Response:
    city_id = validate_id(city_id)

    result = gateway.delete_city(request_engine(request), city_id)
    _raise_for_outcome(result)

    logger.info("Deleted city %s", city_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
