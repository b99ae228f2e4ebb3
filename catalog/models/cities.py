# catalog/models/cities.py

from typing import Optional

from pydantic import BaseModel


class CityOut(BaseModel):
    id: int
    name: str
    state_uf: str

    class Config:
        from_attributes = True


class CityIn(BaseModel):
    """
    Request body of POST/PUT /api/cidades, for the OpenAPI docs.

    Routes read the raw JSON and normalize it themselves, so a malformed body
    answers 400 instead of FastAPI's 422.
    """

    name: Optional[str] = None
    state_uf: Optional[str] = None
