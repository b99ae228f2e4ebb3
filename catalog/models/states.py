# catalog/models/states.py

from pydantic import BaseModel


class StateOut(BaseModel):
    id: int
    name: str
    uf: str

    class Config:
        from_attributes = True
