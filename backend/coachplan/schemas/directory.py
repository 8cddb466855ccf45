# backend/coachplan/schemas/directory.py
from pydantic import BaseModel
from pydantic.config import ConfigDict


class GroupOut(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class CoachOut(BaseModel):
    id: int
    display_name: str

    model_config = ConfigDict(from_attributes=True)
