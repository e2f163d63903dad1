from typing import Annotated
from pydantic import BaseModel, StringConstraints

LookupName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


class LookupWrite(BaseModel):
    name: LookupName


class LookupResponse(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True
