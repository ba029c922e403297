from typing import Optional

from pydantic import BaseModel, ConfigDict, StrictStr


class ChirpIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    body: Optional[StrictStr] = None


class ChirpOut(BaseModel):
    cleaned_body: str


class ErrorOut(BaseModel):
    error: str
