from __future__ import annotations
from pydantic import BaseModel
from typing import Literal


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    reason: str
