from __future__ import annotations
from pydantic import BaseModel

class Ok(BaseModel):
    ok: bool = True

class ErrorResponse(BaseModel):
    ok: bool = False
    error: str = ""

class ValidationErrorResponse(BaseModel):
    ok: bool = False
    errors: dict[str, list[str]]
