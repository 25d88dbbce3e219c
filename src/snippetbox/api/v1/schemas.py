"""
Request/response bodies.

These models only parse and shape JSON. Business rules on the submitted values
(blank checks, lengths, permitted expiry) are applied by the Validator in the
routes, so the client gets the same per-field messages for every rule.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class SnippetCreate(BaseModel):
    title: str = ""
    content: str = ""
    expires: int = 365


class SnippetOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    created: datetime
    expires: datetime


class UserSignup(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""


class UserLogin(BaseModel):
    email: str = ""
    password: str = ""


class CreatedId(BaseModel):
    id: int
