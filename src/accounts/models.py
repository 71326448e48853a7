from pydantic import BaseModel, Field
from typing import List

from src.templates.models import Template


class Account(BaseModel):
    id: str = Field(..., description="Globally unique account id")
    email: str = Field(..., description="Login email, unique ignoring case")
    password_hash: str
    templates: List[Template] = Field(default_factory=list)

    def public(self) -> "PublicUser":
        return PublicUser(id=self.id, email=self.email)


class PublicUser(BaseModel):
    id: str
    email: str


class Identity(BaseModel):
    """Who a session token was issued to."""

    account_id: str
    email: str


class Session(BaseModel):
    token: str
    user: PublicUser
