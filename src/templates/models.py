from pydantic import BaseModel, Field
from typing import Optional


class Template(BaseModel):
    """A stored prompt template owned by a single account."""

    id: str = Field(..., description="Identifier, unique within the owning account")
    name: str
    description: str = ""
    body: str = Field(..., description="Raw template text with {{placeholders}}")


class TemplatePatch(BaseModel):
    """
    Partial update. Only fields that were explicitly provided are applied,
    so an empty string still overwrites.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    body: Optional[str] = None

    def provided(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)
