from pydantic import BaseModel, Field
from typing import List, Literal, Optional


class GenerationResult(BaseModel):
    """
    Output contract of the generation workflow.
    A failed enhancement is reported through `note`, never as an error.
    """

    resolved: str = Field(
        ...,
        description="Rendered prompt, or the enhancer's rewrite when source is 'enhanced'"
    )

    variables: List[str] = Field(
        default_factory=list,
        description="Placeholder names found in the template, first-occurrence order"
    )

    source: Literal["local", "enhanced"] = Field(
        "local",
        description="Where `resolved` came from"
    )

    note: Optional[str] = Field(
        None,
        description="Reason the enhancement fell back to the local render"
    )
