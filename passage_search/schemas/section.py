"""Section API schemas."""

from pydantic import BaseModel, ConfigDict


class SectionResponse(BaseModel):
    """Section (named group of passages)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
