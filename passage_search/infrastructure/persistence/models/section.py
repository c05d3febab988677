"""Section ORM model. A named grouping that owns many passages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from passage_search.core.constants import (
    SECTION_DESCRIPTION_MAX_LENGTH,
    SECTION_NAME_MAX_LENGTH,
)
from passage_search.infrastructure.persistence.database import Base

if TYPE_CHECKING:
    from passage_search.infrastructure.persistence.models.passage import Passage


class Section(Base):
    """Passage grouping. Table: section. Deletion is restricted while passages reference it."""

    __tablename__ = "section"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(SECTION_NAME_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(
        String(SECTION_DESCRIPTION_MAX_LENGTH), nullable=True
    )

    passages: Mapped[list[Passage]] = relationship(
        back_populates="section", passive_deletes="all"
    )
