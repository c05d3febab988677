"""Passage ORM model. The primary searchable unit; immutable after seeding."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from passage_search.core.constants import (
    PASSAGE_AUTHOR_MAX_LENGTH,
    PASSAGE_CONTENT_MAX_LENGTH,
    PASSAGE_LOCATOR_MAX_LENGTH,
    PASSAGE_TYPE_MAX_LENGTH,
)
from passage_search.infrastructure.persistence.database import Base

if TYPE_CHECKING:
    from passage_search.infrastructure.persistence.models.section import Section


class Passage(Base):
    """Short text record. Table: passage. FK section_id -> section.id (ON DELETE RESTRICT)."""

    __tablename__ = "passage"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content: Mapped[str] = mapped_column(
        String(PASSAGE_CONTENT_MAX_LENGTH), nullable=False
    )
    section_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("section.id", ondelete="RESTRICT"), nullable=False
    )
    from_ref: Mapped[str | None] = mapped_column(
        String(PASSAGE_LOCATOR_MAX_LENGTH), nullable=True
    )
    to_ref: Mapped[str | None] = mapped_column(
        String(PASSAGE_LOCATOR_MAX_LENGTH), nullable=True
    )
    type: Mapped[str | None] = mapped_column(
        String(PASSAGE_TYPE_MAX_LENGTH), nullable=True
    )
    author: Mapped[str | None] = mapped_column(
        String(PASSAGE_AUTHOR_MAX_LENGTH), nullable=True
    )

    section: Mapped[Section] = relationship(back_populates="passages")

    __table_args__ = (
        Index("ix_passage_content", "content"),
        Index("ix_passage_type", "type"),
        Index("ix_passage_author", "author"),
        Index("ix_passage_section_id", "section_id"),
    )
