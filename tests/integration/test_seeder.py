"""DatabaseSeeder integration tests (in-memory SQLite)."""

import json
from pathlib import Path

import pytest
from sqlalchemy import func, select

from passage_search.infrastructure.persistence.models import Passage, Section
from passage_search.infrastructure.persistence.seed import DatabaseSeeder


async def _counts(session) -> tuple[int, int]:
    sections = await session.scalar(select(func.count()).select_from(Section))
    passages = await session.scalar(select(func.count()).select_from(Passage))
    return sections, passages


@pytest.mark.requires_db
async def test_seeds_sample_corpus(db_session) -> None:
    """An empty database receives 5 sections and 22 passages."""
    seeder = DatabaseSeeder(db_session)
    assert not await seeder.has_data()
    assert await seeder.seed() == (5, 22)
    assert await _counts(db_session) == (5, 22)
    assert await seeder.has_data()


@pytest.mark.requires_db
async def test_seeding_is_idempotent(db_session) -> None:
    """A second run adds nothing."""
    await DatabaseSeeder(db_session).seed()
    assert await DatabaseSeeder(db_session).seed() == (0, 0)
    assert await _counts(db_session) == (5, 22)


@pytest.mark.requires_db
async def test_passages_link_to_their_sections(db_session) -> None:
    """Every seeded passage points at an existing section."""
    await DatabaseSeeder(db_session).seed()
    orphans = await db_session.scalar(
        select(func.count())
        .select_from(Passage)
        .outerjoin(Section, Passage.section_id == Section.id)
        .where(Section.id.is_(None))
    )
    assert orphans == 0


@pytest.mark.requires_db
async def test_seeds_from_book_export(db_session, tmp_path: Path) -> None:
    """A JSON export replaces the sample corpus."""
    export = {
        "Sách": [
            {
                "book_name": "Kinh Thập Thiện",
                "book_type": "Kinh",
                "chapters": [
                    {
                        "number": "1",
                        "statements": [
                            {"number": 1, "content": "Mười điều lành"},
                            {"number": 2, "content": ""},
                        ],
                    }
                ],
            },
            {"book_name": "Sách trống", "book_type": "", "chapters": []},
        ]
    }
    path = tmp_path / "books.json"
    path.write_text(json.dumps(export, ensure_ascii=False), encoding="utf-8")

    assert await DatabaseSeeder(db_session, path).seed() == (2, 1)
    passage = await db_session.scalar(select(Passage))
    assert passage.content == "Mười điều lành"
    assert passage.from_ref == "Chương 1"
    assert passage.to_ref == "Câu 1"
    empty = await db_session.scalar(select(Section).where(Section.name == "Sách trống"))
    assert empty.description is None


@pytest.mark.requires_db
async def test_invalid_export_rolls_back(db_session, tmp_path: Path) -> None:
    """A malformed export raises and leaves the database empty."""
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        await DatabaseSeeder(db_session, path).seed()
    assert await _counts(db_session) == (0, 0)
