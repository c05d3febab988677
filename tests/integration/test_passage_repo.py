"""Passage repository integration tests against the seeded in-memory SQLite database.

Sample corpus: 5 sections (ids 1..5) and 22 passages (ids 1..22) in insertion order.
"""

import time
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import event
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from passage_search.domain.enums import FilterField
from passage_search.domain.exceptions import ValidationException
from passage_search.domain.value_objects import SearchFilters
from passage_search.infrastructure.persistence.database import create_schema
from passage_search.infrastructure.persistence.models import Passage
from passage_search.infrastructure.persistence.repositories import PassageRepository
from passage_search.infrastructure.persistence.seed import SAMPLE_PASSAGES, DatabaseSeeder
from tests.support import make_resilience

NO_FILTERS = SearchFilters()


@pytest.fixture
def repo(db_session, seeded) -> PassageRepository:
    return PassageRepository(db_session, make_resilience())


@pytest.mark.requires_db
async def test_search_matches_content_substring(repo: PassageRepository) -> None:
    """Lower-case 'tâm' appears in six passages, returned by id ascending."""
    results = await repo.search("tâm", NO_FILTERS, 1, 10)
    assert [p.id for p in results] == [1, 4, 9, 16, 19, 22]
    assert all("tâm" in p.content for p in results)
    assert await repo.count("tâm", NO_FILTERS) == 6


@pytest.mark.requires_db
async def test_search_is_case_sensitive(repo: PassageRepository) -> None:
    """'Tâm' and 'tâm' match different sets."""
    upper = await repo.search("Tâm", NO_FILTERS, 1, 10)
    assert [p.id for p in upper] == [1, 16, 17]
    assert await repo.count("TÂM", NO_FILTERS) == 0


@pytest.mark.requires_db
async def test_search_does_not_match_locators(repo: PassageRepository) -> None:
    """from_ref 'Phẩm Tâm' is not searched; only content is."""
    assert await repo.count("Phẩm Tâm", NO_FILTERS) == 0


@pytest.mark.requires_db
async def test_wildcard_characters_are_literal(repo: PassageRepository) -> None:
    """'%' and '_' are ordinary characters, not patterns."""
    assert await repo.count("%", NO_FILTERS) == 0
    assert await repo.count("_", NO_FILTERS) == 0


@pytest.mark.requires_db
async def test_search_populates_section_name(repo: PassageRepository) -> None:
    """section_name is resolved from the owning section."""
    [hit] = await repo.search("Hận thù", NO_FILTERS, 1, 10)
    assert hit.id == 2
    assert hit.section_id == 1
    assert hit.section_name == "Kinh Pháp Cú"
    assert hit.from_ref == "Phẩm Song Yếu"
    assert hit.to_ref == "Câu 5"
    assert hit.type == "Kinh"
    assert hit.author == "Đức Phật"


@pytest.mark.requires_db
async def test_filters_combine_with_and(repo: PassageRepository) -> None:
    """Type, author and section filters narrow the content matches together."""
    kinh = SearchFilters.of(types=["Kinh"])
    assert [p.id for p in await repo.search("tâm", kinh, 1, 10)] == [1, 4, 9, 19, 22]

    kinh_buddha = SearchFilters.of(types=["Kinh"], authors=["Đức Phật"])
    assert [p.id for p in await repo.search("tâm", kinh_buddha, 1, 10)] == [1, 4, 9, 22]

    section_one = SearchFilters.of(section_ids=[1])
    assert [p.id for p in await repo.search("tâm", section_one, 1, 10)] == [1, 4, 19]


@pytest.mark.requires_db
async def test_values_within_a_filter_are_ored(repo: PassageRepository) -> None:
    """Several types match any of them."""
    filters = SearchFilters.of(types=["Luật", "Sách"])
    assert await repo.count("", filters) == 4


@pytest.mark.requires_db
async def test_unknown_filter_value_matches_nothing(repo: PassageRepository) -> None:
    """A filter value absent from the data yields no results."""
    assert await repo.search("tâm", SearchFilters.of(types=["Kin"]), 1, 10) == []


@pytest.mark.requires_db
async def test_blank_term_matches_everything(repo: PassageRepository) -> None:
    """A blank term places no constraint on content."""
    assert await repo.count("", NO_FILTERS) == len(SAMPLE_PASSAGES)
    assert await repo.count("   ", SearchFilters.of(types=["Luận"])) == 4


@pytest.mark.requires_db
async def test_paging_is_stable(repo: PassageRepository) -> None:
    """Pages are contiguous slices of the id-ordered match list."""
    page1 = await repo.search("tâm", NO_FILTERS, 1, 4)
    page2 = await repo.search("tâm", NO_FILTERS, 2, 4)
    assert [p.id for p in page1] == [1, 4, 9, 16]
    assert [p.id for p in page2] == [19, 22]
    assert await repo.search("tâm", NO_FILTERS, 1, 4) == page1


@pytest.mark.requires_db
async def test_page_past_the_end_is_empty(repo: PassageRepository) -> None:
    """Asking beyond the last page returns an empty list, not an error."""
    assert await repo.search("tâm", NO_FILTERS, 3, 4) == []


@pytest.mark.requires_db
async def test_distinct_types_sorted(repo: PassageRepository) -> None:
    """Filter options are de-duplicated and sorted by code point."""
    types = await repo.distinct_values(FilterField.TYPE)
    assert set(types) == {"Kinh", "Luận", "Luật", "Sách"}
    assert types == sorted(types)


@pytest.mark.requires_db
async def test_distinct_authors_skip_null_and_empty(repo: PassageRepository, db_session) -> None:
    """NULL and empty authors never appear among filter options."""
    db_session.add_all(
        [
            Passage(content="không tác giả", section_id=1, author=None, type=""),
            Passage(content="tác giả rỗng", section_id=1, author="", type=None),
        ]
    )
    await db_session.commit()
    authors = await repo.distinct_values("author")
    assert set(authors) == {
        "Thích Minh Châu",
        "Thích Nhất Hạnh",
        "Thích Trí Quang",
        "Thích Xá Lợi Phất",
        "Đức Phật",
    }
    assert authors == sorted(authors)
    assert "" not in await repo.distinct_values(FilterField.TYPE)


@pytest.mark.requires_db
async def test_distinct_values_unknown_field(repo: PassageRepository) -> None:
    """Only type and author are filterable fields."""
    with pytest.raises(ValidationException) as exc_info:
        await repo.distinct_values("content")
    assert exc_info.value.details == {"field": "field"}


@pytest.mark.requires_db
async def test_autocomplete_first_match_order_and_limit(repo: PassageRepository) -> None:
    """Suggestions are whole contents ordered by first occurrence, capped at max_results."""
    contents = {i + 1: row[1] for i, row in enumerate(SAMPLE_PASSAGES)}
    suggestions = await repo.autocomplete_suggestions("tâm", NO_FILTERS, 3)
    assert suggestions == [contents[1], contents[4], contents[9]]


@pytest.mark.requires_db
async def test_autocomplete_deduplicates_content(repo: PassageRepository, db_session) -> None:
    """Identical contents are suggested once, at the position of their first id."""
    duplicate = SAMPLE_PASSAGES[0][1]
    db_session.add(Passage(content=duplicate, section_id=2, type="Kinh"))
    await db_session.commit()
    suggestions = await repo.autocomplete_suggestions("tâm", NO_FILTERS, 10)
    assert suggestions.count(duplicate) == 1
    assert suggestions[0] == duplicate
    assert len(suggestions) == 6


@pytest.mark.requires_db
async def test_autocomplete_respects_filters(repo: PassageRepository) -> None:
    """Filters apply to suggestions too."""
    suggestions = await repo.autocomplete_suggestions(
        "Tỳ kheo", SearchFilters.of(types=["Luật"]), 10
    )
    assert len(suggestions) == 3
    assert await repo.autocomplete_suggestions(
        "Tỳ kheo", SearchFilters.of(types=["Kinh"]), 10
    ) == []


@pytest.mark.requires_db
@pytest.mark.parametrize(("term", "max_results"), [("", 5), ("  ", 5), ("t", 5), ("tâm", 0)])
async def test_autocomplete_rejects_without_query(
    db_session, term: str, max_results: int
) -> None:
    """Blank or short terms and non-positive limits return [] without touching the store."""
    resilience = MagicMock()
    resilience.execute_database_operation = AsyncMock()
    repo = PassageRepository(db_session, resilience)
    assert await repo.autocomplete_suggestions(term, NO_FILTERS, max_results) == []
    resilience.execute_database_operation.assert_not_awaited()


async def test_failed_attempt_rolls_back_before_retry() -> None:
    """A transient error rolls the session back and the retry succeeds."""
    db = MagicMock()
    db.rollback = AsyncMock()
    answer = MagicMock()
    answer.scalar_one.return_value = 5
    db.execute = AsyncMock(
        side_effect=[OperationalError("SELECT", {}, Exception("locked")), answer]
    )
    repo = PassageRepository(db, make_resilience())
    assert await repo.count("tâm", NO_FILTERS) == 5
    db.rollback.assert_awaited_once()
    assert db.execute.await_count == 2


async def test_first_attempt_does_not_roll_back() -> None:
    """The first attempt runs on the session as is; only retries roll back."""
    db = MagicMock()
    db.rollback = AsyncMock()
    answer = MagicMock()
    answer.scalar_one.return_value = 2
    db.execute = AsyncMock(return_value=answer)
    repo = PassageRepository(db, make_resilience())
    assert await repo.count("tâm", NO_FILTERS) == 2
    db.rollback.assert_not_awaited()


@pytest.mark.requires_db
async def test_timed_out_attempt_is_retried_on_a_clean_session(tmp_path) -> None:
    """A query cancelled by the per-attempt timeout is retried and succeeds."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'passages.db'}")
    calls = 0

    def slow_first_instr(haystack: str | None, needle: str | None) -> int | None:
        nonlocal calls
        calls += 1
        if calls == 1:
            time.sleep(0.3)
        if haystack is None or needle is None:
            return None
        return haystack.find(needle) + 1

    @event.listens_for(engine.sync_engine, "connect")
    def register_instr(dbapi_connection, _record) -> None:
        dbapi_connection.create_function("instr", 2, slow_first_instr)

    try:
        await create_schema(engine)
        factory = async_sessionmaker(bind=engine, expire_on_commit=False)
        async with factory() as session:
            await DatabaseSeeder(session).seed()
        async with factory() as session:
            repo = PassageRepository(session, make_resilience(timeout=0.2))
            results = await repo.search("tâm", NO_FILTERS, 1, 10)
    finally:
        await engine.dispose()

    assert [r.id for r in results] == [1, 4, 9, 16, 19, 22]
    assert calls > 1
