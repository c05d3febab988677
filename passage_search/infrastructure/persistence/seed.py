"""Database seeding: built-in sample corpus or a JSON book export.

Seeding is idempotent; it does nothing when any section already exists.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from passage_search.core.constants import (
    PASSAGE_CONTENT_MAX_LENGTH,
    PASSAGE_LOCATOR_MAX_LENGTH,
    PASSAGE_TYPE_MAX_LENGTH,
    SECTION_DESCRIPTION_MAX_LENGTH,
    SECTION_NAME_MAX_LENGTH,
)
from passage_search.infrastructure.persistence.models import Passage, Section
from passage_search.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


# (name, description)
SAMPLE_SECTIONS: tuple[tuple[str, str], ...] = (
    ("Kinh Pháp Cú", "Tập hợp những lời dạy ngắn gọn và sâu sắc của Đức Phật"),
    ("Kinh Kim Cương", "Một trong những kinh điển quan trọng nhất của Phật giáo Đại Thừa"),
    ("Kinh Tâm", "Kinh ngắn nhưng chứa đựng tinh hoa của triết lý Bát Nhã"),
    ("Luật Tỳ Kheo", "Các quy tắc và giới luật dành cho tăng sĩ"),
    ("Luận Abhidhamma", "Phân tích chi tiết về tâm lý học và triết học Phật giáo"),
)

# (section index into SAMPLE_SECTIONS, content, from_ref, to_ref, type, author)
SAMPLE_PASSAGES: tuple[tuple[int, str, str, str, str, str], ...] = (
    (0, "Tâm là chủ tạo ra tất cả, tâm đi trước, tâm làm chủ. Nếu với tâm thanh tịnh mà nói năng, hành động, thì an lạc sẽ theo sau, như bóng theo hình.", "Phẩm Song Yếu", "Câu 2", "Kinh", "Đức Phật"),
    (0, "Hận thù không thể diệt trừ hận thù. Chỉ có từ ái mới diệt trừ được hận thù. Đây là chân lý bất biến.", "Phẩm Song Yếu", "Câu 5", "Kinh", "Đức Phật"),
    (0, "Người nào không tham lam, không sân hận, không si mê, thì người ấy được gọi là bậc A-la-hán.", "Phẩm A-la-hán", "Câu 94", "Kinh", "Đức Phật"),
    (0, "Như người thợ làm mũi tên làm thẳng cây tên, người trí cũng vậy, điều phục tâm mình.", "Phẩm Tâm", "Câu 33", "Kinh", "Đức Phật"),
    (0, "Tất cả chúng sinh đều sợ chết, đều yêu sống. Hãy lấy mình làm thước đo, không nên giết hại hay bảo người khác giết hại.", "Phẩm Bạo Lực", "Câu 129", "Kinh", "Đức Phật"),
    (1, "Tất cả pháp hữu vi như mộng huyễn, như bọt nước, như bóng, như sương mai, như chớp. Nên quán như vậy.", "Phẩm 32", "Kệ cuối", "Kinh", "Đức Phật"),
    (1, "Nếu có người nói Như Lai có đến, có đi, có ngồi, có nằm, người ấy không hiểu nghĩa lời ta nói.", "Phẩm 29", "Bất lai bất khứ", "Kinh", "Đức Phật"),
    (1, "Phàm có tướng đều là hư vọng. Nếu thấy các tướng không phải tướng, tức thấy Như Lai.", "Phẩm 5", "Như lý thật kiến", "Kinh", "Đức Phật"),
    (1, "Ứng sinh tâm vô sở trụ - Nên sinh khởi tâm không nương tựa vào đâu cả.", "Phẩm 10", "Trang nghiêm tịnh độ", "Kinh", "Đức Phật"),
    (2, "Quán Tự Tại Bồ Tát hành thâm Bát Nhã Ba La Mật Đa thời, chiếu kiến ngũ uẩn giai không, độ nhất thiết khổ ách.", "Mở đầu", "Câu đầu", "Kinh", "Đức Phật"),
    (2, "Sắc bất dị không, không bất dị sắc, sắc tức thị không, không tức thị sắc.", "Ngũ uẩn", "Sắc không", "Kinh", "Đức Phật"),
    (2, "Bát Nhã Ba La Mật Đa, thị đại thần chú, thị đại minh chú, thị vô thượng chú, thị vô đẳng đẳng chú.", "Thần chú", "Bát Nhã chú", "Kinh", "Đức Phật"),
    (3, "Tỳ kheo không được cố ý đoạt mạng sinh vật. Ai vi phạm phạm Ba-la-di.", "Ba-la-di", "Điều 1", "Luật", "Đức Phật"),
    (3, "Tỳ kheo phải khất thực đúng thời, không được ăn phi thời. Phi thời là từ trưa đến sáng hôm sau.", "Ni-tát-kỳ", "Điều về ăn uống", "Luật", "Đức Phật"),
    (3, "Tỳ kheo nên sống đơn giản, tri túc, ít dục, hài lòng với những gì có được.", "Giáo giới", "Về lối sống", "Luật", "Đức Phật"),
    (4, "Tâm có 89 loại, chia thành thiện tâm, bất thiện tâm, và vô ký tâm.", "Tâm luận", "Phân loại tâm", "Luận", "Thích Xá Lợi Phất"),
    (4, "Tâm sở có 52 loại, bao gồm biến hành, biệt cảnh, thiện, phiền não, bất định.", "Tâm sở luận", "52 tâm sở", "Luận", "Thích Xá Lợi Phất"),
    (4, "Nghiệp có 4 loại: thiện nghiệp, bất thiện nghiệp, vô ký nghiệp, và hỗn hợp nghiệp.", "Nghiệp luận", "Phân loại nghiệp", "Luận", "Thích Xá Lợi Phất"),
    (0, "Thiền định là phương pháp tu tập để đạt được tâm an tịnh và trí tuệ sáng suốt.", "Phẩm Thiền", "Về thiền định", "Kinh", "Thích Nhất Hạnh"),
    (0, "Từ bi là tình thương vô điều kiện dành cho tất cả chúng sinh, không phân biệt kẻ thù hay bạn bè.", "Phẩm Từ Bi", "Về lòng từ", "Sách", "Thích Minh Châu"),
    (3, "Giới luật không phải để trói buộc mà để giải thoát, giúp con người sống hạnh phúc và an lạc.", "Tổng luận", "Ý nghĩa giới luật", "Luận", "Thích Trí Quang"),
    (2, "Chánh niệm là sự tỉnh thức trong từng khoảnh khắc, biết rõ những gì đang xảy ra trong thân và tâm.", "Tứ niệm xứ", "Chánh niệm", "Kinh", "Đức Phật"),
)


class BookStatement(BaseModel):
    number: int = 0
    content: str = ""


class BookChapter(BaseModel):
    number: int = 1
    statements: list[BookStatement] = Field(default_factory=list)

    @field_validator("number", mode="before")
    @classmethod
    def parse_number(cls, v: Any) -> int:
        """Chapter numbers arrive as strings; anything non-numeric becomes 1."""
        try:
            return int(str(v).strip())
        except (TypeError, ValueError):
            return 1


class Book(BaseModel):
    book_name: str = ""
    book_type: str = ""
    chapters: list[BookChapter] = Field(default_factory=list)


class BookExport(BaseModel):
    """Root of a JSON book export: {"Sách": [book, ...]}."""

    model_config = ConfigDict(populate_by_name=True)

    books: list[Book] = Field(default_factory=list, alias="Sách")


def load_book_export(path: Path) -> BookExport:
    """Read and validate a JSON book export."""
    with path.open(encoding="utf-8") as f:
        return BookExport.model_validate(json.load(f))


def _clip(value: str | None, limit: int) -> str | None:
    if value is None:
        return None
    return value[:limit]


class DatabaseSeeder:
    """Populates an empty database with sections and passages."""

    def __init__(self, db: AsyncSession, data_path: Path | None = None) -> None:
        self.db = db
        self.data_path = data_path

    async def has_data(self) -> bool:
        count = await self.db.scalar(select(func.count()).select_from(Section))
        return bool(count)

    async def seed(self) -> tuple[int, int]:
        """Seed when empty. Returns (sections_added, passages_added)."""
        if await self.has_data():
            logger.info("Database already contains data; skipping seeding")
            return 0, 0

        logger.info("Starting database seeding")
        try:
            if self.data_path is not None:
                sections, passages = self._from_export(load_book_export(self.data_path))
            else:
                sections, passages = self._sample_corpus()
            self.db.add_all(sections)
            await self.db.flush()
            for passage, section in passages:
                passage.section_id = section.id
            self.db.add_all([p for p, _ in passages])
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.exception("Database seeding failed")
            raise

        logger.info(
            "Database seeding completed: %d sections, %d passages",
            len(sections),
            len(passages),
        )
        return len(sections), len(passages)

    @staticmethod
    def _sample_corpus() -> tuple[list[Section], list[tuple[Passage, Section]]]:
        sections = [Section(name=name, description=desc) for name, desc in SAMPLE_SECTIONS]
        passages = [
            (
                Passage(
                    content=content,
                    from_ref=from_ref,
                    to_ref=to_ref,
                    type=type_,
                    author=author,
                ),
                sections[idx],
            )
            for idx, content, from_ref, to_ref, type_, author in SAMPLE_PASSAGES
        ]
        return sections, passages

    @staticmethod
    def _from_export(
        export: BookExport,
    ) -> tuple[list[Section], list[tuple[Passage, Section]]]:
        sections: list[Section] = []
        passages: list[tuple[Passage, Section]] = []
        for book in export.books:
            section = Section(
                name=_clip(book.book_name, SECTION_NAME_MAX_LENGTH) or "",
                description=_clip(book.book_type or None, SECTION_DESCRIPTION_MAX_LENGTH),
            )
            sections.append(section)
            for chapter in book.chapters:
                for statement in chapter.statements:
                    if not statement.content.strip():
                        continue
                    passage = Passage(
                        content=_clip(statement.content, PASSAGE_CONTENT_MAX_LENGTH),
                        from_ref=_clip(f"Chương {chapter.number}", PASSAGE_LOCATOR_MAX_LENGTH),
                        to_ref=_clip(f"Câu {statement.number}", PASSAGE_LOCATOR_MAX_LENGTH),
                        type=_clip(book.book_type or None, PASSAGE_TYPE_MAX_LENGTH),
                    )
                    passages.append((passage, section))
        return sections, passages
