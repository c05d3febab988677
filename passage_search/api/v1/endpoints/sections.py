"""Sections API: list sections and fetch one by id."""

from typing import Annotated

from fastapi import APIRouter, Depends

from passage_search.api.v1.dependencies import get_section_repo
from passage_search.domain.exceptions import ResourceNotFoundException
from passage_search.infrastructure.persistence.repositories import SectionRepository
from passage_search.schemas.section import SectionResponse

router = APIRouter()


@router.get("", response_model=list[SectionResponse])
async def list_sections(
    section_repo: Annotated[SectionRepository, Depends(get_section_repo)],
) -> list[SectionResponse]:
    """All sections ordered by name."""
    return [SectionResponse.model_validate(s) for s in await section_repo.get_all()]


@router.get("/{section_id}", response_model=SectionResponse)
async def get_section(
    section_id: int,
    section_repo: Annotated[SectionRepository, Depends(get_section_repo)],
) -> SectionResponse:
    section = await section_repo.get_by_id(section_id)
    if section is None:
        raise ResourceNotFoundException("section", section_id)
    return SectionResponse.model_validate(section)
