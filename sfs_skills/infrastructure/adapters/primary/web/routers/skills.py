"""
Skill catalog API endpoints.

Read-only REST API over the loaded skill pack:
- list and search skills
- fetch one skill (parsed or as the raw document)
- lint report for the whole pack
- validate a document without adding it to the pack
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from sfs_skills.application.services.skill_catalog import SkillCatalog
from sfs_skills.domain.exceptions import SkillNotFoundError
from sfs_skills.domain.model.skill import Skill
from sfs_skills.infrastructure.skill.validator import SkillValidator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/skills", tags=["Skills"])


def get_catalog(request: Request) -> SkillCatalog:
    """Catalog loaded by the app factory."""
    return request.app.state.catalog


# === Pydantic Models ===


class SkillSummaryResponse(BaseModel):
    """Schema for a skill in listings."""

    name: str
    description: str
    title: str | None = None
    source: str


class SkillResponse(SkillSummaryResponse):
    """Schema for a single skill."""

    file_path: str | None = None
    sections: list[str] = Field(default_factory=list)
    references: list[str] = Field(default_factory=list)
    referenced_by: list[str] = Field(default_factory=list)
    content: str


class SkillListResponse(BaseModel):
    """Schema for skill list response."""

    skills: list[SkillSummaryResponse]
    total: int


class ValidateRequest(BaseModel):
    """Schema for validating a document."""

    content: str = Field(..., description="Full skill document (front matter + body)")
    strict: bool = Field(False, description="Treat warnings as errors")


class ValidationIssueResponse(BaseModel):
    severity: str
    field: str
    message: str
    suggestion: str | None = None


class ValidateResponse(BaseModel):
    """Schema for validation results."""

    is_valid: bool
    skill_name: str | None = None
    errors: list[ValidationIssueResponse]
    warnings: list[ValidationIssueResponse]
    error_count: int
    warning_count: int


# === Helper Functions ===


def skill_to_response(skill: Skill, catalog: SkillCatalog) -> SkillResponse:
    """Convert domain Skill to response model."""
    related = catalog.related(skill.name)
    data: dict[str, Any] = skill.to_dict()
    data["references"] = related["references"]
    data["referenced_by"] = related["referenced_by"]
    return SkillResponse(**data)


# === Endpoints ===


@router.get("", response_model=SkillListResponse)
async def list_skills(
    q: str | None = Query(None, description="Keyword search over name, description and title"),
    limit: int | None = Query(None, ge=1, le=100, description="Maximum results"),
    catalog: SkillCatalog = Depends(get_catalog),
) -> SkillListResponse:
    """List skills, optionally filtered by a keyword query."""
    skills = catalog.search(q, limit=limit) if q else catalog.list_skills()
    if limit and not q:
        skills = skills[:limit]
    return SkillListResponse(
        skills=[SkillSummaryResponse(**s.to_summary_dict()) for s in skills],
        total=len(skills),
    )


@router.get("/report")
async def get_report(catalog: SkillCatalog = Depends(get_catalog)) -> dict[str, Any]:
    """Lint report from the last catalog load."""
    return catalog.report.to_dict()


@router.post("/validate", response_model=ValidateResponse)
async def validate_skill(
    data: ValidateRequest,
    catalog: SkillCatalog = Depends(get_catalog),
) -> ValidateResponse:
    """
    Validate a skill document.

    Invalid documents still return 200; the body carries the verdict.
    """
    validator = SkillValidator(
        strict=data.strict or catalog.strict,
        name_prefix=catalog.validator.name_prefix,
    )
    result = validator.validate_content(data.content)
    return ValidateResponse(**result.to_dict())


@router.get("/{name}", response_model=SkillResponse)
async def get_skill(name: str, catalog: SkillCatalog = Depends(get_catalog)) -> SkillResponse:
    """Get a skill by name."""
    try:
        skill = catalog.get(name)
    except SkillNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return skill_to_response(skill, catalog)


@router.get("/{name}/raw", response_class=PlainTextResponse)
async def get_skill_raw(name: str, catalog: SkillCatalog = Depends(get_catalog)):
    """Get the skill document as stored on disk."""
    try:
        text = catalog.get_raw(name)
    except SkillNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except OSError as e:
        logger.error(f"Failed to read skill '{name}': {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to read skill '{name}'",
        ) from e
    return PlainTextResponse(text, media_type="text/markdown; charset=utf-8")
