"""Domain exceptions for the SFS skill pack."""

from sfs_skills.domain.exceptions.skill_exceptions import (
    DuplicateSkillError,
    SkillNotFoundError,
    SkillPackError,
)

__all__ = [
    "SkillPackError",
    "SkillNotFoundError",
    "DuplicateSkillError",
]
