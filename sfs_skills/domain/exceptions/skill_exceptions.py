"""
Skill pack domain exceptions.

Exception Hierarchy:
    SkillPackError (base)
    ├── SkillNotFoundError    - No skill with the requested name
    └── DuplicateSkillError   - Two documents declare the same name

Usage:
    from sfs_skills.domain.exceptions import SkillNotFoundError

    try:
        skill = catalog.get("sfs-readme")
    except SkillNotFoundError as e:
        print(e.skill_name)
"""

from typing import Any, Optional


class SkillPackError(Exception):
    """
    Base exception for skill pack errors.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class SkillNotFoundError(SkillPackError):
    """Raised when a skill cannot be found by name."""

    def __init__(self, skill_name: str, message: Optional[str] = None) -> None:
        self.skill_name = skill_name
        msg = message or f"Skill '{skill_name}' not found"
        super().__init__(msg, details={"skill_name": skill_name})


class DuplicateSkillError(SkillPackError):
    """
    Raised when two skill documents declare the same name.

    Attributes:
        skill_name: The conflicting name
        paths: Files declaring it, in discovery order
    """

    def __init__(self, skill_name: str, paths: list[str]) -> None:
        self.skill_name = skill_name
        self.paths = list(paths)
        msg = f"Skill name '{skill_name}' is declared by more than one document: " + ", ".join(
            self.paths
        )
        super().__init__(msg, details={"skill_name": skill_name, "paths": self.paths})
