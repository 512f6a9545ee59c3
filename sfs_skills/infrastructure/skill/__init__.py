"""
Skill infrastructure components.

This module provides infrastructure-level components for skill documents:
- MarkdownParser: Parse skill documents (YAML front matter + Markdown)
- SkillValidator: Check one document against the SFS format
- FileSystemSkillScanner: Scan directories for skill documents
"""

from sfs_skills.infrastructure.skill.filesystem_scanner import (
    FileSystemSkillScanner,
    ScanResult,
    SkillFileInfo,
)
from sfs_skills.infrastructure.skill.markdown_parser import (
    MarkdownParseError,
    MarkdownParser,
    SkillMarkdown,
)
from sfs_skills.infrastructure.skill.validator import (
    SkillValidationError,
    SkillValidator,
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    "MarkdownParser",
    "MarkdownParseError",
    "SkillMarkdown",
    "SkillValidator",
    "SkillValidationError",
    "ValidationIssue",
    "ValidationResult",
    "FileSystemSkillScanner",
    "ScanResult",
    "SkillFileInfo",
]
