"""
Skill document validator.

Checks a single skill document against the SFS document format:

- name: required, 1-64 characters, kebab-case, carries the ``sfs-`` prefix
- description: required one-sentence summary, 1-1024 characters
- no front-matter fields besides ``name`` and ``description``
- a non-empty Markdown body

Collection-level checks (unique names, cross references) live in
SkillCatalog, which runs this validator per document.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from sfs_skills.infrastructure.skill.markdown_parser import (
    MarkdownParseError,
    MarkdownParser,
    SkillMarkdown,
)

SKILL_FILE_NAME = "SKILL.md"


@dataclass
class ValidationIssue:
    """
    A single validation error or warning.

    Attributes:
        severity: "error" or "warning"
        field: The field that failed validation
        message: Human-readable error message
        suggestion: Optional suggestion for fixing the error
    """

    severity: str  # "error" | "warning"
    field: str
    message: str
    suggestion: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "severity": self.severity,
            "field": self.field,
            "message": self.message,
            "suggestion": self.suggestion,
        }


@dataclass
class ValidationResult:
    """
    Result of validating one skill document.

    Attributes:
        is_valid: Whether the skill passes validation (no errors)
        errors: List of validation errors
        warnings: List of validation warnings
        skill_name: Name of the validated skill (if parsed)
        file_path: Document path (None for in-memory content)
        parsed: Parsed document, None when parsing failed
    """

    is_valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)
    skill_name: str | None = None
    file_path: str | None = None
    parsed: SkillMarkdown | None = field(default=None, repr=False, compare=False)

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def add_error(self, issue: ValidationIssue) -> None:
        """Record an error found after the initial validation pass."""
        self.errors.append(issue)
        self.is_valid = False

    def add_warning(self, issue: ValidationIssue, strict: bool = False) -> None:
        """Record a warning, as an error in strict mode."""
        if strict:
            issue.severity = "error"
            self.add_error(issue)
        else:
            self.warnings.append(issue)

    def format(self) -> str:
        """
        Format validation result as human-readable string.

        Returns:
            Formatted validation result
        """
        lines = []

        if self.skill_name:
            lines.append(f"Validating: {self.skill_name}")

        if self.has_errors:
            lines.append("Errors:")
            for err in self.errors:
                lines.append(f"  [{err.field}] {err.message}")
                if err.suggestion:
                    lines.append(f"    Suggestion: {err.suggestion}")

        if self.has_warnings:
            lines.append("Warnings:")
            for warn in self.warnings:
                lines.append(f"  [{warn.field}] {warn.message}")
                if warn.suggestion:
                    lines.append(f"    Suggestion: {warn.suggestion}")

        if not self.has_errors and not self.has_warnings:
            lines.append("Valid")
        elif self.has_errors:
            lines.append(
                f"Result: Invalid ({len(self.errors)} errors, {len(self.warnings)} warnings)"
            )
        else:
            lines.append(f"Result: Valid with warnings ({len(self.warnings)} warnings)")

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API and JSON output."""
        return {
            "is_valid": self.is_valid,
            "skill_name": self.skill_name,
            "file_path": self.file_path,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
        }


class SkillValidationError(Exception):
    """
    Exception raised when a skill is required to be valid and is not.

    Attributes:
        skill_id: The ID or name of the skill that failed
        errors: List of validation errors
    """

    def __init__(self, skill_id: str, errors: list[ValidationIssue]) -> None:
        self.skill_id = skill_id
        self.errors = errors
        error_messages = [f"[{e.field}] {e.message}" for e in errors]
        super().__init__(f"Skill '{skill_id}' failed validation: {'; '.join(error_messages)}")


class SkillValidator:
    """
    SFS skill document validator.

    Example:
        validator = SkillValidator()
        result = validator.validate_file(Path("./sfs-readme"))
        if not result.is_valid:
            print(result.format())
    """

    # Lowercase alphanumeric words joined by single hyphens
    NAME_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

    NAME_MAX_LENGTH = 64
    DESCRIPTION_MAX_LENGTH = 1024

    RECOGNIZED_FIELDS = ("name", "description")

    # Sentence end followed by more text; ignores "e.g." style abbreviations
    _SENTENCE_BREAK = re.compile(r"(?<!\b[a-z]\.[a-z])(?<!\betc)[.!?]\s+(?=[A-Z0-9`\"'(])")

    def __init__(self, strict: bool = False, name_prefix: str = "sfs-") -> None:
        """
        Initialize the validator.

        Args:
            strict: If True, warnings are treated as errors
            name_prefix: Prefix every skill name must carry ("" disables the check)
        """
        self.strict = strict
        self.name_prefix = name_prefix
        self.parser = MarkdownParser(name_prefix=name_prefix or "sfs-")

    def validate_file(self, skill_path: Path) -> ValidationResult:
        """
        Validate a skill directory (containing SKILL.md) or a Markdown file.

        Args:
            skill_path: Path to the skill directory or document

        Returns:
            ValidationResult with errors and warnings
        """
        skill_path = Path(skill_path)
        if skill_path.is_dir():
            skill_md = skill_path / SKILL_FILE_NAME
            expected_name = skill_path.name
        else:
            skill_md = skill_path
            expected_name = None

        if not skill_md.is_file():
            return ValidationResult(
                is_valid=False,
                errors=[
                    ValidationIssue(
                        severity="error",
                        field="file",
                        message=f"{SKILL_FILE_NAME} not found"
                        if skill_path.is_dir()
                        else f"File not found: {skill_md}",
                        suggestion=f"Create a {SKILL_FILE_NAME} file in the skill directory",
                    )
                ],
                file_path=str(skill_md),
            )

        try:
            parsed = self.parser.parse_file(str(skill_md))
        except MarkdownParseError as e:
            return self._parse_failure(e, str(skill_md))

        return self._validate_parsed(parsed, str(skill_md), expected_name)

    def validate_content(self, content: str, skill_name: str | None = None) -> ValidationResult:
        """
        Validate skill document content directly (without file).

        Args:
            content: Raw document content
            skill_name: Optional skill name for error messages

        Returns:
            ValidationResult
        """
        try:
            parsed = self.parser.parse(content)
        except MarkdownParseError as e:
            result = self._parse_failure(e, None)
            result.skill_name = skill_name
            return result

        return self._validate_parsed(parsed, None, None)

    def validate_parsed(
        self, parsed: SkillMarkdown, file_path: str | None = None, expected_name: str | None = None
    ) -> ValidationResult:
        """Validate an already parsed document."""
        return self._validate_parsed(parsed, file_path, expected_name)

    def _parse_failure(self, error: MarkdownParseError, file_path: str | None) -> ValidationResult:
        return ValidationResult(
            is_valid=False,
            errors=[ValidationIssue(severity="error", field="format", message=str(error))],
            file_path=file_path,
        )

    def _validate_parsed(
        self, parsed: SkillMarkdown, file_path: str | None, expected_name: str | None
    ) -> ValidationResult:
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []
        frontmatter = parsed.frontmatter

        self._validate_name(frontmatter.get("name"), errors)
        self._validate_description(frontmatter.get("description"), errors, warnings)
        self._check_unknown_fields(frontmatter, warnings)

        if not parsed.content:
            warnings.append(
                ValidationIssue(
                    severity="warning",
                    field="content",
                    message="Markdown body is empty",
                    suggestion="Add the instructions the assistant should follow",
                )
            )

        if expected_name and parsed.name and parsed.name != expected_name:
            warnings.append(
                ValidationIssue(
                    severity="warning",
                    field="name",
                    message=f"name '{parsed.name}' does not match directory '{expected_name}'",
                    suggestion=f"Rename the directory to '{parsed.name}'",
                )
            )

        # In strict mode, warnings become errors
        if self.strict:
            for warning in warnings:
                warning.severity = "error"
            errors.extend(warnings)
            warnings = []

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            skill_name=parsed.name or None,
            file_path=file_path,
            parsed=parsed,
        )

    def _validate_name(self, name: Any, errors: list[ValidationIssue]) -> None:
        """Validate the name field."""
        if name is None or (isinstance(name, str) and not name.strip()):
            errors.append(
                ValidationIssue(
                    severity="error",
                    field="name",
                    message="name is required",
                    suggestion=f"Add 'name: {self.name_prefix}my-skill' to the front matter",
                )
            )
            return

        if not isinstance(name, str):
            errors.append(
                ValidationIssue(
                    severity="error",
                    field="name",
                    message=f"name must be a string, got {type(name).__name__}",
                )
            )
            return

        if len(name) > self.NAME_MAX_LENGTH:
            errors.append(
                ValidationIssue(
                    severity="error",
                    field="name",
                    message=f"name must be 1-{self.NAME_MAX_LENGTH} characters, got {len(name)}",
                    suggestion=f"Shorten the name to max {self.NAME_MAX_LENGTH} characters",
                )
            )

        if not self.NAME_PATTERN.match(name):
            errors.append(
                ValidationIssue(
                    severity="error",
                    field="name",
                    message=f"name '{name}' must be lowercase kebab-case, "
                    "no leading/trailing/consecutive hyphens",
                    suggestion=f"Use format: '{self.name_prefix}my-skill-name'",
                )
            )

        if self.name_prefix:
            if not name.startswith(self.name_prefix):
                errors.append(
                    ValidationIssue(
                        severity="error",
                        field="name",
                        message=f"name '{name}' must start with '{self.name_prefix}'",
                        suggestion=f"Rename to '{self.name_prefix}{name}'",
                    )
                )
            elif name == self.name_prefix.rstrip("-") or name == self.name_prefix:
                errors.append(
                    ValidationIssue(
                        severity="error",
                        field="name",
                        message=f"name '{name}' has nothing after the '{self.name_prefix}' prefix",
                    )
                )

    def _validate_description(
        self,
        description: Any,
        errors: list[ValidationIssue],
        warnings: list[ValidationIssue],
    ) -> None:
        """Validate the description field."""
        if description is None or (isinstance(description, str) and not description.strip()):
            errors.append(
                ValidationIssue(
                    severity="error",
                    field="description",
                    message="description is required and cannot be empty",
                    suggestion="Add a one-sentence summary of what the skill scaffolds",
                )
            )
            return

        if not isinstance(description, str):
            errors.append(
                ValidationIssue(
                    severity="error",
                    field="description",
                    message=f"description must be a string, got {type(description).__name__}",
                )
            )
            return

        if len(description) > self.DESCRIPTION_MAX_LENGTH:
            errors.append(
                ValidationIssue(
                    severity="error",
                    field="description",
                    message=f"description must be 1-{self.DESCRIPTION_MAX_LENGTH} characters, "
                    f"got {len(description)}",
                    suggestion=f"Keep description concise (max {self.DESCRIPTION_MAX_LENGTH} "
                    "characters)",
                )
            )

        text = description.strip()
        if "\n" in text:
            warnings.append(
                ValidationIssue(
                    severity="warning",
                    field="description",
                    message="description spans multiple lines",
                    suggestion="Write the description as a single line",
                )
            )
        elif self._SENTENCE_BREAK.search(text):
            warnings.append(
                ValidationIssue(
                    severity="warning",
                    field="description",
                    message="description should be a single sentence",
                    suggestion="Move details into the Markdown body",
                )
            )

    def _check_unknown_fields(
        self, frontmatter: dict[str, Any], warnings: list[ValidationIssue]
    ) -> None:
        """Warn about front matter fields other than name and description."""
        for field_name in frontmatter:
            if field_name not in self.RECOGNIZED_FIELDS:
                warnings.append(
                    ValidationIssue(
                        severity="warning",
                        field="frontmatter",
                        message=f"'{field_name}' is not a recognized front matter field",
                        suggestion="Only 'name' and 'description' are read; move other "
                        "details into the body",
                    )
                )
