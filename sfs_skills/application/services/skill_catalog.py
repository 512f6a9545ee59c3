"""
Skill catalog.

Loads a collection of skill documents, validates each one and checks the
properties that only hold across the collection:

- skill names are unique
- skills mentioned in a body (``sfs-*``) exist in the collection

The loaded catalog answers lookups, listings and keyword searches for the
CLI and the HTTP API.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from sfs_skills.configuration.config import Settings
from sfs_skills.domain.exceptions import DuplicateSkillError, SkillNotFoundError
from sfs_skills.domain.model.skill import Skill
from sfs_skills.domain.model.skill_source import SkillSource
from sfs_skills.infrastructure.skill.filesystem_scanner import (
    FileSystemSkillScanner,
    ScanResult,
    SkillFileInfo,
)
from sfs_skills.infrastructure.skill.markdown_parser import SkillMarkdown
from sfs_skills.infrastructure.skill.validator import (
    SkillValidationError,
    SkillValidator,
    ValidationIssue,
    ValidationResult,
)

logger = logging.getLogger(__name__)


@dataclass
class LoadedSkill:
    """
    A skill document together with its validation outcome.

    Attributes:
        file_info: Where the document was found
        result: Validation result (holds the parsed document when parsing worked)
        skill: Indexed entity, None when the document has no usable name
    """

    file_info: SkillFileInfo
    result: ValidationResult
    skill: Skill | None = None


@dataclass
class PackReport:
    """
    Lint report for a whole collection.

    Attributes:
        results: Per-document validation results, in discovery order
        duplicates: Names declared more than once, mapped to the declaring files
        scan_errors: Directories that could not be scanned
    """

    results: list[ValidationResult] = field(default_factory=list)
    duplicates: dict[str, list[str]] = field(default_factory=dict)
    scan_errors: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def valid(self) -> int:
        return sum(1 for r in self.results if r.is_valid)

    @property
    def invalid(self) -> int:
        return self.total - self.valid

    @property
    def warning_count(self) -> int:
        return sum(len(r.warnings) for r in self.results)

    @property
    def is_valid(self) -> bool:
        return self.invalid == 0 and not self.scan_errors

    def format(self, quiet: bool = False) -> str:
        """Format the report for terminal output."""
        lines = []

        for error in self.scan_errors:
            lines.append(f"  ✗ [SCAN] {error}")

        for result in self.results:
            label = result.skill_name or result.file_path or "<content>"
            status = "PASS" if result.is_valid else "FAIL"
            status_mark = "✓" if result.is_valid else "✗"
            if quiet and result.is_valid:
                continue
            lines.append(f"  {status_mark} [{status}] {label}")
            for err in result.errors:
                lines.append(f"      Error: [{err.field}] {err.message}")
            for warn in result.warnings:
                lines.append(f"      Warning: [{warn.field}] {warn.message}")

        lines.append("")
        lines.append("Summary:")
        lines.append(f"  Total:    {self.total}")
        lines.append(f"  Passed:   {self.valid}")
        lines.append(f"  Failed:   {self.invalid}")
        lines.append(f"  Warnings: {self.warning_count}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API and JSON output."""
        return {
            "is_valid": self.is_valid,
            "total": self.total,
            "valid": self.valid,
            "invalid": self.invalid,
            "duplicates": {name: list(paths) for name, paths in self.duplicates.items()},
            "scan_errors": list(self.scan_errors),
            "results": [r.to_dict() for r in self.results],
        }


class SkillCatalog:
    """
    Indexed, validated collection of skill documents.

    Example:
        catalog = SkillCatalog(scanner=FileSystemSkillScanner())
        report = catalog.load(Path("/project"))
        print(report.format())
        readme = catalog.get("sfs-readme")
    """

    def __init__(
        self,
        scanner: FileSystemSkillScanner | None = None,
        validator: SkillValidator | None = None,
        allow_overrides: bool = True,
    ) -> None:
        """
        Initialize the catalog.

        Args:
            scanner: Scanner used by load() (optional)
            validator: Per-document validator (optional)
            allow_overrides: Let a higher-priority source replace a skill with
                the same name instead of reporting a duplicate
        """
        self.scanner = scanner or FileSystemSkillScanner()
        self.validator = validator or SkillValidator()
        self.allow_overrides = allow_overrides

        self._skills: dict[str, Skill] = {}
        self._loaded: list[LoadedSkill] = []
        self._report = PackReport()

    @classmethod
    def from_settings(cls, settings: Settings) -> "SkillCatalog":
        """Build a catalog wired from application settings."""
        return cls(
            scanner=FileSystemSkillScanner(
                skill_dirs=list(settings.skills_dirs),
                include_builtin=settings.include_builtin,
            ),
            validator=SkillValidator(strict=settings.strict, name_prefix=settings.name_prefix),
            allow_overrides=settings.allow_overrides,
        )

    @property
    def report(self) -> PackReport:
        """Report from the last load."""
        return self._report

    @property
    def strict(self) -> bool:
        return self.validator.strict

    def __len__(self) -> int:
        return len(self._skills)

    def __contains__(self, name: object) -> bool:
        return name in self._skills

    def load(self, base_path: Path, include_builtin: bool | None = None) -> PackReport:
        """
        Scan every configured source and load the result.

        Args:
            base_path: Project directory (holds .sfs/skills/)
            include_builtin: Override the scanner's builtin setting

        Returns:
            PackReport for the loaded collection
        """
        scan_result = self.scanner.scan(Path(base_path), include_builtin=include_builtin)
        return self.load_scan(scan_result)

    def load_paths(self, paths: Iterable[Path], include_builtin: bool = False) -> PackReport:
        """
        Load explicit paths as one collection.

        Each path may be a skill directory, a Markdown file, or a directory
        holding several skills. With include_builtin the builtin pack is
        loaded underneath, so references to builtin skills resolve.
        """
        scan_result = self.scanner.scan_builtin_only() if include_builtin else ScanResult()
        for path in paths:
            path = Path(path)
            if path.is_file():
                is_directory_form = path.name == FileSystemSkillScanner.SKILL_FILE_NAME
                scan_result.skills.append(
                    SkillFileInfo(
                        file_path=path.resolve(),
                        skill_dir=path.resolve().parent,
                        skill_id=path.resolve().parent.name if is_directory_form else path.stem,
                        source=SkillSource.CUSTOM,
                        is_directory_form=is_directory_form,
                    )
                )
            elif path.is_dir():
                scan_result.merge(self.scanner.scan_directory(path, SkillSource.CUSTOM))
            else:
                scan_result.errors.append(f"Path not found: {path}")
        return self.load_scan(scan_result)

    def load_scan(self, scan_result: ScanResult) -> PackReport:
        """
        Validate and index the documents of a scan.

        Documents are processed lowest priority first, so with overrides
        enabled a project skill replaces a builtin one of the same name.
        """
        self._skills = {}
        self._loaded = []
        report = PackReport(scan_errors=list(scan_result.errors))
        owners: dict[str, LoadedSkill] = {}

        for file_info in scan_result.skills:
            result = self.validator.validate_file(file_info.validation_path)
            if result.file_path is None:
                result.file_path = str(file_info.file_path)
            loaded = LoadedSkill(file_info=file_info, result=result)
            self._loaded.append(loaded)
            report.results.append(result)

            parsed = result.parsed
            if parsed is None:
                logger.warning(f"Failed to parse {file_info.file_path}")
                continue

            name = parsed.name
            if not name:
                continue

            loaded.skill = self._create_skill(parsed, file_info)
            owner = owners.get(name)
            if owner is None:
                owners[name] = loaded
                self._skills[name] = loaded.skill
                continue

            if self.allow_overrides and file_info.source.priority > owner.file_info.source.priority:
                logger.info(
                    f"Skill '{name}' from {file_info.source} overrides {owner.file_info.source} "
                    f"({owner.file_info.file_path})"
                )
                owners[name] = loaded
                self._skills[name] = loaded.skill
                continue

            paths = report.duplicates.setdefault(name, [str(owner.file_info.file_path)])
            paths.append(str(file_info.file_path))
            duplicate = DuplicateSkillError(name, [paths[0], str(file_info.file_path)])
            result.add_error(
                ValidationIssue(
                    severity="error",
                    field="name",
                    message=str(duplicate),
                    suggestion="Give each skill a unique name",
                )
            )

        self._check_references(report)
        self._report = report

        logger.info(
            f"Loaded {len(self._skills)} skills "
            f"({report.valid}/{report.total} documents valid, {len(report.duplicates)} duplicate names)"
        )
        return report

    def require_valid(self) -> None:
        """
        Raise if the last load produced any invalid document.

        Raises:
            SkillValidationError: For the first invalid document
        """
        for result in self._report.results:
            if not result.is_valid:
                raise SkillValidationError(
                    result.skill_name or result.file_path or "<unknown>", result.errors
                )

    def get(self, name: str) -> Skill:
        """
        Get a skill by name.

        Raises:
            SkillNotFoundError: If no skill has this name
        """
        try:
            return self._skills[name]
        except KeyError:
            raise SkillNotFoundError(name) from None

    def get_raw(self, name: str) -> str:
        """Return the document text of a skill as stored on disk."""
        skill = self.get(name)
        if skill.file_path:
            return Path(skill.file_path).read_text(encoding="utf-8")
        return skill.content

    def list_skills(self) -> list[Skill]:
        """All indexed skills sorted by name."""
        return [self._skills[name] for name in sorted(self._skills)]

    def search(self, query: str, limit: int | None = None) -> list[Skill]:
        """
        Keyword search over name, description and title.

        A query word matches a skill word it prefixes, case-insensitively.
        Results are ranked by the number of matching query words, then name.
        """
        words = {w.lower() for w in query.split() if w.strip()}
        if not words:
            return self.list_skills()[:limit] if limit is not None else self.list_skills()

        scored: list[tuple[int, str, Skill]] = []
        for skill in self._skills.values():
            tokens = skill.search_tokens()
            score = sum(1 for w in words if any(t.startswith(w) for t in tokens))
            if score:
                scored.append((-score, skill.name, skill))

        scored.sort(key=lambda item: (item[0], item[1]))
        matches = [skill for _, _, skill in scored]
        return matches[:limit] if limit is not None else matches

    def related(self, name: str) -> dict[str, list[str]]:
        """
        Skills a skill points to and skills pointing to it.

        Raises:
            SkillNotFoundError: If no skill has this name
        """
        skill = self.get(name)
        return {
            "references": [ref for ref in skill.references if ref in self._skills],
            "referenced_by": sorted(
                other.name for other in self._skills.values() if name in other.references
            ),
        }

    def _check_references(self, report: PackReport) -> None:
        """Warn about sfs-* mentions that do not resolve to a loaded skill."""
        for loaded in self._loaded:
            if loaded.skill is None:
                continue
            for ref in loaded.skill.references:
                if ref not in self._skills:
                    loaded.result.add_warning(
                        ValidationIssue(
                            severity="warning",
                            field="references",
                            message=f"references unknown skill '{ref}'",
                            suggestion="Fix the name or add the missing skill to the pack",
                        ),
                        strict=self.strict,
                    )

    def _create_skill(self, parsed: SkillMarkdown, file_info: SkillFileInfo) -> Skill:
        return Skill(
            name=parsed.name,
            description=parsed.description,
            content=parsed.content,
            source=file_info.source,
            file_path=str(file_info.file_path),
            title=parsed.title,
            sections=list(parsed.sections),
            references=list(parsed.references),
            frontmatter=dict(parsed.frontmatter),
        )
