"""
File system skill scanner.

Scans directories for skill documents.

Supported layouts:
- {root}/{skill-name}/SKILL.md (directory form, searched recursively)
- {root}/{skill-name}.md (flat form, top level of a scanned root only)

Supported sources, lowest priority first:
- sfs_skills/builtin/skills/ (builtin, shipped with the package)
- extra directories from settings or the command line (custom)
- {project}/.sfs/skills/ (project)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from sfs_skills.domain.model.skill_source import SkillSource

logger = logging.getLogger(__name__)


@dataclass
class SkillFileInfo:
    """
    Information about a discovered skill document.

    Attributes:
        file_path: Path to the Markdown document
        skill_dir: Directory containing the skill (parent of the document)
        skill_id: Identifier derived from the directory or file name
        source: Source the document was found in
        is_directory_form: True for {skill}/SKILL.md, False for flat *.md
    """

    file_path: Path
    skill_dir: Path
    skill_id: str
    source: SkillSource = SkillSource.CUSTOM
    is_directory_form: bool = True

    @property
    def is_builtin(self) -> bool:
        return self.source == SkillSource.BUILTIN

    @property
    def validation_path(self) -> Path:
        """Path to hand to SkillValidator.validate_file."""
        return self.skill_dir if self.is_directory_form else self.file_path


@dataclass
class ScanResult:
    """
    Result of scanning directories for skills.

    Attributes:
        skills: Discovered skill documents, lowest priority first
        errors: Paths that failed to scan
        scanned_dirs: Directories that were scanned
    """

    skills: list[SkillFileInfo] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    scanned_dirs: set[str] = field(default_factory=set)

    @property
    def count(self) -> int:
        return len(self.skills)

    def merge(self, other: "ScanResult") -> None:
        self.skills.extend(other.skills)
        self.errors.extend(other.errors)
        self.scanned_dirs.update(other.scanned_dirs)


class FileSystemSkillScanner:
    """
    Scanner for skill documents in the file system.

    Example:
        scanner = FileSystemSkillScanner(skill_dirs=["./team-skills"])
        result = scanner.scan(Path("/project"))
        for skill in result.skills:
            print(f"Found skill: {skill.skill_id} at {skill.file_path}")
    """

    PROJECT_SKILL_DIRS = [
        ".sfs/skills",
    ]

    SKILL_FILE_NAME = "SKILL.md"

    # Markdown files in a skills root that are never skills
    IGNORED_FILE_NAMES = {"readme.md", "changelog.md", "license.md", "contributing.md"}

    # Hidden directories that may still hold skills
    ALLOWED_HIDDEN_DIRS = {".sfs"}

    def __init__(
        self,
        skill_dirs: list[str] | None = None,
        include_builtin: bool = True,
        builtin_skills_path: Path | None = None,
    ) -> None:
        """
        Initialize the scanner.

        Args:
            skill_dirs: Extra directories to scan (absolute, or relative to the base path)
            include_builtin: Whether to include the builtin skill pack
            builtin_skills_path: Custom path to the builtin skills directory
        """
        self.skill_dirs = list(skill_dirs or [])
        self.include_builtin = include_builtin
        self._builtin_skills_path = builtin_skills_path

    @property
    def builtin_skills_path(self) -> Path:
        """Get the path to the builtin skills directory."""
        if self._builtin_skills_path:
            return self._builtin_skills_path
        from sfs_skills.builtin import get_builtin_skills_path

        return get_builtin_skills_path()

    def scan(self, base_path: Path, include_builtin: bool | None = None) -> ScanResult:
        """
        Scan every source for skill documents.

        Scans in order (later sources can override earlier ones):
        1. Builtin skills (lowest priority)
        2. Extra directories
        3. Project directories (.sfs/skills/) (highest priority)

        Args:
            base_path: Project directory
            include_builtin: Override instance setting for the builtin pack

        Returns:
            ScanResult with discovered skills and any errors
        """
        result = ScanResult()

        if not base_path.exists():
            result.errors.append(f"Base path does not exist: {base_path}")
            return result

        base_path = base_path.resolve()

        should_include_builtin = (
            include_builtin if include_builtin is not None else self.include_builtin
        )
        if should_include_builtin:
            result.merge(self.scan_builtin_only())

        for extra_dir in self.skill_dirs:
            directory = Path(extra_dir).expanduser()
            if not directory.is_absolute():
                directory = base_path / directory
            self._scan_root(directory, SkillSource.CUSTOM, result, required=True)

        for pattern in self.PROJECT_SKILL_DIRS:
            self._scan_root(base_path / pattern, SkillSource.PROJECT, result, required=False)

        logger.debug(f"Scanned {len(result.scanned_dirs)} directories, found {result.count} skills")
        return result

    def scan_builtin_only(self) -> ScanResult:
        """Scan only the builtin skill pack."""
        result = ScanResult()

        builtin_path = self.builtin_skills_path
        if not builtin_path.is_dir():
            logger.debug(f"Builtin skills directory does not exist: {builtin_path}")
            return result

        self._scan_root(builtin_path, SkillSource.BUILTIN, result, required=False)
        return result

    def scan_directory(
        self, directory: Path, source: SkillSource = SkillSource.CUSTOM
    ) -> ScanResult:
        """
        Scan a specific directory for skill documents.

        Args:
            directory: Directory to scan
            source: Source to tag discovered skills with

        Returns:
            ScanResult with discovered skills
        """
        result = ScanResult()

        if not directory.exists() or not directory.is_dir():
            result.errors.append(f"Invalid directory: {directory}")
            return result

        self._scan_root(directory, source, result, required=True)
        return result

    def find_skill(
        self, base_path: Path, skill_id: str, include_builtin: bool | None = None
    ) -> SkillFileInfo | None:
        """
        Find a specific skill by identifier.

        Returns:
            The highest-priority match, or None
        """
        result = self.scan(base_path, include_builtin=include_builtin)

        # Last match wins: scan order is lowest priority first
        found_skill = None
        for skill in result.skills:
            if skill.skill_id == skill_id:
                found_skill = skill

        return found_skill

    def _scan_root(
        self, directory: Path, source: SkillSource, result: ScanResult, required: bool
    ) -> None:
        """Scan one root: flat *.md files at the top, SKILL.md directories below."""
        if not directory.exists():
            if required:
                result.errors.append(f"Directory does not exist: {directory}")
            return

        if not directory.is_dir():
            result.errors.append(f"Not a directory: {directory}")
            return

        result.scanned_dirs.add(str(directory))

        try:
            direct_skill = directory / self.SKILL_FILE_NAME
            if direct_skill.is_file():
                # The root itself is a single skill
                result.skills.append(self._create_skill_info(direct_skill, source, True))
                return

            for item in sorted(directory.iterdir()):
                if item.is_file() and self._is_flat_skill_file(item):
                    result.skills.append(self._create_skill_info(item, source, False))

            self._scan_directory(directory, source, result, visited={directory.resolve()})
            logger.debug(f"Scanned {source} skill directory: {directory}")
        except PermissionError as e:
            result.errors.append(f"Permission denied: {directory} - {e}")
        except OSError as e:
            result.errors.append(f"Error scanning {directory}: {e}")

    def _scan_directory(
        self, directory: Path, source: SkillSource, result: ScanResult, visited: set[Path]
    ) -> None:
        """
        Recursively look for {directory}/{skill-name}/SKILL.md.

        Subdirectories that are not skills themselves are searched further
        to support grouped layouts such as skills/billing/sfs-stripe-billing/.
        Directories in visited (resolved paths) are not entered again.
        """
        try:
            items = sorted(directory.iterdir())
        except PermissionError as e:
            result.errors.append(f"Permission denied accessing {directory}: {e}")
            return

        for item in items:
            if item.name.startswith(".") and item.name not in self.ALLOWED_HIDDEN_DIRS:
                continue

            if item.name == "__pycache__":
                continue

            try:
                if not item.is_dir():
                    continue

                resolved = item.resolve()
                if resolved in visited:
                    logger.debug(f"Skipping already scanned directory: {item}")
                    continue
                visited.add(resolved)

                skill_file = item / self.SKILL_FILE_NAME
                if skill_file.is_file():
                    result.skills.append(self._create_skill_info(skill_file, source, True))
                else:
                    self._scan_directory(item, source, result, visited)
            except PermissionError as e:
                result.errors.append(f"Permission denied accessing {item}: {e}")

    def _is_flat_skill_file(self, path: Path) -> bool:
        return (
            path.suffix.lower() == ".md"
            and path.name != self.SKILL_FILE_NAME
            and path.name.lower() not in self.IGNORED_FILE_NAMES
            and not path.name.startswith(".")
        )

    def _create_skill_info(
        self, file_path: Path, source: SkillSource, is_directory_form: bool
    ) -> SkillFileInfo:
        skill_dir = file_path.parent
        skill_id = skill_dir.name if is_directory_form else file_path.stem

        file_path = file_path.resolve()
        skill_dir = skill_dir.resolve()

        return SkillFileInfo(
            file_path=file_path,
            skill_dir=skill_dir,
            skill_id=skill_id,
            source=source,
            is_directory_form=is_directory_form,
        )
