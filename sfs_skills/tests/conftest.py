"""Pytest configuration and shared fixtures for testing."""

from pathlib import Path
from typing import Callable

import pytest

from sfs_skills.configuration.config import Settings


def make_skill_md(
    name: str | None = "sfs-sample",
    description: str | None = "Scaffold a sample feature.",
    body: str = "# Sample\n\n## Steps\n1. Do the thing",
    extra: str = "",
) -> str:
    """Build a skill document; None omits the field."""
    lines = ["---"]
    if name is not None:
        lines.append(f"name: {name}")
    if description is not None:
        lines.append(f"description: {description}")
    if extra:
        lines.append(extra.rstrip("\n"))
    lines.append("---")
    return "\n".join(lines) + "\n\n" + body + "\n"


@pytest.fixture
def skill_md() -> Callable[..., str]:
    """Factory for skill document text."""
    return make_skill_md


@pytest.fixture
def write_skill(tmp_path) -> Callable[..., Path]:
    """
    Write a skill in directory form and return its directory.

    Usage: write_skill("sfs-foo", root=tmp_path / "skills", description="...")
    """

    def _write(
        name: str = "sfs-sample",
        root: Path | None = None,
        dir_name: str | None = None,
        content: str | None = None,
        **kwargs,
    ) -> Path:
        root = root or (tmp_path / "skills")
        skill_dir = root / (dir_name or name)
        skill_dir.mkdir(parents=True, exist_ok=True)
        text = content if content is not None else make_skill_md(name=name, **kwargs)
        (skill_dir / "SKILL.md").write_text(text, encoding="utf-8")
        return skill_dir

    return _write


@pytest.fixture
def empty_builtin(tmp_path) -> Path:
    """An empty directory standing in for the builtin pack."""
    path = tmp_path / "empty-builtin"
    path.mkdir()
    return path


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at an empty project directory."""
    project = tmp_path / "project"
    project.mkdir(exist_ok=True)
    return Settings(project_dir=str(project), log_level="WARNING")
