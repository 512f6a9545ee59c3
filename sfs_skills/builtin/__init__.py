"""
Built-in SFS skill pack.

Builtin skills are read-only and have the lowest priority: a project
skill with the same name replaces the builtin one.
"""

from pathlib import Path

# Path to the builtin skills directory
BUILTIN_SKILLS_DIR = Path(__file__).parent / "skills"


def get_builtin_skills_path() -> Path:
    """Get the path to the builtin skills directory."""
    return BUILTIN_SKILLS_DIR
