import logging
from pathlib import Path

from fastapi import FastAPI

from sfs_skills import __version__
from sfs_skills.application.services.skill_catalog import SkillCatalog
from sfs_skills.configuration.config import Settings, get_settings
from sfs_skills.configuration.logging_config import configure_logging
from sfs_skills.infrastructure.adapters.primary.web.routers import skills

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, catalog: SkillCatalog | None = None) -> FastAPI:
    """
    Build the read-only skill catalog API.

    The catalog is loaded once here; restart the server to pick up edits.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    if catalog is None:
        catalog = SkillCatalog.from_settings(settings)
        report = catalog.load(Path(settings.project_dir))
        if not report.is_valid:
            logger.warning(
                f"Skill pack has {report.invalid} invalid documents; "
                "see /api/v1/skills/report"
            )

    app = FastAPI(
        title="SFS Skills API",
        description="Read-only catalog of SFS skill documents.",
        version=__version__,
    )
    app.state.settings = settings
    app.state.catalog = catalog

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "version": __version__, "skills": len(catalog)}

    app.include_router(skills.router)

    return app
