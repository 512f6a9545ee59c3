from sfs_skills.configuration.config import Settings, get_settings
from sfs_skills.configuration.logging_config import configure_logging

__all__ = ["Settings", "get_settings", "configure_logging"]
