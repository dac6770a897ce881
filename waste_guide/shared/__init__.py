from waste_guide.shared.config import GeoBoundsConfig, Settings, get_config, reload_config
from waste_guide.shared.log_config import configure_logging

__all__ = [
    "get_config",
    "reload_config",
    "Settings",
    "GeoBoundsConfig",
    "configure_logging",
]
