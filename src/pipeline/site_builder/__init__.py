"""Site build orchestration: configuration, runner and build report."""

from .config import SiteConfig, load_site_config
from .report import BuildReport, StageError, render_build_summary
from .runner import build_site, exit_code, run_from_config

__all__ = [
    "BuildReport",
    "SiteConfig",
    "StageError",
    "build_site",
    "exit_code",
    "load_site_config",
    "render_build_summary",
    "run_from_config",
]
