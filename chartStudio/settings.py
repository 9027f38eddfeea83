"""Django settings for chartStudio.

The project has no database or web surface of its own: Django provides
configuration, logging and the management-command entry points around the
Django-free `core.charting` package. Configuration is driven by environment
variables so deployments do not need to edit this file.
"""

from __future__ import annotations

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, *, default: bool) -> bool:
    """Parse a boolean environment variable.

    Args:
        name: Environment variable name.
        default: Value when the variable is not set.

    Returns:
        Parsed boolean value.
    """

    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _env_str(name: str, *, default: str) -> str:
    """Read a string environment variable, falling back when unset or blank."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


DEBUG = _env_bool("DJANGO_DEBUG", default=True)

_DEV_SECRET_KEY = "dev-only-insecure-secret-key"
SECRET_KEY = os.getenv("DJANGO_SECRET_KEY") or (_DEV_SECRET_KEY if DEBUG else "")
if not SECRET_KEY:
    raise RuntimeError("DJANGO_SECRET_KEY is required when DJANGO_DEBUG is False.")

INSTALLED_APPS = [
    "core.apps.CoreConfig",
]

DATABASES: dict[str, dict[str, str]] = {}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Fill style/setting nodes without a value from their target default when
# reconciling chart configs.
CHART_TRANSFER_USE_DEFAULT = _env_bool("CHART_TRANSFER_USE_DEFAULT", default=True)

CHART_LOG_LEVEL = _env_str("CHART_LOG_LEVEL", default="DEBUG" if DEBUG else "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "{levelname} {name}: {message}", "style": "{"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "core": {"handlers": ["console"], "level": CHART_LOG_LEVEL, "propagate": True},
    },
}
