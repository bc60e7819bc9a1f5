"""
Django settings for the smarttoll project.

Only the route-matching app is installed; there is no database because
reference points are held in process memory.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "insecure-dev-key-change-me")

DEBUG = os.environ.get("DJANGO_DEBUG", "1") == "1"

ALLOWED_HOSTS: list[str] = []

INSTALLED_APPS = [
    "tollroute",
]

DATABASES: dict = {}

USE_TZ = True

ROUTE_MATCHER = {
    # precise mode: max distance (km) from any segment of the road polyline
    "ROUTE_TOLERANCE_KM": float(os.environ.get("ROUTE_TOLERANCE_KM", 5.0)),
    # coarse mode: max(ratio × direct distance, floor) of allowed detour
    "STRAIGHT_ROUTE_TOLERANCE_RATIO": 0.15,
    "STRAIGHT_ROUTE_MIN_TOLERANCE_KM": 50.0,
    "BOUNDING_BOX_BUFFER_DEG": 1.0,
    # place matches at the middle of their segment instead of the projection
    "LEGACY_MIDPOINT_PLACEMENT": False,
    "MAX_WORKERS": int(os.environ.get("ROUTE_MATCHER_MAX_WORKERS", 1)),
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} {levelname} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "loggers": {
        "tollroute": {
            "handlers": ["console"],
            "level": os.environ.get("TOLLROUTE_LOG_LEVEL", "INFO"),
        },
    },
}
