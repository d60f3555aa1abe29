"""
FastAPI Dependency Injection Providers.

Hierarchy:
    1. get_settings() - Loads and caches application configuration
    2. get_validation_service() - Creates/returns the shared SSMLService

Usage in Route Handlers:
    from fastapi import Depends
    from ssml_ms.api.dependencies import get_validation_service

    @router.post("/v1/ssml/validate")
    def validate(req: ValidateRequest, service: SSMLService = Depends(get_validation_service)):
        return service.validate(req.ssml).to_dict()

Settings file:
    SSML_MS_SETTINGS (default config/settings.yaml). A missing file means
    all defaults.
"""
from __future__ import annotations

import os
from functools import lru_cache

from ssml_ms.core.config import Settings, load_settings
from ssml_ms.services.validation_service import SSMLService, get_service


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load and cache application settings.

    Settings are read once per process; call get_settings.cache_clear()
    to reload (tests).
    """
    path = os.getenv("SSML_MS_SETTINGS", "config/settings.yaml")
    return load_settings(path, missing_ok=True)


def get_validation_service() -> SSMLService:
    """Get the shared SSMLService instance (created lazily)."""
    return get_service(get_settings())
