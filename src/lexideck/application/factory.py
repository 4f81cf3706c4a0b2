"""
Adapter Factory
Centralizes the logic for selecting the catalog provider and progress store.
"""

from lexideck.application.config import AppConfig
from lexideck.application.session import StudySession
from lexideck.domain.ports import CatalogProvider, ProgressStore
from lexideck.infrastructure.adapters.csv_catalog import (
    FileCatalogProvider,
    HttpCatalogProvider,
    SampleCatalogProvider,
)
from lexideck.infrastructure.adapters.json_store import JsonProgressStore


def get_catalog_provider(config: AppConfig) -> CatalogProvider:
    """
    Returns the catalog provider for the configured source.
    """
    # 1. Local file
    if config.catalog_path is not None:
        return FileCatalogProvider(
            config.catalog_path,
            front_column=config.front_column,
            back_column=config.back_column,
        )

    # 2. Remote CSV
    if config.catalog_url:
        return HttpCatalogProvider(
            config.catalog_url,
            timeout=config.request_timeout,
            front_column=config.front_column,
            back_column=config.back_column,
        )

    # 3. Nothing configured
    return SampleCatalogProvider()


def get_progress_store(config: AppConfig) -> ProgressStore:
    return JsonProgressStore(config.progress_path)


def build_session(config: AppConfig) -> StudySession:
    """Wire a StudySession from configuration. Call reload() before use."""
    return StudySession(
        catalog_provider=get_catalog_provider(config),
        store=get_progress_store(config),
        tuning=config.tuning(),
    )
