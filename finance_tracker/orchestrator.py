"""
Application wiring

Builds the object graph once at startup:
    settings -> store -> FinanceDataService (+ registry, audit logger)

Everything downstream receives the service or the registry explicitly.
"""

from typing import Optional

import structlog

from finance_tracker.audit import AuditLogger
from finance_tracker.config import Settings, get_settings
from finance_tracker.models import CategoryRegistry, default_registry
from finance_tracker.services import (
    FinanceDataService,
    FinanceStoreInterface,
    HttpFinanceStore,
    InMemoryFinanceStore,
)


logger = structlog.get_logger(__name__)


def create_store(settings: Optional[Settings] = None) -> FinanceStoreInterface:
    """Pick the store implementation named in the settings."""
    store_settings = (settings or get_settings()).store
    if store_settings.backend == "memory":
        logger.info("store_selected", backend="memory")
        return InMemoryFinanceStore()
    logger.info("store_selected", backend="http", base_url=store_settings.base_url)
    return HttpFinanceStore(settings=store_settings)


def create_app_components(
    settings: Optional[Settings] = None,
    store: Optional[FinanceStoreInterface] = None,
    registry: Optional[CategoryRegistry] = None,
) -> FinanceDataService:
    """
    Factory function to create the data service.

    Args:
        settings: Defaults to get_settings()
        store: Overrides the store chosen by the settings (tests)
        registry: Defaults to the built-in categories

    Returns:
        A FinanceDataService that has not loaded yet; await load().
    """
    settings = settings or get_settings()
    return FinanceDataService(
        store=store or create_store(settings),
        registry=registry or default_registry(),
        audit_logger=AuditLogger(),
    )
