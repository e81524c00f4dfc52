"""
FastAPI dependency injection.

Dependencies provide configuration and the signed URL generator to route
handlers. Tests override get_settings or get_store_factory through
app.dependency_overrides instead of patching modules.
"""

import logging
from typing import Annotated

from fastapi import Depends

from ..config.settings import Settings, get_settings
from ..infrastructure.storage.client import MockObjectStore, ObjectStore, StorageConfig
from ..infrastructure.storage.factories import StoreFactory, default_store_factory

logger = logging.getLogger(__name__)

# Shared across requests so mock mode behaves like one bucket
_mock_store = None


def get_store_factory(
    settings: Annotated[Settings, Depends(get_settings)],
) -> StoreFactory:
    """
    Provide the factory used to reach object storage.

    In mock mode every request shares one in-memory store.
    """
    global _mock_store

    if settings.storage_mock_mode:
        if _mock_store is None:
            _mock_store = MockObjectStore()
            logger.info("Created shared mock object store")

        def mock_factory(config: StorageConfig) -> ObjectStore:
            return _mock_store

        return mock_factory

    return default_store_factory(settings)


SettingsDep = Annotated[Settings, Depends(get_settings)]
StoreFactoryDep = Annotated[StoreFactory, Depends(get_store_factory)]
