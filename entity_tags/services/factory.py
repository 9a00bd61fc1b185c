"""Composition root: choose the local or remote entity tag service."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx

from ..config import BACKEND_LOCAL, BACKEND_REMOTE, EntityTagSettings
from .client_proxy import EntityTagAdminClientProxy
from .dispatcher import HttpRemoteServiceDispatcher
from .entity_tag_service import EntityTagService, InMemoryEntityTagService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_entity_tag_service(
    settings: EntityTagSettings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncIterator[EntityTagService]:
    """Open the entity tag service selected by ``settings.backend``.

    The remote backend owns an HTTP dispatcher for the lifetime of the
    context and closes it on exit.

    Args:
        settings: Backend selection and remote connection settings
        transport: Custom httpx transport for the remote backend

    Raises:
        ValueError: If the backend is unknown or the remote backend has no URL
    """
    if settings.backend == BACKEND_LOCAL:
        logger.info("Using in-process entity tag service")
        yield InMemoryEntityTagService()
        return

    if settings.backend != BACKEND_REMOTE:
        raise ValueError(
            f"Unknown entity tag backend '{settings.backend}' "
            f"(expected '{BACKEND_LOCAL}' or '{BACKEND_REMOTE}')"
        )

    if not settings.api_url:
        raise ValueError("ENTITY_TAGS_API_URL must be set for the remote backend")

    logger.info(f"Using remote entity tag service: {settings.api_url}")
    dispatcher = HttpRemoteServiceDispatcher(
        api_url=settings.api_url,
        access_token=settings.access_token,
        timeout=settings.timeout,
        transport=transport,
    )
    dispatcher.connect()
    try:
        yield EntityTagAdminClientProxy(dispatcher)
    finally:
        await dispatcher.close()
