"""
Entity Tag Admin API Service.

FastAPI application serving the entity tag routes:

    POST   /api/cms-kit-admin/entity-tags   - Add a tag to an entity (JSON body)
    DELETE /api/cms-kit-admin/entity-tags   - Remove a tag from an entity (query)
    PUT    /api/cms-kit-admin/entity-tags   - Replace all tags on an entity (JSON body)

The backing service comes from ENTITY_TAGS_BACKEND:
1. local: in-process store
2. remote: forwards every call to ENTITY_TAGS_API_URL (gateway mode)
"""
# Load .env file if present (for local development)
from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import EntityTagSettings
from ..services.dtos import TagAssignmentRequest, TagRemovalRequest, TagSetRequest
from ..services.entity_tag_service import EntityTagService
from ..services.errors import RemoteCallError, RemoteServiceErrorInfo, RemoteValidationError
from ..services.factory import open_entity_tag_service
from ..services.operations import ENTITY_TAGS_PATH, REMOTE_SERVICE_NAME

logger = logging.getLogger(__name__)

# Global instances
service: Optional[EntityTagService] = None
settings: Optional[EntityTagSettings] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Reads settings from the environment and keeps the selected entity tag
    service open for the lifetime of the app.
    """
    global service, settings

    settings = EntityTagSettings.from_env()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    async with open_entity_tag_service(settings) as opened:
        service = opened
        logger.info(f"Entity tag API started (backend: {settings.backend})")
        yield

    service = None


app = FastAPI(
    title="Entity Tag Admin API",
    description="REST API for attaching, detaching and replacing tags on entities",
    version="1.0.0",
    lifespan=lifespan
)


# Response Models

class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str
    backend: Optional[str]


# Error Envelope

def error_response(status_code: int, error: RemoteServiceErrorInfo) -> JSONResponse:
    """Render an error in the {"error": {...}} envelope remote clients parse."""
    return JSONResponse(
        status_code=status_code,
        content={"error": error.model_dump(mode="json", by_alias=True)},
    )


@app.exception_handler(RemoteCallError)
async def remote_call_error_handler(request: Request, exc: RemoteCallError):
    """
    Relay a failed upstream call (gateway mode).

    Upstream status and error envelope are passed through; transport
    failures become 502.
    """
    error = exc.error or RemoteServiceErrorInfo(message=exc.message)
    return error_response(exc.status_code or 502, error)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Report invalid requests as 400 with per-field validation errors."""
    validation_errors = [
        RemoteValidationError(
            message=err.get("msg", "Invalid value"),
            members=[str(err["loc"][-1])] if err.get("loc") else [],
        )
        for err in exc.errors()
    ]
    error = RemoteServiceErrorInfo(
        message="Your request is not valid!",
        validation_errors=validation_errors,
    )
    return error_response(400, error)


# API Endpoints

@app.post(ENTITY_TAGS_PATH, status_code=204)
async def add_tag_to_entity(req: TagAssignmentRequest):
    """
    Attach a tag to an entity.

    Args:
        req: TagAssignmentRequest with entityId, entityType and tagId

    Raises:
        HTTPException: 503 if the service is not initialized
    """
    if service is None:
        raise HTTPException(status_code=503, detail="Entity tag service not initialized")

    await service.add_tag_to_entity(req)
    return Response(status_code=204)


@app.delete(ENTITY_TAGS_PATH, status_code=204)
async def remove_tag_from_entity(
    entity_id: str = Query(alias="entityId"),
    entity_type: str = Query(alias="entityType"),
    tag_id: str = Query(alias="tagId"),
):
    """
    Detach a tag from an entity.

    Args:
        entity_id: Entity identifier
        entity_type: Entity type discriminator (e.g. "Page", "BlogPost")
        tag_id: Tag identifier

    Raises:
        HTTPException: 503 if the service is not initialized
    """
    if service is None:
        raise HTTPException(status_code=503, detail="Entity tag service not initialized")

    await service.remove_tag_from_entity(
        TagRemovalRequest(entity_id=entity_id, entity_type=entity_type, tag_id=tag_id)
    )
    return Response(status_code=204)


@app.put(ENTITY_TAGS_PATH, status_code=204)
async def set_entity_tags(req: TagSetRequest):
    """
    Replace the full set of tags on an entity.

    Args:
        req: TagSetRequest with entityId, entityType and tags

    Raises:
        HTTPException: 503 if the service is not initialized
    """
    if service is None:
        raise HTTPException(status_code=503, detail="Entity tag service not initialized")

    await service.set_entity_tags(req)
    return Response(status_code=204)


@app.get("/health", response_model=HealthResponse)
async def health():
    """
    Health check endpoint.

    Returns:
        HealthResponse with service status and active backend
    """
    return HealthResponse(
        status="healthy",
        backend=settings.backend if settings else None,
    )


@app.get("/")
async def root():
    """
    Root endpoint with API information.

    Returns:
        API info and available endpoints
    """
    return {
        "name": "Entity Tag Admin API",
        "version": "1.0.0",
        "remote_service": REMOTE_SERVICE_NAME,
        "backend": settings.backend if settings else None,
        "endpoints": {
            "add_tag_to_entity": f"POST {ENTITY_TAGS_PATH}",
            "remove_tag_from_entity": f"DELETE {ENTITY_TAGS_PATH}",
            "set_entity_tags": f"PUT {ENTITY_TAGS_PATH}",
            "health": "GET /health",
        }
    }
