"""API routes."""

import logging
from collections.abc import AsyncIterator, Callable

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse, StreamingResponse

from valocoach.api.schemas import (
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    HealthResponse,
    ProfileResponse,
)
from valocoach.auth import AuthUser
from valocoach.config import get_settings
from valocoach.core.generation import TextGenerator
from valocoach.dependencies import (
    get_llm_provider,
    get_profile_store_factory,
    get_request_user,
    get_text_generator,
)
from valocoach.store import ProfileStore, RecordStoreError

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


# Health


@router.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
)
async def health_check() -> HealthResponse:
    """Check application health status."""
    settings = get_settings()
    provider = get_llm_provider()

    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.env,
        llm_provider=provider.provider_name,
        llm_model=provider.model_name,
        record_store_configured=settings.supabase_configured,
    )


# Chat


async def _stream_body(first: str, fragments: AsyncIterator[str]) -> AsyncIterator[str]:
    if first:
        yield first
    try:
        async for fragment in fragments:
            yield fragment
    except Exception:
        # Headers are already sent. Re-raising aborts the chunked body, so the
        # client gets an incomplete read instead of a short reply.
        logger.exception("Chat stream failed after the first fragment")
        raise


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["Chat"],
)
async def chat(
    request: ChatRequest,
    generator: TextGenerator = Depends(get_text_generator),
):
    """Generate the coach's reply to a conversation.

    With ``stream`` set the reply is returned as a plain-text body of
    concatenable fragments. The first fragment is awaited before the
    response starts so upstream failures still map to a 500.
    """
    turns = [turn.model_dump() for turn in request.messages]
    try:
        if not request.stream:
            content = await generator.generate(turns)
            return ChatResponse(content=content)

        fragments = generator.stream(turns)
        first = await anext(fragments, "")
        return StreamingResponse(
            _stream_body(first, fragments),
            media_type="text/plain; charset=utf-8",
        )
    except Exception as e:
        logger.exception("Chat processing failed for %d messages", len(turns))
        return _error(500, "Failed to process chat request", str(e) or type(e).__name__)


# Profile


@router.get(
    "/auth/profile",
    response_model=ProfileResponse,
    responses={401: {"model": ErrorResponse}, 400: {"model": ErrorResponse}},
    tags=["Profile"],
)
async def get_profile(
    user: AuthUser | None = Depends(get_request_user),
    store_factory: Callable[[AuthUser], ProfileStore] = Depends(get_profile_store_factory),
):
    """Return the caller's profile."""
    if user is None:
        return _error(401, "Unauthorized")
    try:
        profile = await store_factory(user).get_profile(user)
    except RecordStoreError as e:
        return _error(400, str(e))
    except Exception:
        logger.exception("Profile lookup failed for user %s", user.id)
        return _error(500, "Internal server error")
    return ProfileResponse(profile=profile.model_dump(mode="json") if profile else None)


@router.put(
    "/auth/profile",
    response_model=ProfileResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    tags=["Profile"],
)
async def update_profile(
    updates: dict = Body(...),
    user: AuthUser | None = Depends(get_request_user),
    store_factory: Callable[[AuthUser], ProfileStore] = Depends(get_profile_store_factory),
):
    """Create or update the caller's profile."""
    if user is None:
        return _error(401, "Unauthorized")
    try:
        profile = await store_factory(user).update_profile(user, updates)
    except (ValueError, RecordStoreError) as e:
        return _error(400, str(e))
    except Exception:
        logger.exception("Profile update failed for user %s", user.id)
        return _error(500, "Internal server error")
    return ProfileResponse(profile=profile.model_dump(mode="json"))
