from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from videoja.dependencies import get_generation_service, get_script_writer, get_session
from videoja.models.session import Session
from videoja.schemas.generation import (
    CancelResponse,
    GalleryResponse,
    ScriptRequest,
    ScriptResponse,
    VideoGenerationRequest,
    VideoResponse,
)
from videoja.services.generation_service import GenerationService
from videoja.services.script_writer import ScriptWriter

router = APIRouter(tags=["generation"])


@router.post("/api/sessions/{session_id}/generate", response_model=VideoResponse)
async def generate_video_endpoint(
    request_data: VideoGenerationRequest,
    session: Session = Depends(get_session),
    service: GenerationService = Depends(get_generation_service),
):
    """
    Charge the session, run one Veo job to completion and return the new video.

    The request stays open while the remote operation is polled. Credits are
    refunded before any error response is sent.
    """
    try:
        request = request_data.to_domain()
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=[{"loc": err["loc"], "msg": err["msg"], "type": err["type"]} for err in e.errors()],
        )

    video = await service.generate(session, request)
    return video


@router.delete("/api/sessions/{session_id}/generate", response_model=CancelResponse)
async def cancel_generation(
    session: Session = Depends(get_session),
    service: GenerationService = Depends(get_generation_service),
):
    """Ask the outstanding job to stop polling. Its credits are refunded."""
    return CancelResponse(cancelled=service.cancel(session))


@router.get("/api/sessions/{session_id}/videos", response_model=GalleryResponse)
async def list_videos(session: Session = Depends(get_session)):
    """Gallery for the session, newest first."""
    return GalleryResponse(
        videos=[VideoResponse.model_validate(v) for v in session.videos],
        total=len(session.videos),
    )


@router.post("/api/script", response_model=ScriptResponse)
async def draft_script(
    request_data: ScriptRequest,
    writer: ScriptWriter = Depends(get_script_writer),
):
    """Draft a short promotional script from a topic. `script` is null when none was produced."""
    return ScriptResponse(script=await writer.draft_script(request_data.topic))
