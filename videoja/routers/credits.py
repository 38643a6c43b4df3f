from fastapi import APIRouter, Depends

from videoja.config import settings
from videoja.dependencies import get_session, get_ws_manager
from videoja.models.generation import Resolution
from videoja.models.session import Session
from videoja.schemas.session import CreditsResponse, PricingResponse, TopUpRequest
from videoja.services.ledger import cost_for
from videoja.services.ws_manager import ConnectionManager

router = APIRouter(tags=["credits"])


@router.get("/api/pricing", response_model=PricingResponse)
async def get_pricing():
    return PricingResponse(
        costs={r.value: cost_for(r) for r in Resolution},
        credits_per_payment_unit=settings.CREDITS_PER_PAYMENT_UNIT,
    )


@router.get("/api/sessions/{session_id}/credits", response_model=CreditsResponse)
async def get_credits(session: Session = Depends(get_session)):
    return CreditsResponse(credits=session.credits)


@router.post("/api/sessions/{session_id}/credits/top-up", response_model=CreditsResponse)
async def top_up_credits(
    top_up: TopUpRequest,
    session: Session = Depends(get_session),
    manager: ConnectionManager = Depends(get_ws_manager),
):
    """Simulated payment: every unit paid buys a fixed number of credits."""
    added = session.ledger.top_up(top_up.amount)

    await manager.broadcast_to_session(
        session.id, "credits_updated", {"credits": session.credits, "added": added}
    )

    return CreditsResponse(credits=session.credits, added=added)
