from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from app.analytics.api import analytics_router, dashboard_router, journey_router
from app.core.auth import Identity
from app.core.config import get_settings
from app.core.errors import NotFoundError
from app.core.rbac import Capability, capabilities_for, require_capability, require_identity, role_level
from app.interactions.api import call_interactions_router, chat_interactions_router, email_interactions_router
from app.marketing.api import (
    campaigns_router,
    competitions_router,
    funnels_router,
    newsletter_blogs_router,
    research_router,
    reviews_router,
)
from app.metrics import generate_metrics_payload, metrics_content_type
from app.platform.records.schemas import Envelope
from app.tracking.api import contacts_router, login_signups_router, store_visits_router, website_visits_router

router = APIRouter()
router.include_router(journey_router)
router.include_router(contacts_router)
router.include_router(website_visits_router)
router.include_router(store_visits_router)
router.include_router(login_signups_router)
router.include_router(campaigns_router)
router.include_router(funnels_router)
router.include_router(research_router)
router.include_router(reviews_router)
router.include_router(competitions_router)
router.include_router(newsletter_blogs_router)
router.include_router(call_interactions_router)
router.include_router(chat_interactions_router)
router.include_router(email_interactions_router)
router.include_router(analytics_router)
router.include_router(dashboard_router)


@router.get("/health", tags=["system"])
def health() -> dict[str, str]:
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.app_name,
        "environment": settings.app_env,
    }


@router.get("/api/auth/me", tags=["auth"], response_model=Envelope[dict])
async def me(identity: Identity = Depends(require_identity)) -> Envelope[dict]:
    return Envelope(
        data={
            "userId": identity.user_id,
            "email": identity.email,
            "name": identity.name,
            "role": identity.role,
            "roleLevel": role_level(identity.role),
            "capabilities": [capability.value for capability in capabilities_for(identity.role)],
        }
    )


@router.get("/metrics", tags=["system"], status_code=status.HTTP_200_OK)
def metrics(identity: Identity = Depends(require_capability(Capability.MANAGE_USERS))) -> Response:
    if not get_settings().metrics_enabled:
        raise NotFoundError("not found")
    return Response(content=generate_metrics_payload(), media_type=metrics_content_type())
