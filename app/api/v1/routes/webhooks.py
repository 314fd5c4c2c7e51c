from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from api.dependencies.actor import ActorIdDep
from api.dependencies.rate_limits import get_limiter
from infrastructure.logging import get_module_logger
from infrastructure.services import (
    DeliveryEngineDep,
    NotificationServiceDep,
    SettingsDep,
)
from modules.webhooks.diagnostics import run_diagnostics
from modules.webhooks.events import WebhookEvent
from modules.webhooks.samples import send_test_notification

logger = get_module_logger()
router = APIRouter(prefix="/webhooks", tags=["Webhooks"])
limiter = get_limiter()


class WebhookTestRequest(BaseModel):
    application_id: int = Field(..., gt=0)
    event: str = WebhookEvent.USER_LOGIN.value


class DiagnosticsRequest(BaseModel):
    webhook_url: Optional[str] = None


class DeliverySummary(BaseModel):
    destination_id: int
    delivered: bool
    outcome: str
    attempts: int
    status_code: Optional[int] = None


class WebhookTestResponse(BaseModel):
    success: bool
    message: str
    application_id: int
    activity_logged: bool
    deliveries: List[DeliverySummary]


@router.post("/test", response_model=WebhookTestResponse)
@limiter.limit("20/minute")
async def send_test_webhook(
    request: Request,
    body: WebhookTestRequest,
    actor_id: ActorIdDep,
    service: NotificationServiceDep,
):
    """Send a sample event to the caller's webhook destinations.

    The sample user and error details depend on the event; unknown events
    are sent with the user_login sample.
    """
    outcome = await send_test_notification(
        service,
        actor_id=actor_id,
        application_id=body.application_id,
        event=body.event,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    logger.info(
        "test_webhook_sent",
        actor_id=actor_id,
        application_id=body.application_id,
        webhook_event=body.event,
        delivered_count=outcome.delivered_count,
    )
    return WebhookTestResponse(
        success=True,
        message=f"Test webhook sent for event: {body.event}",
        application_id=body.application_id,
        activity_logged=outcome.activity.is_success,
        deliveries=[
            DeliverySummary(
                destination_id=d.destination_id,
                delivered=d.delivered,
                outcome=d.outcome.value,
                attempts=d.attempts,
                status_code=d.status_code,
            )
            for d in outcome.deliveries
        ],
    )


@router.post("/diagnostics")
@limiter.limit("10/minute")
async def webhook_diagnostics(
    request: Request,
    body: DiagnosticsRequest,
    actor_id: ActorIdDep,
    engine: DeliveryEngineDep,
    settings: SettingsDep,
) -> Dict[str, Any]:
    """Run a connectivity test against a webhook URL."""
    if not body.webhook_url or not body.webhook_url.strip():
        raise HTTPException(status_code=400, detail="Webhook URL is required")

    request_info = {
        "client_ip": request.client.host if request.client else None,
        "user_agent": request.headers.get("user-agent"),
        "country": request.headers.get("cf-ipcountry", "unknown"),
        "forwarded_for": request.headers.get("x-forwarded-for"),
    }
    report = await run_diagnostics(
        body.webhook_url.strip(),
        client=engine.client,
        settings=settings.webhooks,
        request_info=request_info,
    )
    logger.info(
        "webhook_diagnostics_completed",
        actor_id=actor_id,
        reachable=report.connectivity_test.success,
        status_code=report.connectivity_test.status_code,
    )
    return {
        "success": True,
        "message": "Webhook diagnostics completed",
        "diagnostics": report.model_dump(),
    }
