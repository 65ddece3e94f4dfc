"""
Order email endpoint (stub)

Answers any origin, so the storefront can call it straight from the browser.
"""
import structlog
from fastapi import APIRouter, Request, Response, status
from fastapi.responses import JSONResponse

from nursery.services.notification_service import NotificationService
from nursery.schemas.notification import OrderEmailRequest

router = APIRouter(prefix="/functions", tags=["notifications"])

logger = structlog.get_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Client-Info, Apikey",
}


@router.options("/send-order-email", include_in_schema=False)
def send_order_email_options():
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


@router.post("/send-order-email", summary="Log an order email")
async def send_order_email(request: Request):
    """
    Log an order confirmation email; nothing is sent
    
    Body: **customerEmail**, **customerName**, **plantName**, **quantity**, **totalAmount**
    """
    try:
        payload = OrderEmailRequest.model_validate(await request.json())
    except ValueError as e:
        # Covers malformed JSON and payloads that fail validation
        logger.error("order_email_rejected", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": str(e)},
            headers=CORS_HEADERS
        )
    
    result = NotificationService().log_order_email(payload)
    return JSONResponse(content=result.model_dump(), headers=CORS_HEADERS)
