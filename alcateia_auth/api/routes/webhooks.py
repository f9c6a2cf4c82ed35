"""
Mercado Pago payment notifications.

Only subscription events are acted on. Signature verification is left to the
provider integration in front of this service.
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from alcateia_auth.db.session import get_db
from alcateia_auth.schemas.subscription import MercadoPagoWebhook
from alcateia_auth.services.subscriptions import apply_payment_event

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/mercadopago", response_class=PlainTextResponse)
def mercadopago_webhook(event: MercadoPagoWebhook, db: Session = Depends(get_db)):
    logger.info("[MercadoPago webhook] type=%s action=%s", event.type, event.action)
    try:
        if event.type == "subscription" and event.data and event.data.id is not None:
            apply_payment_event(db, str(event.data.id), event.action)
    except Exception:
        logger.exception("Webhook processing failed")
        db.rollback()
        return PlainTextResponse("Internal Server Error", status_code=500)
    return PlainTextResponse("OK")
