from typing import Any

from fastapi import APIRouter, Depends

from order_console.api.deps import get_broker, get_settings
from order_console.core.broker import KafkaBroker
from order_console.core.config import Settings
from order_console.schemas.order import OrderPreviewRequest, SendOrderRequest, SendOrderResponse
from order_console.services import order as order_service

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/send", response_model=SendOrderResponse)
def send_order(
    data: SendOrderRequest,
    broker: KafkaBroker = Depends(get_broker),
    settings: Settings = Depends(get_settings),
):
    """
    Publish an order message to a broker topic.
    Broker failures are reported as 500 with a generic message.
    """
    topic = order_service.send_order(broker, settings, data.topic, data.message, key=data.key)
    return SendOrderResponse(success=True, topic=topic)


@router.post("/preview")
def preview_order(data: OrderPreviewRequest) -> dict[str, Any]:
    """
    Build the order document for a template and field values without sending it.
    """
    return order_service.preview_order(data.type_id, data.values)
