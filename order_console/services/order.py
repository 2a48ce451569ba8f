import logging
from typing import Any

from order_console.core.broker import KafkaBroker
from order_console.core.config import Settings
from order_console.domain import synthesizer, templates

logger = logging.getLogger(__name__)


def send_order(
    broker: KafkaBroker,
    settings: Settings,
    topic: str,
    message: dict[str, Any],
    key: str | None = None,
) -> str:
    """
    Publish an order document, applying the common topic remapping.

    Returns:
        The topic the message was actually published to

    Raises:
        BrokerError: If the broker is unavailable or rejects the message
    """
    resolved = settings.resolve_topic(topic)
    if resolved != topic:
        logger.info("Remapped topic %s -> %s", topic, resolved)

    body = message.get("body", {}) if isinstance(message, dict) else {}
    broker.send(resolved, message, key=key or body.get("externalId"))
    logger.info("Order %s sent to %s", body.get("externalId"), resolved)
    return resolved


def preview_order(type_id: str, values: dict[str, Any]) -> dict[str, Any]:
    """
    Synthesize the order document for ``type_id`` without sending it.

    Raises:
        TemplateNotFoundError: If the order type is unknown
    """
    template = templates.lookup(type_id)
    return synthesizer.generate(template, values)
