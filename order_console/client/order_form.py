import json
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

import httpx

from order_console.client.http import api_client
from order_console.client.notifications import Level, NotificationCenter
from order_console.core.config import DEFAULT_ORDER_TOPIC, Settings
from order_console.domain import synthesizer, templates
from order_console.domain.templates import OrderTemplate
from order_console.errors import DomainValidationError

logger = logging.getLogger(__name__)


class OrderForm:
    """
    State of the order page: the selected template, its field values and
    the order document derived from them.

    The document is regenerated from scratch after every change. ``send``
    refuses to start while a previous send is still in flight.
    """

    def __init__(
        self,
        http: httpx.Client,
        notifications: NotificationCenter | None = None,
        topic: str = DEFAULT_ORDER_TOPIC,
        clock: Callable[[], datetime] | None = None,
    ):
        self.http = http
        self.notifications = notifications or NotificationCenter()
        self.topic = topic
        self._clock = clock
        self.template: OrderTemplate | None = None
        self.values: dict[str, Any] = {}
        self.document: dict[str, Any] | None = None
        self.is_sending = False

    @classmethod
    def from_settings(
        cls, settings: Settings, notifications: NotificationCenter | None = None
    ) -> "OrderForm":
        """Form talking to the configured API and publishing to ``App.OrderTopic``."""
        return cls(api_client(settings), notifications, topic=settings.app.order_topic)

    def select(self, type_id: str) -> OrderTemplate:
        """
        Switch to another order type, seeding every field with its example.

        Raises:
            TemplateNotFoundError: If the order type is unknown; the current
                template and values are kept
        """
        template = templates.lookup(type_id)
        self.template = template
        self.values = template.example_values()
        self._recompute()
        return template

    def set_value(self, name: str, value: Any) -> dict[str, Any]:
        if self.template is None:
            raise DomainValidationError("No order template selected")
        self.values = {**self.values, name: value}
        self._recompute()
        return self.document

    def _recompute(self) -> None:
        now = self._clock() if self._clock else None
        self.document = synthesizer.generate(self.template, self.values, now=now)

    def as_json(self) -> str:
        return json.dumps(self.document, indent=2) if self.document is not None else ""

    def send(self, topic: str | None = None) -> bool:
        """Post the current document to the broker endpoint.

        Returns True when the API confirmed the publish. Returns False
        without a request when nothing is selected or a send is in flight.
        """
        if self.document is None or self.is_sending:
            return False

        self.is_sending = True
        try:
            try:
                response = self.http.post(
                    "/api/orders/send",
                    json={"topic": topic or self.topic, "message": self.document},
                )
                ok = response.is_success and response.json().get("success") is True
            except (httpx.HTTPError, ValueError) as exc:
                logger.warning("Failed to send order: %s", exc)
                ok = False

            if ok:
                self.notifications.post("Order sent successfully", Level.SUCCESS, 3.0)
            else:
                self.notifications.post("Failed to send order", Level.ERROR, 5.0)
            return ok
        finally:
            self.is_sending = False
