import logging
from typing import Any

import httpx

from order_console.client.notifications import Level, NotificationCenter
from order_console.schemas.specification import SpecCharacteristic

logger = logging.getLogger(__name__)

ERROR_TTL = 5.0
SORT_COLUMNS = ("name", "valueType", "mandatory")


class SpecificationEditor:
    """
    Characteristic list of one service specification, edited through the API.

    Add and rename refetch the list after the server accepts the change.
    Toggle-mandatory and delete update the local list first and restore the
    previous list if the request fails. Failures are reported as error
    notifications; nothing is retried.
    """

    def __init__(
        self,
        http: httpx.Client,
        spec_id: str,
        notifications: NotificationCenter | None = None,
    ):
        self.http = http
        self.spec_id = spec_id
        self.notifications = notifications or NotificationCenter()
        self.characteristics: list[SpecCharacteristic] = []
        self.error: str | None = None

    @property
    def _characteristic_url(self) -> str:
        return f"/api/specifications/{self.spec_id}/characteristic"

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response | None:
        try:
            response = self.http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            return None
        if not response.is_success:
            logger.warning("%s %s returned %s", method, url, response.status_code)
            return None
        return response

    def _fail(self, message: str) -> bool:
        self.notifications.post(message, Level.ERROR, ERROR_TTL)
        return False

    def get(self, name: str) -> SpecCharacteristic | None:
        for characteristic in self.characteristics:
            if characteristic.name == name:
                return characteristic
        return None

    def load(self) -> bool:
        """Fetch the specification and replace the local characteristic list."""
        self.error = None
        response = self._request("GET", f"/api/specifications/{self.spec_id}")
        if response is None:
            self.error = "Failed to fetch specifications"
            self.characteristics = []
            return False
        data = response.json()
        self.characteristics = [
            SpecCharacteristic.model_validate(raw) for raw in data.get("specCharacteristic", [])
        ]
        return True

    refresh = load

    def switch(self, spec_id: str) -> bool:
        self.spec_id = spec_id
        return self.load()

    def add(self, name: str, value_type: str, mandatory: bool = False) -> bool:
        if not name or not value_type:
            return self._fail("Please provide both field name and type")

        response = self._request(
            "POST",
            self._characteristic_url,
            json={"name": name, "valueType": value_type, "minCardinality": 1 if mandatory else 0},
        )
        if response is None:
            return self._fail("Failed to add field. Please try again.")
        self.load()
        return True

    def rename(self, old_name: str, new_name: str) -> bool:
        if not new_name or new_name == old_name:
            return True

        response = self._request(
            "PATCH",
            self._characteristic_url,
            json={"oldName": old_name, "newName": new_name},
        )
        if response is None:
            return self._fail("Failed to rename field. Please try again.")
        self.load()
        return True

    def toggle_mandatory(self, name: str) -> bool:
        current = self.get(name)
        if current is None:
            return self._fail(f"Unknown field '{name}'")

        new_min = 0 if current.mandatory else 1
        previous = self.characteristics
        self.characteristics = [
            c.model_copy(update={"min_cardinality": new_min}) if c.name == name else c
            for c in previous
        ]

        response = self._request(
            "PATCH",
            self._characteristic_url,
            json={"oldName": name, "minCardinality": new_min},
        )
        if response is None:
            self.characteristics = previous
            return self._fail("Failed to update mandatory status. Please try again.")
        return True

    def delete(self, name: str) -> bool:
        previous = self.characteristics
        self.characteristics = [c for c in previous if c.name != name]

        response = self._request("DELETE", self._characteristic_url, json={"name": name})
        if response is None:
            self.characteristics = previous
            return self._fail("Failed to delete field. Please try again.")
        return True

    def visible(
        self, search: str = "", sort_column: str = "name", descending: bool = False
    ) -> list[SpecCharacteristic]:
        """
        Filtered and sorted view of the characteristics.

        ``search`` matches the name or value type (case-insensitive), or the
        words true/mandatory and false/optional against the mandatory flag.
        """
        if sort_column not in SORT_COLUMNS:
            raise ValueError(f"Unknown sort column '{sort_column}'")

        term = search.lower()

        def matches(c: SpecCharacteristic) -> bool:
            if not term:
                return True
            flag_words = ("true", "mandatory") if c.mandatory else ("false", "optional")
            return (
                term in c.name.lower()
                or term in c.value_type.lower()
                or any(term in word for word in flag_words)
            )

        def sort_key(c: SpecCharacteristic):
            if sort_column == "mandatory":
                return c.mandatory
            if sort_column == "valueType":
                return c.value_type.lower()
            return c.name.lower()

        return sorted(filter(matches, self.characteristics), key=sort_key, reverse=descending)
