"""Order document synthesis.

``generate`` turns a template plus the user's field values into the
service order message published to the broker. It is a pure function:
the only non-deterministic inputs are the clock and the id factory, both
of which can be injected.
"""

from __future__ import annotations

import json
import uuid
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any

from order_console.domain.templates import (
    Action,
    CharacteristicType,
    FieldType,
    OrderField,
    OrderTemplate,
    characteristic_type,
)

DEFAULT_DESCRIPTION = "ConnectX Order"
DEFAULT_TERMINATION_STATE = "terminated"
REQUEST_DATE_FORMAT = "%d-%m-%Y %H:%M:%S"

# Handled outside the generic characteristic loop
_SPECIAL_FIELDS = frozenset({"externalId", "description"})


def _new_id() -> str:
    return str(uuid.uuid4())


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def resolve_value(field: OrderField, values: Mapping[str, Any]) -> Any:
    """User value for ``field``, or its example when the user left it blank."""
    value = values.get(field.name)
    if _is_blank(value):
        return field.example
    return value


def coerce_value(field_type: FieldType | str, value: Any) -> Any:
    """Normalize a form value for its characteristic type.

    JSON text for string arrays becomes a list; text that does not parse is
    kept as-is. Booleans accept ``True`` or ``"true"``; anything else is
    ``False``. Integer text becomes an int when it parses.
    """
    field_type = FieldType.parse(field_type)
    if field_type is FieldType.STRINGARRAY:
        if isinstance(value, str):
            try:
                return json.loads(value)
            except ValueError:
                return value
        return value
    if field_type is FieldType.BOOLEAN:
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return value is True
    if field_type is FieldType.INT and isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return value
    return value


def _characteristic(name: str, value: Any, tag: CharacteristicType) -> dict[str, Any]:
    return {"name": name, "value": value, "@type": tag.value}


def _header(session_id: str, now: datetime) -> dict[str, Any]:
    timestamp = now.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return {
        "initMethod": "POST",
        "version": "5.0",
        "timestamp": timestamp.replace("+00:00", "Z"),
        "orgService": "BWC",
        "from": "NSB",
        "channel": "",
        "broker": "",
        "useCase": "",
        "useCaseStep": "",
        "useCaseAge": 0,
        "functionName": "",
        "session": session_id,
        "transaction": session_id,
        "communication": "unicast",
        "groupTags": [],
        "identity": {"device": [], "public": "", "user": "cluster1"},
        "token": "",
        "initUri": "",
        "queryParam": "",
        "tmfSpec": "none",
        "baseApiVersion": "none",
        "schemaVersion": "none",
        "instanceData": "",
        "scope": "global",
        "agent": "",
        "useCaseStartTime": "",
        "useCaseExpiryTime": "",
    }


def build_characteristics(
    template: OrderTemplate, values: Mapping[str, Any], external_id: str
) -> list[dict[str, Any]]:
    """Characteristic list for a service: ``externalId`` first, then the form fields."""
    characteristics = [_characteristic("externalId", external_id, CharacteristicType.STRING)]
    for field in template.fields:
        if field.top_level or field.name in _SPECIAL_FIELDS:
            continue
        value = resolve_value(field, values)
        if _is_blank(value):
            continue
        characteristics.append(
            _characteristic(
                field.name,
                coerce_value(field.type, value),
                characteristic_type(field.type),
            )
        )
    return characteristics


def _value_of(template: OrderTemplate, values: Mapping[str, Any], name: str) -> Any:
    field = template.field(name)
    if field is not None:
        return resolve_value(field, values)
    return values.get(name)


def _add_service(
    template: OrderTemplate, values: Mapping[str, Any], external_id: str
) -> dict[str, Any]:
    service: dict[str, Any] = {
        "name": template.service_type_name,
        "serviceType": "CFS",
        "state": "reserved",
        "serviceCharacteristic": build_characteristics(template, values, external_id),
    }

    for field in template.fields:
        if not field.top_level or field.name in _SPECIAL_FIELDS:
            continue
        value = resolve_value(field, values)
        if not _is_blank(value):
            service[field.name] = value

    service["serviceSpecification"] = {
        "id": template.specification_id,
        "name": template.specification_id,
        "@type": "ServiceSpecificationRef",
        "@referredType": "CustomerFacingServiceSpecification",
    }

    account_id = _value_of(template, values, "caNo")
    account_name = _value_of(template, values, "customerAccountName")
    if not _is_blank(account_id) or not _is_blank(account_name):
        service["relatedParty"] = [
            {
                "role": "Customer",
                "@type": "RelatedPartyRefOrPartyRoleRef",
                "partyOrPartyRole": {
                    "id": account_id or "",
                    "name": account_name or "",
                    "@type": "PartyRoleRef",
                    "@referredType": "Customer",
                },
            }
        ]

    service["@type"] = "Service"
    return service


def _modify_service(
    template: OrderTemplate, values: Mapping[str, Any], external_id: str
) -> dict[str, Any]:
    service: dict[str, Any] = {"id": _value_of(template, values, "inventoryId") or ""}
    if template.is_termination:
        state = _value_of(template, values, "state")
        service["state"] = state if not _is_blank(state) else DEFAULT_TERMINATION_STATE
    service["serviceCharacteristic"] = build_characteristics(template, values, external_id)
    service["@type"] = "Service"
    return service


def generate(
    template: OrderTemplate,
    values: Mapping[str, Any],
    *,
    now: datetime | None = None,
    new_id: Callable[[], str] = _new_id,
) -> dict[str, Any]:
    """
    Build the service order document for ``template``.

    Args:
        template: Order template selected by the user
        values: Field values keyed by field name; blank entries fall back
            to the field's example value
        now: Clock reading to stamp the order with (defaults to the current time)
        new_id: Factory for the session id and a missing externalId

    Returns:
        A JSON-ready dict with ``header`` and ``body`` blocks.
    """
    now = now or datetime.now(timezone.utc)
    session_id = new_id()

    external_id = _value_of(template, values, "externalId")
    if _is_blank(external_id):
        external_id = new_id()
    external_id = str(external_id)

    description = _value_of(template, values, "description")

    if template.action is Action.ADD:
        service = _add_service(template, values, external_id)
    else:
        service = _modify_service(template, values, external_id)

    return {
        "header": _header(session_id, now),
        "body": {
            "externalId": external_id,
            "description": description if not _is_blank(description) else DEFAULT_DESCRIPTION,
            "category": "ConnectX",
            "requestExecutionDate": now.astimezone().strftime(REQUEST_DATE_FORMAT),
            "serviceOrderItem": [
                {
                    "id": "1",
                    "action": template.action.value,
                    "service": service,
                    "@type": "ServiceOrderItem",
                }
            ],
        },
    }
