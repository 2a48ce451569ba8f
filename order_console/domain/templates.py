"""Order template registry.

A fixed catalog of the eleven ConnectX order sub-types. Each template
lists the form fields (with example values used to seed the order form)
and the service metadata the synthesizer needs.
"""

from __future__ import annotations

import enum
import uuid
from collections.abc import Iterable
from dataclasses import dataclass

from order_console.errors import TemplateNotFoundError


class FieldType(str, enum.Enum):
    STRING = "string"
    INT = "int"
    STRINGARRAY = "stringarray"
    BOOLEAN = "boolean"

    @classmethod
    def parse(cls, raw: str | FieldType) -> FieldType:
        """Normalize a type name. Unknown names fall back to ``STRING``."""
        if isinstance(raw, FieldType):
            return raw
        return _FIELD_TYPE_ALIASES.get(str(raw).strip().lower(), cls.STRING)


_FIELD_TYPE_ALIASES = {
    "string": FieldType.STRING,
    "int": FieldType.INT,
    "integer": FieldType.INT,
    "number": FieldType.INT,
    "stringarray": FieldType.STRINGARRAY,
    "array": FieldType.STRINGARRAY,
    "boolean": FieldType.BOOLEAN,
}


class CharacteristicType(str, enum.Enum):
    STRING = "StringCharacteristic"
    INTEGER = "IntegerCharacteristic"
    STRING_ARRAY = "StringArrayCharacteristic"
    BOOLEAN = "BooleanCharacteristic"


CHARACTERISTIC_TYPES: dict[FieldType, CharacteristicType] = {
    FieldType.STRING: CharacteristicType.STRING,
    FieldType.INT: CharacteristicType.INTEGER,
    FieldType.STRINGARRAY: CharacteristicType.STRING_ARRAY,
    FieldType.BOOLEAN: CharacteristicType.BOOLEAN,
}


def characteristic_type(field_type: FieldType | str) -> CharacteristicType:
    """Map a field type (or raw type name) to its characteristic ``@type`` tag."""
    return CHARACTERISTIC_TYPES[FieldType.parse(field_type)]


class Action(str, enum.Enum):
    ADD = "add"
    MODIFY = "modify"


@dataclass(frozen=True, slots=True)
class OrderField:
    name: str
    mandatory: bool
    type: FieldType
    example: str
    description: str
    top_level: bool = False


@dataclass(frozen=True, slots=True)
class OrderTemplate:
    type_id: str
    label: str
    product: str
    fields: tuple[OrderField, ...]
    service_type_name: str
    specification_id: str
    action: Action
    is_termination: bool = False

    def field(self, name: str) -> OrderField | None:
        for field in self.fields:
            if field.name == name:
                return field
        return None

    def example_values(self) -> dict[str, str]:
        """Field values an order form starts from."""
        return {field.name: field.example for field in self.fields}


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _f(
    name: str,
    example: str,
    description: str,
    *,
    mandatory: bool = True,
    field_type: FieldType = FieldType.STRING,
    top_level: bool = False,
) -> OrderField:
    return OrderField(
        name=name,
        mandatory=mandatory,
        type=field_type,
        example=example,
        description=description,
        top_level=top_level,
    )


def _external_id() -> OrderField:
    # Generated once per registry load, so previews are stable between edits
    return _f("externalId", str(uuid.uuid4()), "Top order level id", top_level=True)


def _inventory_id(example: str) -> OrderField:
    return _f("inventoryId", example, "Inventory ID of the service", top_level=True)


def _termination_fields(inventory_example: str, remark_example: str) -> tuple[OrderField, ...]:
    return (
        _external_id(),
        _inventory_id(inventory_example),
        _f("state", "terminated", "Service lifecycle status", top_level=True),
        _f("remark", remark_example, "Termination remark", mandatory=False),
    )


def _customer_fields(
    non_mobile_no: str, customer_name: str, ca_no: str, account_name: str
) -> tuple[OrderField, ...]:
    return (
        _f("nonMobileNo", non_mobile_no, "Customer's non-mobile number"),
        _f("customerName", customer_name, "Customer name"),
        _f("caNo", ca_no, "Customer account no."),
        _f("customerAccountName", account_name, "Customer account name"),
    )


def _service_names(product_key: str) -> tuple[str, str]:
    return f"CFS_ConnectX_{product_key}", f"CFSS_ConnectX_{product_key}"


def _template(
    type_id: str,
    label: str,
    product: str,
    product_key: str,
    action: Action,
    fields: Iterable[OrderField],
    *,
    is_termination: bool = False,
) -> OrderTemplate:
    service_type_name, specification_id = _service_names(product_key)
    return OrderTemplate(
        type_id=type_id,
        label=label,
        product=product,
        fields=tuple(fields),
        service_type_name=service_type_name,
        specification_id=specification_id,
        action=action,
        is_termination=is_termination,
    )


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

PRODUCTS = ("Port", "LAG", "VXC", "VXC Cloud")

_CATALOG: tuple[OrderTemplate, ...] = (
    _template(
        "create_port", "Create Port", "Port", "Port", Action.ADD,
        (
            _external_id(),
            *_customer_fields("9000111110-05", "Test Customer Co., Ltd.", "C230065571", "Test Customer Account"),
            _f("cableType", "Main", "Cable type: Main or Backup"),
            _f("nonMobileMain", "", "Non-mobile main (required if cableType = Backup)", mandatory=False),
            _f("customerSiteCode", "CX_123456", "Customer site code"),
            _f("dcLocation", "STTT3", "Data Center Location"),
            _f("portType", "1G", "Port type: 1G, 10G, 100G"),
            _f("isDiversity", "false", "Port diversity", mandatory=False, field_type=FieldType.BOOLEAN),
            _f("diversityNonmobile", "", "Diversity nonmobile (required if isDiversity = true)", mandatory=False),
            _f("serviceVlanType", "dot1q", "Service VLAN type: dot1q, access, qinq", mandatory=False),
            _f("networkServiceType", "L2VPN", "Network service type: L2VPN, L3VPN, L3VPN-INTERNET"),
            _f("reservedPortId", "PORT-12345", "Port ID from inventory"),
            _f("orderRef", "AWN-NW-2024-000001", "Order reference from SSS"),
        ),
    ),
    _template(
        "terminate_port", "Terminate Port", "Port", "Port", Action.MODIFY,
        _termination_fields("INV-PORT-12345", "Termination requested by customer"),
        is_termination=True,
    ),
    _template(
        "create_lag", "Create LAG", "LAG", "LAG", Action.ADD,
        (
            _external_id(),
            *_customer_fields("9000111111", "Test Customer LAG Co.", "C230065571", "Test Customer Account"),
            _f("cableType", "Main", "Cable type: Main or Backup"),
            _f("customerSiteCode", "CX_123456", "Customer site code"),
            _f("bandwidth", "50M", "Bandwidth (e.g., 50M, 1G)", mandatory=False),
            _f("dcLocation", "STTT3", "Data Center Location"),
            _f("portType", "10G", "Port type: 1G, 10G, 100G"),
            _f("lagNumber", "2", "Number of ports in LAG (1-8)", mandatory=False),
            _f("serviceVlanType", "dot1q", "Service VLAN type: dot1q, access, qinq"),
            _f("networkServiceType", "L2VPN", "Network service type"),
            _f("orderRef", "AWN-NW-2024-000002", "Order reference from SSS"),
        ),
    ),
    _template(
        "terminate_lag", "Terminate LAG", "LAG", "LAG", Action.MODIFY,
        _termination_fields("INV-LAG-12345", "LAG termination requested"),
        is_termination=True,
    ),
    _template(
        "upgrade_lag", "Upgrade LAG", "LAG", "LAG", Action.MODIFY,
        (
            _external_id(),
            _inventory_id("INV-LAG-12345"),
            _f("portType", "10G", "Port type: 1G, 10G, 100G"),
            _f("lagNumber", "2", "Number of ports in LAG (1-8)", mandatory=False),
        ),
    ),
    _template(
        "downgrade_lag", "Downgrade LAG", "LAG", "LAG", Action.MODIFY,
        (
            _external_id(),
            _inventory_id("INV-LAG-12345"),
            _f(
                "releasePort",
                '["GigabitEthernet0/0/10", "GigabitEthernet0/0/11"]',
                "Ports to be released/returned",
                field_type=FieldType.STRINGARRAY,
            ),
        ),
    ),
    _template(
        "create_vxc", "Create VXC", "VXC", "VXC", Action.ADD,
        (
            _external_id(),
            *_customer_fields("9000111112", "Test VXC Customer", "C230065572", "Test VXC Account"),
            _f("bandwidth", "100M", "VXC bandwidth"),
            _f("vlanId", "100", "VLAN ID for VXC"),
            _f("networkServiceType", "L2VPN", "Network service type"),
            _f("orderRef", "AWN-NW-2024-000003", "Order reference from SSS"),
        ),
    ),
    _template(
        "terminate_vxc", "Terminate VXC", "VXC", "VXC", Action.MODIFY,
        _termination_fields("INV-VXC-12345", "VXC termination requested"),
        is_termination=True,
    ),
    _template(
        "autoburst_vxc", "Autoburst VXC", "VXC", "VXC", Action.MODIFY,
        (
            _external_id(),
            _inventory_id("INV-VXC-12345"),
            _f("burstOrderType", "UP", "Order Type: UP (Up Speed) or DP (Down Speed)"),
            _f("bustLinkSpeed", "1024 Mbps", "Expected speed [Mbps, Kbps, Gbps]"),
            _f("gcpLinkType", "LINK_TYPE_ETHERNET_10G_LR", "GCP Link Type setting", mandatory=False),
            _f("burstEffectiveDate", "12-09-2025", "Effective date (DD-MM-YYYY)"),
            _f("burstEndDate", "31-12-2999", "End date (DD-MM-YYYY)", mandatory=False),
        ),
    ),
    _template(
        "create_vxc_cloud", "Create VXC Cloud", "VXC Cloud", "VXC_Cloud", Action.ADD,
        (
            _external_id(),
            *_customer_fields("9000111113", "Test Cloud Customer", "C230065573", "Test Cloud Account"),
            _f("bandwidth", "200M", "Cloud VXC bandwidth"),
            _f("cloudProvider", "AWS", "Cloud provider (AWS, Azure, GCP)"),
            _f("vlanId", "200", "VLAN ID for cloud VXC"),
            _f("orderRef", "AWN-NW-2024-000004", "Order reference from SSS"),
        ),
    ),
    _template(
        "terminate_vxc_cloud", "Terminate VXC Cloud", "VXC Cloud", "VXC_Cloud", Action.MODIFY,
        _termination_fields("INV-VXCCLOUD-12345", "Cloud VXC termination requested"),
        is_termination=True,
    ),
)

ORDER_TEMPLATES: dict[str, OrderTemplate] = {t.type_id: t for t in _CATALOG}


def lookup(type_id: str) -> OrderTemplate:
    """Return the template for ``type_id``.

    Raises:
        TemplateNotFoundError: If the order type is not in the catalog
    """
    try:
        return ORDER_TEMPLATES[type_id]
    except KeyError:
        raise TemplateNotFoundError(type_id) from None


def all_templates() -> list[OrderTemplate]:
    return list(_CATALOG)


def templates_for_product(product: str) -> list[OrderTemplate]:
    return [t for t in _CATALOG if t.product == product]


def product_specifications() -> list[tuple[str, str]]:
    """(product, specification id) pairs, one per product, in catalog order."""
    return list(dict.fromkeys((t.product, t.specification_id) for t in _CATALOG))
