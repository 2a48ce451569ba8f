import pytest

from order_console.domain import templates
from order_console.domain.templates import (
    Action,
    CharacteristicType,
    FieldType,
    characteristic_type,
)
from order_console.errors import NotFoundError, TemplateNotFoundError


# ============================================================================
# REGISTRY
# ============================================================================


def test_registry_has_eleven_templates():
    type_ids = {t.type_id for t in templates.all_templates()}

    assert type_ids == {
        "create_port",
        "terminate_port",
        "create_lag",
        "terminate_lag",
        "upgrade_lag",
        "downgrade_lag",
        "create_vxc",
        "terminate_vxc",
        "autoburst_vxc",
        "create_vxc_cloud",
        "terminate_vxc_cloud",
    }


def test_lookup_unknown_type_raises_not_found():
    with pytest.raises(TemplateNotFoundError) as exc_info:
        templates.lookup("create_router")

    assert isinstance(exc_info.value, NotFoundError)
    assert exc_info.value.type_id == "create_router"


def test_template_metadata():
    template = templates.lookup("create_vxc_cloud")

    assert template.service_type_name == "CFS_ConnectX_VXC_Cloud"
    assert template.specification_id == "CFSS_ConnectX_VXC_Cloud"
    assert template.action is Action.ADD
    assert template.is_termination is False
    assert template.label == "Create VXC Cloud"
    assert template.product == "VXC Cloud"


def test_termination_templates_are_modify_actions():
    for template in templates.all_templates():
        if template.type_id.startswith("terminate_"):
            assert template.action is Action.MODIFY
            assert template.is_termination is True
            assert template.field("state").example == "terminated"
            assert template.field("inventoryId").top_level is True


def test_templates_for_product():
    lag = [t.type_id for t in templates.templates_for_product("LAG")]

    assert lag == ["create_lag", "terminate_lag", "upgrade_lag", "downgrade_lag"]
    assert templates.templates_for_product("Router") == []


def test_product_specifications_in_catalog_order():
    assert templates.product_specifications() == [
        ("Port", "CFSS_ConnectX_Port"),
        ("LAG", "CFSS_ConnectX_LAG"),
        ("VXC", "CFSS_ConnectX_VXC"),
        ("VXC Cloud", "CFSS_ConnectX_VXC_Cloud"),
    ]


def test_external_id_example_is_stable():
    template = templates.lookup("create_port")

    assert template.field("externalId").example == templates.lookup("create_port").field("externalId").example
    assert template.field("externalId").example != ""


def test_example_values_cover_every_field():
    template = templates.lookup("autoburst_vxc")

    assert list(template.example_values()) == [f.name for f in template.fields]


# ============================================================================
# TYPE TABLES
# ============================================================================


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("boolean", CharacteristicType.BOOLEAN),
        ("StringArray", CharacteristicType.STRING_ARRAY),
        ("array", CharacteristicType.STRING_ARRAY),
        ("int", CharacteristicType.INTEGER),
        ("integer", CharacteristicType.INTEGER),
        ("number", CharacteristicType.INTEGER),
        ("string", CharacteristicType.STRING),
        ("date-time", CharacteristicType.STRING),
    ],
)
def test_characteristic_type_mapping(raw, expected):
    assert characteristic_type(raw) is expected


def test_every_field_type_has_a_characteristic_type():
    for field_type in FieldType:
        assert isinstance(characteristic_type(field_type), CharacteristicType)


# ============================================================================
# API
# ============================================================================


def test_list_templates(client):
    response = client.get("/api/templates")

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 11
    assert data[0]["type_id"] == "create_port"
    assert data[0]["action"] == "add"


def test_list_templates_for_product(client):
    response = client.get("/api/templates", params={"product": "VXC"})

    assert response.status_code == 200
    assert [t["type_id"] for t in response.json()] == [
        "create_vxc",
        "terminate_vxc",
        "autoburst_vxc",
    ]


def test_get_template_with_fields(client):
    response = client.get("/api/templates/downgrade_lag")

    assert response.status_code == 200
    data = response.json()
    assert data["specification_id"] == "CFSS_ConnectX_LAG"
    release = next(f for f in data["fields"] if f["name"] == "releasePort")
    assert release["type"] == "stringarray"
    assert release["mandatory"] is True


def test_get_unknown_template_returns_404(client):
    response = client.get("/api/templates/create_router")

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_typed_fields_keep_their_field_type():
    assert templates.lookup("create_port").field("isDiversity").type is FieldType.BOOLEAN
    assert templates.lookup("downgrade_lag").field("releasePort").type is FieldType.STRINGARRAY
    assert templates.lookup("create_port").field("customerName").type is FieldType.STRING
