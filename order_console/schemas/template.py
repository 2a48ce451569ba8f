from pydantic import BaseModel, ConfigDict

from order_console.domain.templates import Action, FieldType


class OrderField(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    mandatory: bool
    type: FieldType
    example: str
    description: str
    top_level: bool


class OrderTemplateSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type_id: str
    label: str
    product: str
    service_type_name: str
    specification_id: str
    action: Action
    is_termination: bool


class OrderTemplate(OrderTemplateSummary):
    fields: list[OrderField]
