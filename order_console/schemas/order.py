from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SendOrderRequest(BaseModel):
    topic: str = Field(..., min_length=1)
    message: dict[str, Any]
    key: str | None = None


class SendOrderResponse(BaseModel):
    success: bool
    topic: str


class OrderPreviewRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type_id: str = Field(..., min_length=1)
    values: dict[str, str | bool | None] = Field(default_factory=dict)
