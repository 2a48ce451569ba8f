from fastapi import APIRouter

from order_console.domain import templates as registry
from order_console.schemas.template import OrderTemplate, OrderTemplateSummary

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=list[OrderTemplateSummary])
def list_templates(product: str | None = None):
    """
    List the order templates, optionally only those of one product (Port, LAG, VXC, VXC Cloud).
    """
    found = registry.templates_for_product(product) if product else registry.all_templates()
    return [OrderTemplateSummary.model_validate(t) for t in found]


@router.get("/{type_id}", response_model=OrderTemplate)
def get_template(type_id: str):
    """
    Get one order template with its form fields.
    """
    return OrderTemplate.model_validate(registry.lookup(type_id))
