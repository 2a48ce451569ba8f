from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from order_console.api.deps import get_db
from order_console.schemas.specification import (
    CharacteristicChangeResult,
    CharacteristicCreate,
    CharacteristicCreateResult,
    CharacteristicDelete,
    CharacteristicUpdate,
    ServiceSpecification,
)
from order_console.services import specification as specification_service

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

router = APIRouter(prefix="/specifications", tags=["specifications"])


@router.get("/export")
def export_specifications(db: Session = Depends(get_db)):
    """
    Download every ConnectX specification as an Excel workbook, one sheet per product.
    """
    content = specification_service.export_workbook(db)

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S")
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="ConnectX_Specifications_{timestamp}.xlsx"'
        },
    )


@router.get("/{spec_id}", response_model=ServiceSpecification)
def get_specification(spec_id: str, db: Session = Depends(get_db)):
    """
    Get a service specification document with its characteristic list.
    """
    spec = specification_service.get_specification(db, spec_id)
    return ServiceSpecification.model_validate(spec)


@router.patch("/{spec_id}/characteristic", response_model=CharacteristicChangeResult)
def update_characteristic(
    spec_id: str,
    data: CharacteristicUpdate,
    db: Session = Depends(get_db),
):
    """
    Rename a characteristic and/or change its minimum cardinality.
    The characteristic is matched by ``oldName``.
    """
    modified = specification_service.update_characteristic(
        db,
        spec_id,
        old_name=data.old_name,
        new_name=data.new_name,
        min_cardinality=data.min_cardinality,
    )
    return CharacteristicChangeResult(modified=modified)


@router.post(
    "/{spec_id}/characteristic",
    response_model=CharacteristicCreateResult,
    status_code=status.HTTP_201_CREATED,
)
def add_characteristic(
    spec_id: str,
    data: CharacteristicCreate,
    db: Session = Depends(get_db),
):
    """
    Append a new characteristic (configurable, maxCardinality 1).
    """
    characteristic = specification_service.add_characteristic(
        db,
        spec_id,
        name=data.name,
        value_type=data.value_type,
        min_cardinality=data.min_cardinality,
    )
    return CharacteristicCreateResult(characteristic=characteristic)


@router.delete("/{spec_id}/characteristic", response_model=CharacteristicChangeResult)
def delete_characteristic(
    spec_id: str,
    data: CharacteristicDelete,
    db: Session = Depends(get_db),
):
    """
    Remove the first characteristic matching ``name``.
    """
    modified = specification_service.delete_characteristic(db, spec_id, data.name)
    return CharacteristicChangeResult(modified=modified)
