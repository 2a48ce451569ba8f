import io
import logging

from openpyxl import Workbook
from sqlalchemy.orm import Session

import order_console.repositories.specification as specification_repo
from order_console.db.models.service_specification import (
    ServiceSpecification as ServiceSpecificationModel,
)
from order_console.domain.templates import product_specifications
from order_console.errors import DuplicateResourceError, NotFoundError
from order_console.schemas.specification import SpecCharacteristic

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ("Field Name", "Value Type", "Mandatory")
EXPORT_COLUMN_WIDTHS = {"A": 30, "B": 15, "C": 12}


def get_specification(db: Session, spec_id: str) -> ServiceSpecificationModel:
    """
    Get a specification document.

    Raises:
        NotFoundError: If the specification doesn't exist
    """
    spec = specification_repo.get_specification_by_id(db, spec_id)
    if not spec:
        raise NotFoundError(f"Specification '{spec_id}' not found")
    return spec


def _index_of(characteristics: list[dict], name: str) -> int | None:
    for index, characteristic in enumerate(characteristics):
        if characteristic.get("name") == name:
            return index
    return None


def update_characteristic(
    db: Session,
    spec_id: str,
    old_name: str,
    new_name: str | None = None,
    min_cardinality: int | None = None,
) -> int:
    """
    Rename a characteristic and/or change its minimum cardinality.

    - Validates the specification and the characteristic exist
    - Rejects a rename onto a name already used in the same specification

    Returns:
        Number of characteristics modified (0 when nothing changed)

    Raises:
        NotFoundError: If the specification or characteristic doesn't exist
        DuplicateResourceError: If ``new_name`` is already taken
    """
    spec = get_specification(db, spec_id)
    characteristics = [dict(c) for c in spec.spec_characteristic]

    index = _index_of(characteristics, old_name)
    if index is None:
        raise NotFoundError(f"Characteristic '{old_name}' not found in '{spec_id}'")

    target = characteristics[index]
    changed = False

    if new_name and new_name != old_name:
        if _index_of(characteristics, new_name) is not None:
            raise DuplicateResourceError(
                f"Characteristic '{new_name}' already exists in '{spec_id}'"
            )
        target["name"] = new_name
        changed = True

    if min_cardinality is not None and target.get("minCardinality") != min_cardinality:
        target["minCardinality"] = min_cardinality
        changed = True

    if not changed:
        return 0

    specification_repo.replace_characteristics(db, spec, characteristics)
    logger.info("Updated characteristic %s in %s", old_name, spec_id)
    return 1


def add_characteristic(
    db: Session,
    spec_id: str,
    name: str,
    value_type: str,
    min_cardinality: int = 0,
) -> SpecCharacteristic:
    """
    Append a configurable characteristic with ``maxCardinality`` 1.

    Raises:
        NotFoundError: If the specification doesn't exist
        DuplicateResourceError: If the name is already used in the specification
    """
    spec = get_specification(db, spec_id)
    characteristics = [dict(c) for c in spec.spec_characteristic]

    if _index_of(characteristics, name) is not None:
        raise DuplicateResourceError(f"Characteristic '{name}' already exists in '{spec_id}'")

    characteristic = SpecCharacteristic(
        name=name,
        value_type=value_type,
        configurable=True,
        min_cardinality=min_cardinality,
        max_cardinality=1,
    )
    characteristics.append(characteristic.model_dump(by_alias=True))
    specification_repo.replace_characteristics(db, spec, characteristics)
    logger.info("Added characteristic %s to %s", name, spec_id)
    return characteristic


def delete_characteristic(db: Session, spec_id: str, name: str) -> int:
    """
    Remove the first characteristic called ``name``.

    Raises:
        NotFoundError: If the specification or characteristic doesn't exist
    """
    spec = get_specification(db, spec_id)
    characteristics = [dict(c) for c in spec.spec_characteristic]

    index = _index_of(characteristics, name)
    if index is None:
        raise NotFoundError(f"Characteristic '{name}' not found in '{spec_id}'")

    del characteristics[index]
    specification_repo.replace_characteristics(db, spec, characteristics)
    logger.info("Deleted characteristic %s from %s", name, spec_id)
    return 1


def export_sheets(db: Session) -> list[tuple[str, list[tuple[str, str, str]]]]:
    """(product, rows) for every ConnectX product, each row (field, type, mandatory).

    Products whose specification is missing from the store are skipped
    with a warning.
    """
    products = product_specifications()
    specs = {
        spec.id: spec
        for spec in specification_repo.get_specifications_by_ids(
            db, [spec_id for _, spec_id in products]
        )
    }

    sheets = []
    for product, spec_id in products:
        spec = specs.get(spec_id)
        if spec is None:
            logger.warning("Skipping %s in export: specification %s not found", product, spec_id)
            continue
        rows = []
        for raw in spec.spec_characteristic:
            characteristic = SpecCharacteristic.model_validate(raw)
            rows.append(
                (
                    characteristic.name,
                    characteristic.value_type,
                    "true" if characteristic.mandatory else "false",
                )
            )
        sheets.append((product, rows))
    return sheets


def export_workbook(db: Session) -> bytes:
    """Build the specifications workbook: one worksheet per product."""
    workbook = Workbook()
    workbook.remove(workbook.active)

    for product, rows in export_sheets(db):
        worksheet = workbook.create_sheet(title=product)
        worksheet.append(EXPORT_COLUMNS)
        for row in rows:
            worksheet.append(row)
        for column, width in EXPORT_COLUMN_WIDTHS.items():
            worksheet.column_dimensions[column].width = width

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
