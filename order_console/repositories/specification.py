from sqlalchemy.orm import Session

from order_console.db.models.service_specification import (
    ServiceSpecification as ServiceSpecificationModel,
)


def get_specification_by_id(db: Session, spec_id: str) -> ServiceSpecificationModel | None:
    """Get a service specification by ID."""
    return (
        db.query(ServiceSpecificationModel)
        .filter(ServiceSpecificationModel.id == spec_id)
        .first()
    )


def get_specifications_by_ids(db: Session, spec_ids: list[str]) -> list[ServiceSpecificationModel]:
    """Get the specifications whose ID is in ``spec_ids``, in the order given."""
    found = {
        spec.id: spec
        for spec in db.query(ServiceSpecificationModel)
        .filter(ServiceSpecificationModel.id.in_(spec_ids))
        .all()
    }
    return [found[spec_id] for spec_id in spec_ids if spec_id in found]


def replace_characteristics(
    db: Session, spec: ServiceSpecificationModel, characteristics: list[dict]
) -> ServiceSpecificationModel:
    """Store a new characteristic list on ``spec``.

    The JSON column only notices reassignment, so callers must pass a new
    list rather than mutate the old one.
    """
    spec.spec_characteristic = characteristics
    db.commit()
    db.refresh(spec)
    return spec
