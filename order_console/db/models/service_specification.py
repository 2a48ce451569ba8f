from sqlalchemy import JSON, Column, String

from order_console.db.base import Base


class ServiceSpecification(Base):
    __tablename__ = "service_specifications"

    id = Column(String(128), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(String, nullable=False, default="")
    spec_type = Column(String(128), nullable=False, default="CustomerFacingServiceSpecification")
    version = Column(String(32), nullable=False, default="1.0")
    lifecycle_status = Column(String(64), nullable=False, default="Active")
    # List of characteristic documents: name, valueType, configurable, minCardinality, maxCardinality
    spec_characteristic = Column(JSON, nullable=False, default=list)
