"""seed ConnectX service specifications

Revision ID: 002
Revises: 001
Create Date: 2025-09-01 10:05:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _c(name: str, mandatory: bool = True, value_type: str = "string") -> dict:
    return {
        "name": name,
        "valueType": value_type,
        "configurable": True,
        "minCardinality": 1 if mandatory else 0,
        "maxCardinality": 1,
    }


_CUSTOMER = [
    _c("externalId"),
    _c("nonMobileNo"),
    _c("customerName"),
    _c("caNo"),
    _c("customerAccountName"),
]

SPECIFICATIONS = [
    {
        "id": "CFSS_ConnectX_Port",
        "name": "CFSS_ConnectX_Port",
        "description": "ConnectX customer port",
        "spec_characteristic": _CUSTOMER
        + [
            _c("cableType"),
            _c("nonMobileMain", mandatory=False),
            _c("customerSiteCode"),
            _c("dcLocation"),
            _c("portType"),
            _c("isDiversity", mandatory=False, value_type="boolean"),
            _c("diversityNonmobile", mandatory=False),
            _c("serviceVlanType", mandatory=False),
            _c("networkServiceType"),
            _c("reservedPortId"),
            _c("orderRef"),
            _c("remark", mandatory=False),
        ],
    },
    {
        "id": "CFSS_ConnectX_LAG",
        "name": "CFSS_ConnectX_LAG",
        "description": "ConnectX link aggregation group",
        "spec_characteristic": _CUSTOMER
        + [
            _c("cableType"),
            _c("customerSiteCode"),
            _c("bandwidth", mandatory=False),
            _c("dcLocation"),
            _c("portType"),
            _c("lagNumber", mandatory=False),
            _c("serviceVlanType"),
            _c("networkServiceType"),
            _c("orderRef"),
            _c("releasePort", mandatory=False, value_type="StringArray"),
            _c("remark", mandatory=False),
        ],
    },
    {
        "id": "CFSS_ConnectX_VXC",
        "name": "CFSS_ConnectX_VXC",
        "description": "ConnectX virtual cross connect",
        "spec_characteristic": _CUSTOMER
        + [
            _c("bandwidth"),
            _c("vlanId"),
            _c("networkServiceType"),
            _c("orderRef"),
            _c("burstOrderType", mandatory=False),
            _c("bustLinkSpeed", mandatory=False),
            _c("gcpLinkType", mandatory=False),
            _c("burstEffectiveDate", mandatory=False),
            _c("burstEndDate", mandatory=False),
            _c("remark", mandatory=False),
        ],
    },
    {
        "id": "CFSS_ConnectX_VXC_Cloud",
        "name": "CFSS_ConnectX_VXC_Cloud",
        "description": "ConnectX virtual cross connect to a cloud provider",
        "spec_characteristic": _CUSTOMER
        + [
            _c("bandwidth"),
            _c("cloudProvider"),
            _c("vlanId"),
            _c("orderRef"),
            _c("remark", mandatory=False),
        ],
    },
]


def upgrade() -> None:
    specifications = sa.table(
        "service_specifications",
        sa.column("id", sa.String),
        sa.column("name", sa.String),
        sa.column("description", sa.String),
        sa.column("spec_type", sa.String),
        sa.column("version", sa.String),
        sa.column("lifecycle_status", sa.String),
        sa.column("spec_characteristic", sa.JSON),
    )
    op.bulk_insert(
        specifications,
        [
            {
                **spec,
                "spec_type": "CustomerFacingServiceSpecification",
                "version": "1.0",
                "lifecycle_status": "Active",
            }
            for spec in SPECIFICATIONS
        ],
    )


def downgrade() -> None:
    ids = ", ".join(f"'{spec['id']}'" for spec in SPECIFICATIONS)
    op.execute(sa.text(f"DELETE FROM service_specifications WHERE id IN ({ids})"))
