from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SpecCharacteristic(_CamelModel):
    name: str
    value_type: str
    configurable: bool = True
    min_cardinality: int = 0
    max_cardinality: int = 1

    @property
    def mandatory(self) -> bool:
        return self.min_cardinality >= 1


class ServiceSpecification(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    spec_type: str = Field(
        validation_alias=AliasChoices("@type", "spec_type"),
        serialization_alias="@type",
    )
    id: str
    name: str
    description: str = ""
    version: str = "1.0"
    lifecycle_status: str = "Active"
    spec_characteristic: list[SpecCharacteristic] = Field(
        default_factory=list,
        validation_alias=AliasChoices("specCharacteristic", "spec_characteristic"),
        serialization_alias="specCharacteristic",
    )


class CharacteristicCreate(_CamelModel):
    name: str = Field(..., min_length=1)
    value_type: str = Field(..., min_length=1)
    min_cardinality: int = Field(default=0, ge=0)


class CharacteristicUpdate(_CamelModel):
    old_name: str = Field(..., min_length=1)
    new_name: str | None = None
    min_cardinality: int | None = Field(default=None, ge=0)


class CharacteristicDelete(_CamelModel):
    name: str = Field(..., min_length=1)


class CharacteristicChangeResult(BaseModel):
    success: bool = True
    modified: int


class CharacteristicCreateResult(BaseModel):
    success: bool = True
    characteristic: SpecCharacteristic
