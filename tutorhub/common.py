from enum import Enum
from typing import Annotated, ClassVar, Tuple

from bson import ObjectId
from pydantic import AfterValidator, BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

# ==================== SHARED ENUMS ====================

class Grade(str, Enum):
    FIRST = "first"
    SECOND = "second"
    THIRD = "third"
    ALL = "all"


def _check_object_id(value: str) -> str:
    if not ObjectId.is_valid(value):
        raise ValueError("must be a 24 character hex identifier")
    return value


# References are stored as the referenced document's hex id
ObjectIdStr = Annotated[str, AfterValidator(_check_object_id)]

# ==================== BASE MODEL ====================

class CamelModel(BaseModel):
    """
    snake_case attributes, camelCase on the wire and in MongoDB
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )

    def to_document(self, **kwargs) -> dict:
        return self.model_dump(by_alias=True, **kwargs)

    def changed_fields(self) -> dict:
        """Only the fields the client actually sent"""
        return self.model_dump(by_alias=True, exclude_unset=True)


class PartialUpdate(CamelModel):
    """
    PUT body: omitted fields are left alone.
    Fields listed in `non_nullable` may be omitted but not sent as null.
    """
    non_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_nulls(self):
        nulled = [
            name for name in self.non_nullable
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"{', '.join(nulled)} cannot be null")
        return self
