"""
Check-in request and record models.

CheckinRequest describes the JSON body a device posts. CheckinRecord is
the Table Storage entity keyed by (Name, IPv4).

Note: the table key is the (Name, IPv4) pair, so a device that reports
a new address gets a new row instead of updating its previous one.
"""
from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError


# ==========================================
# Request Body
# ==========================================

class CheckinRequest(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    Name: str
    IPv4: str


@dataclass(frozen=True)
class FieldsOk:
    request: CheckinRequest


@dataclass(frozen=True)
class MissingField:
    field: str


@dataclass(frozen=True)
class WrongType:
    field: str


ExtractResult = Union[FieldsOk, MissingField, WrongType]


def extract_fields(document: Any) -> ExtractResult:
    """
    Pull the Name and IPv4 fields out of a parsed JSON document.

    Args:
        document: Result of json.loads on the request body

    Returns:
        FieldsOk with the validated request, or MissingField / WrongType
        naming the first offending field ("$" when the body is not an object)
    """
    if not isinstance(document, dict):
        return WrongType(field="$")

    try:
        return FieldsOk(request=CheckinRequest.model_validate(document))
    except ValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else "$"
        if error["type"] == "missing":
            return MissingField(field=field)
        return WrongType(field=field)


# ==========================================
# Table Entity
# ==========================================

class CheckinRecord(BaseModel):
    """
    A row in the check-in table.

    PartitionKey is the device name and RowKey the IPv4 address. Any other
    properties already stored on the entity are carried along untouched.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    partition_key: str = Field(alias="PartitionKey")
    row_key: str = Field(alias="RowKey")
    # Columns written by other tools may hold any type; apply() overwrites them
    Name: Any = None
    IPv4: Any = None

    @classmethod
    def new(cls, name: str, ipv4: str) -> "CheckinRecord":
        """Empty record for a key that is not in the table yet."""
        return cls(partition_key=name, row_key=ipv4)

    @classmethod
    def from_entity(cls, entity: dict) -> "CheckinRecord":
        return cls.model_validate(dict(entity))

    def to_entity(self) -> dict:
        entity = self.model_dump(by_alias=True)
        # Unset optional columns are not written as nulls
        return {k: v for k, v in entity.items() if v is not None}

    def apply(self, request: CheckinRequest) -> None:
        self.Name = request.Name
        self.IPv4 = request.IPv4
