"""
Typed records for HCM tool results.

Remote items are validated into these models field by field; an item that
does not validate is dropped by ``collect_valid`` instead of failing the
whole call. Field aliases carry the wire keys: ``validation_alias`` is the
key in the HCM payload, ``serialization_alias`` the key in the tool result.
"""

from datetime import datetime
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..bridge_core.logger import get_logger

logger = get_logger(__name__)

REMOTE_DATE_FORMAT = "%Y-%m-%d"
DISPLAY_DATE_FORMAT = "%d-%m-%Y"

RecordT = TypeVar("RecordT", bound=BaseModel)


class _Record(BaseModel):
    # strict: a number where HCM should send a string means a malformed item
    model_config = ConfigDict(strict=True, populate_by_name=True)


class WorkerRecord(_Record):
    """First item of a publicWorkers lookup."""

    person_id: str = Field(validation_alias="PersonId")


class PersonIdResult(_Record):
    """Result of resolving a Westpac employee ID."""

    person_id: str = Field(alias="PersonId")


class AbsenceType(_Record):
    """An absence type available to a person, with the employer it belongs to."""

    type_id: str = Field(alias="AbsenceTypeId")
    employer_id: str = Field(alias="EmployerId")
    type_name: str = Field(alias="AbsenceTypeName")


class AbsenceTypesResult(BaseModel):
    absence_types: List[AbsenceType] = Field(default_factory=list)


class AbsenceBalance(_Record):
    """
    Current balance of one absence plan.

    Attributes:
        plan_name: Display name of the plan.
        carry_over: Whether the plan carries over across years.
        plan_status: Human-readable plan status.
        formatted_balance: Balance as formatted by HCM, e.g. "76.0 Hours".
        balance_calculation_date: Date the balance was calculated, DD-MM-YYYY.
    """

    plan_name: str = Field(validation_alias="planName", serialization_alias="planName")
    carry_over: bool = Field(validation_alias="multiYearCarryOverFlag", serialization_alias="carryOver")
    plan_status: str = Field(validation_alias="planStatusMeaning", serialization_alias="planStatus")
    formatted_balance: str = Field(validation_alias="formattedBalance", serialization_alias="formattedBalance")
    balance_calculation_date: str = Field(
        validation_alias="balanceCalculationDate", serialization_alias="balanceCalculationDate"
    )

    @field_validator("balance_calculation_date")
    @classmethod
    def _to_display_date(cls, value: str) -> str:
        return datetime.strptime(value, REMOTE_DATE_FORMAT).strftime(DISPLAY_DATE_FORMAT)


class AbsenceBalancesResult(BaseModel):
    absence_balances: List[AbsenceBalance] = Field(default_factory=list)


class ProjectedBalanceResult(BaseModel):
    """Projected balance for one absence type."""

    absence_type_id: Optional[str] = None
    projected_balance: str


def response_items(payload: Any) -> List[Any]:
    """Return the ``items`` array of an HCM collection response, or an empty list."""
    if isinstance(payload, dict):
        items = payload.get("items")
        if isinstance(items, list):
            return items
    return []


def collect_valid(payload: Any, model: Type[RecordT]) -> List[RecordT]:
    """Validate every item of a collection response, keeping only the valid ones.

    Args:
        payload: Decoded HCM collection response.
        model: Record model each item is validated into.

    Returns:
        The records that validated, in response order.
    """
    records: List[RecordT] = []
    for index, item in enumerate(response_items(payload)):
        try:
            records.append(model.model_validate(item))
        except ValidationError as e:
            logger.debug("Dropping malformed %s item %d: %s", model.__name__, index, e)
    return records
