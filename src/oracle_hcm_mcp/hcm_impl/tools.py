"""The Oracle HCM tools: validate input, call the REST API, normalize the payload."""

import json
from datetime import date, datetime
from typing import Annotated, Callable, List, Optional
from urllib.parse import quote

from pydantic import Field, ValidationError

from ..bridge_core.exceptions import InternalError, InvalidParamsError
from ..bridge_core.http import HcmHttpClient
from ..bridge_core.logger import get_logger
from .models import (
    DISPLAY_DATE_FORMAT,
    REMOTE_DATE_FORMAT,
    AbsenceBalance,
    AbsenceBalancesResult,
    AbsenceType,
    AbsenceTypesResult,
    PersonIdResult,
    ProjectedBalanceResult,
    WorkerRecord,
    collect_valid,
    response_items,
)

logger = get_logger(__name__)

# loadProjectedBalance is computed synchronously by HCM and regularly takes close to a minute
PROJECTION_TIMEOUT_SECONDS = 60.0
PROJECTION_HOURS_PER_DAY = 7.6
PROJECTION_UOM_HOURS = "H"

PROJECTED_BALANCE_PATH = "/absences/action/loadProjectedBalance"

EmployeeId = Annotated[str, Field(description="Unique Westpac Employee ID, e.g. M061230")]
PersonId = Annotated[str, Field(description="Unique PersonID in Oracle HCM, e.g. 300000578701661")]
BalanceAsOfDate = Annotated[
    Optional[str],
    Field(
        description=(
            "Effective date (Balance As Of Date) for the balance in DD-MM-YYYY format, e.g. 31-12-2025. "
            "Defaults to the HCM's system calculated date if not provided."
        )
    ),
]
AbsenceTypeId = Annotated[
    Optional[str], Field(description="The Absence Type ID for the absence balance request, e.g. 300001058681790.")
]
LegalEntityId = Annotated[
    Optional[str], Field(description="The Legal Entity ID for the absence balance request, e.g. 300000001487001.")
]


def _query_value(value: str) -> str:
    return quote(value, safe="")


class OracleHcmTools:
    """
    The four HCM tools, bound to one shared HTTP client.

    Every method validates its input before touching the network. The method
    docstrings are the tool descriptions callers see.
    """

    def __init__(self, client: HcmHttpClient, today: Callable[[], date] = date.today) -> None:
        """Initialize the tool set.

        Args:
            client: HTTP client used for every remote call.
            today: Source of the current local date, used when no projection date is given.
        """
        self._client = client
        self._today = today

    def functions(self) -> List[Callable]:
        """The bound tool methods, in registration order."""
        return [
            self.get_oracle_hcm_person_id_from_westpac_id,
            self.get_absence_types_for_employee_hcm_person_id,
            self.get_all_absence_balances_for_employee_hcm_person_id,
            self.get_projected_balance,
        ]

    async def get_oracle_hcm_person_id_from_westpac_id(self, wbc_employee_id: EmployeeId) -> PersonIdResult:
        """Get Oracle HCM PersonId for a provided Westpac M/F/L id. Example: M061230 is a Westpac Employee ID, but it's corresponding PersonId in Oracle HCM is needed for API/or other Tool calls to HCM."""
        if not wbc_employee_id or not wbc_employee_id.strip():
            raise InvalidParamsError("Westpac Employee ID cannot be empty.")

        # HCM indexes worker numbers upper-cased
        worker_number = wbc_employee_id.strip().upper()
        path = f"/publicWorkers?q=assignments.WorkerNumber='{_query_value(worker_number)}'&onlyData=true&limit=1"

        payload = await self._client.request(path, "GET", send_framework_header=True)

        items = response_items(payload)
        try:
            worker = WorkerRecord.model_validate(items[0]) if items else None
        except ValidationError:
            worker = None
        if worker is None:
            logger.info("No PersonId found for employee ID %s", worker_number)
            raise InvalidParamsError(f"PersonID not found for Westpac Employee ID: {wbc_employee_id}")

        return PersonIdResult(person_id=worker.person_id)

    async def get_absence_types_for_employee_hcm_person_id(self, hcm_person_id: PersonId) -> AbsenceTypesResult:
        """Get the absence type IDs, and Employer IDs which are available in Oracle HCM for a particular employee, based on their PersonId. This data is used during projection of employee absence balances."""
        if not hcm_person_id or not hcm_person_id.strip():
            raise InvalidParamsError("HCM PersonId is required and cannot be empty.")

        path = f"/absenceTypesLOV?onlyData=true&finder=findByWord;PersonId={_query_value(hcm_person_id.strip())}"
        payload = await self._client.request(path, "GET", send_framework_header=True)

        absence_types = collect_valid(payload, AbsenceType)
        logger.debug("Collected %d absence types for person %s", len(absence_types), hcm_person_id)
        return AbsenceTypesResult(absence_types=absence_types)

    async def get_all_absence_balances_for_employee_hcm_person_id(
        self,
        hcm_person_id: PersonId,
        balance_as_of_date: BalanceAsOfDate = None,
        absence_type_id: AbsenceTypeId = None,
        legal_entity_id: LegalEntityId = None,
    ) -> AbsenceBalancesResult:
        """Get all available absence balances for a particular employee, based on their PersonId (the balances are based off a system calculation date, and not projected balances)."""
        if not hcm_person_id or not hcm_person_id.strip():
            raise InvalidParamsError("HCM PersonId cannot be empty.")

        # planBalances rejects REST-Framework-Version unless an effective-date header accompanies it
        path = f"/planBalances?onlyData=true&q=personId={_query_value(hcm_person_id.strip())};planDisplayStatusFlag=true"
        payload = await self._client.request(path, "GET", send_framework_header=False)

        balances = collect_valid(payload, AbsenceBalance)
        logger.debug("Collected %d absence balances for person %s", len(balances), hcm_person_id)
        return AbsenceBalancesResult(absence_balances=balances)

    async def get_projected_balance(
        self,
        hcm_person_id: PersonId,
        balance_as_of_date: BalanceAsOfDate = None,
        absence_type_id: AbsenceTypeId = None,
        legal_entity_id: LegalEntityId = None,
    ) -> ProjectedBalanceResult:
        """Get projected balance for a particular PersonId as well as a projection date/effective date in DD-MM-YYYY format (Balance As Of Date), for a particular AbsenceTypeId"""
        if not hcm_person_id or not hcm_person_id.strip():
            raise InvalidParamsError("HCM PersonId cannot be empty.")

        as_of = self._resolve_as_of_date(balance_as_of_date).strftime(REMOTE_DATE_FORMAT)
        body = json.dumps(
            {
                "entry": {
                    "personId": hcm_person_id.strip(),
                    "legalEntityId": legal_entity_id,
                    "absenceTypeId": absence_type_id,
                    "openEndedFlag": "N",
                    "startDate": as_of,
                    "endDate": as_of,
                    "uom": PROJECTION_UOM_HOURS,
                    "duration": PROJECTION_HOURS_PER_DAY,
                    "startDateDuration": PROJECTION_HOURS_PER_DAY,
                    "endDateDuration": PROJECTION_HOURS_PER_DAY,
                }
            }
        ).encode("utf-8")

        payload = await self._client.request(
            PROJECTED_BALANCE_PATH,
            "POST",
            body=body,
            send_framework_header=True,
            timeout_override=PROJECTION_TIMEOUT_SECONDS,
        )

        result = payload.get("result") if isinstance(payload, dict) else None
        projected = result.get("formattedProjectedBalance") if isinstance(result, dict) else None
        if not isinstance(projected, str):
            logger.error("Projection response for person %s has no formattedProjectedBalance", hcm_person_id)
            raise InternalError("Failed to parse projected balance from response.")

        return ProjectedBalanceResult(absence_type_id=absence_type_id, projected_balance=projected)

    def _resolve_as_of_date(self, balance_as_of_date: Optional[str]) -> date:
        if balance_as_of_date:
            try:
                return datetime.strptime(balance_as_of_date.strip(), DISPLAY_DATE_FORMAT).date()
            except ValueError:
                logger.warning("Unparsable balance_as_of_date %r, projecting as of today", balance_as_of_date)
        return self._today()
