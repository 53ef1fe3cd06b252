"""YAML-backed record store for assets and their maintenance data."""

import uuid
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import yaml

from .asset import Asset, AssetStatus
from .calculations import calc_next_due_date, first_due_date
from .maintenance_task import IntervalType, MaintenanceTask, Priority
from .requirement import AssetLink, Requirement
from .service_contract import CostType, RenewalType, ServiceContract
from .service_record import PERFORMED_BY, ServiceRecord
from .status import HealthStatus
from .warranty import RegistrationStatus, Warranty

Converter = Optional[Callable[[Any], Any]]


class RecordNotFound(LookupError):
    """Raised when no record with the requested id exists."""


def _to_date(value: Union[str, date, None]) -> Optional[date]:
    """Accept YAML dates (parsed or quoted) and reduce datetimes to dates."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


# camelCase key -> (attribute name, converter)
_ASSET_FIELDS: Dict[str, Tuple[str, Converter]] = {
    "id": ("id", None),
    "name": ("name", None),
    "category": ("category", None),
    "purchaseDate": ("purchase_date", _to_date),
    "purchasePrice": ("purchase_price", None),
    "inServiceDate": ("in_service_date", _to_date),
    "manufacturer": ("manufacturer", None),
    "model": ("model", None),
    "serialNumber": ("serial_number", None),
    "location": ("location", None),
    "notes": ("notes", None),
    "currentMileage": ("current_mileage", None),
    "currentHours": ("current_hours", None),
    "status": ("status", AssetStatus),
    "healthStatus": ("health_status", HealthStatus),
    "healthScore": ("health_score", None),
}

_TASK_FIELDS: Dict[str, Tuple[str, Converter]] = {
    "id": ("id", None),
    "assetId": ("asset_id", None),
    "taskName": ("task_name", None),
    "description": ("description", None),
    "category": ("category", None),
    "intervalType": ("interval_type", IntervalType),
    "intervalDays": ("interval_days", None),
    "intervalMiles": ("interval_miles", None),
    "intervalHours": ("interval_hours", None),
    "specificDate": ("specific_date", _to_date),
    "lastCompletedDate": ("last_completed_date", _to_date),
    "lastCompletedMileage": ("last_completed_mileage", None),
    "nextDueDate": ("next_due_date", _to_date),
    "nextDueMileage": ("next_due_mileage", None),
    "estimatedCost": ("estimated_cost", None),
    "isActive": ("is_active", None),
    "isRequiredByContract": ("is_required_by_contract", None),
    "priority": ("priority", Priority),
}

_WARRANTY_FIELDS: Dict[str, Tuple[str, Converter]] = {
    "id": ("id", None),
    "warrantyName": ("warranty_name", None),
    "warrantyType": ("warranty_type", None),
    "providerName": ("provider_name", None),
    "startDate": ("start_date", _to_date),
    "endDate": ("end_date", _to_date),
    "isActive": ("is_active", None),
    "registrationStatus": ("registration_status", RegistrationStatus),
    "registrationDeadline": ("registration_deadline", _to_date),
    "deductible": ("deductible", None),
    "purchasePrice": ("purchase_price", None),
}

_CONTRACT_FIELDS: Dict[str, Tuple[str, Converter]] = {
    "id": ("id", None),
    "contractName": ("contract_name", None),
    "providerName": ("provider_name", None),
    "contractType": ("contract_type", None),
    "startDate": ("start_date", _to_date),
    "endDate": ("end_date", _to_date),
    "isActive": ("is_active", None),
    "renewalType": ("renewal_type", RenewalType),
    "costType": ("cost_type", CostType),
    "costAmount": ("cost_amount", None),
}

_REQUIREMENT_FIELDS: Dict[str, Tuple[str, Converter]] = {
    "id": ("id", None),
    "maintenanceTaskId": ("maintenance_task_id", None),
    "contractId": ("contract_id", None),
    "warrantyId": ("warranty_id", None),
    "isRequired": ("is_required", None),
    "requirementDescription": ("requirement_description", None),
    "consequenceIfMissed": ("consequence_if_missed", None),
    "isCompliant": ("is_compliant", None),
}

_LINK_FIELDS: Dict[str, Tuple[str, Converter]] = {
    "id": ("id", None),
    "assetId": ("asset_id", None),
    "warrantyId": ("warranty_id", None),
    "contractId": ("contract_id", None),
}

_RECORD_FIELDS: Dict[str, Tuple[str, Converter]] = {
    "id": ("id", None),
    "assetId": ("asset_id", None),
    "maintenanceTaskId": ("maintenance_task_id", None),
    "serviceName": ("service_name", None),
    "serviceDate": ("service_date", _to_date),
    "performedBy": ("performed_by", None),
    "totalCost": ("total_cost", None),
    "mileageAtService": ("mileage_at_service", None),
    "notes": ("notes", None),
}

COLLECTIONS: Dict[str, Tuple[type, Dict[str, Tuple[str, Converter]]]] = {
    "assets": (Asset, _ASSET_FIELDS),
    "maintenanceTasks": (MaintenanceTask, _TASK_FIELDS),
    "warranties": (Warranty, _WARRANTY_FIELDS),
    "serviceContracts": (ServiceContract, _CONTRACT_FIELDS),
    "contractRequirements": (Requirement, _REQUIREMENT_FIELDS),
    "warrantyRequirements": (Requirement, _REQUIREMENT_FIELDS),
    "assetWarranties": (AssetLink, _LINK_FIELDS),
    "assetContracts": (AssetLink, _LINK_FIELDS),
    "serviceRecords": (ServiceRecord, _RECORD_FIELDS),
}


def _schema(collection: str) -> Tuple[type, Dict[str, Tuple[str, Converter]]]:
    if collection not in COLLECTIONS:
        raise KeyError(f"Unknown collection '{collection}'")
    return COLLECTIONS[collection]


def _parse_record(collection: str, dct: Dict[str, Any]) -> Any:
    """Parse a camelCase dictionary into the collection's record type."""
    cls, fields = _schema(collection)
    kwargs = {}
    for key, (attr, convert) in fields.items():
        value = dct.get(key)
        if value is not None and convert is not None:
            value = convert(value)
        if value is not None:
            kwargs[attr] = value
    return cls(**kwargs)


def _record_to_dict(collection: str, record: Any) -> Dict[str, Any]:
    """Serialize a record to the YAML dict format, omitting None values."""
    _, fields = _schema(collection)
    d: Dict[str, Any] = {}
    for key, (attr, _) in fields.items():
        value = getattr(record, attr, None)
        if value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, date):
            value = value.isoformat()
        d[key] = value
    return d


def _dump(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    with open(filename, "w") as fp:
        yaml.dump(
            data,
            fp,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
            width=120,
        )


def create_data_file(filename: Union[str, Path]) -> None:
    """Create a new data file with every collection empty."""
    _dump(filename, {name: [] for name in COLLECTIONS})


class YamlStore:
    """
    CRUD access to a single YAML data file.

    Every call re-reads the file so separate processes (CLI, web) see each
    other's writes. Filters passed to list() are equality predicates on
    record attributes, e.g. store.list("maintenanceTasks", asset_id="a1").
    """

    def __init__(self, filename: Union[str, Path]):
        self.filename = Path(filename)

    def _load(self) -> Dict[str, Any]:
        with open(self.filename, "r") as fp:
            data = yaml.load(fp, Loader=yaml.SafeLoader) or {}
        for name in COLLECTIONS:
            if data.get(name) is None:
                data[name] = []
        return data

    def list(self, collection: str, **filters: Any) -> List[Any]:
        _schema(collection)
        records = [_parse_record(collection, d) for d in self._load()[collection]]
        for attr, expected in filters.items():
            records = [r for r in records if getattr(r, attr, None) == expected]
        return records

    def get(self, collection: str, record_id: str) -> Any:
        _schema(collection)
        for dct in self._load()[collection]:
            if dct.get("id") == record_id:
                return _parse_record(collection, dct)
        raise RecordNotFound(f"No {collection} record with id '{record_id}'")

    def create(self, collection: str, record: Any) -> Any:
        _schema(collection)
        data = self._load()
        if record.id is None:
            record.id = str(uuid.uuid4())
        data[collection].append(_record_to_dict(collection, record))
        _dump(self.filename, data)
        return record

    def update(self, collection: str, record: Any) -> Any:
        _schema(collection)
        data = self._load()
        rows = data[collection]
        for index, dct in enumerate(rows):
            if dct.get("id") == record.id:
                rows[index] = _record_to_dict(collection, record)
                _dump(self.filename, data)
                return record
        raise RecordNotFound(f"No {collection} record with id '{record.id}'")

    def delete(self, collection: str, record_id: str) -> None:
        _schema(collection)
        data = self._load()
        rows = data[collection]
        remaining = [d for d in rows if d.get("id") != record_id]
        if len(remaining) == len(rows):
            raise RecordNotFound(f"No {collection} record with id '{record_id}'")
        data[collection] = remaining
        _dump(self.filename, data)


# Coverage collection -> link collection and the link attribute naming it
COVERAGE_LINKS = {
    "warranties": ("assetWarranties", "warranty_id"),
    "serviceContracts": ("assetContracts", "contract_id"),
}


def add_task(store: YamlStore, task: MaintenanceTask, reference_date: date) -> MaintenanceTask:
    """
    Save a new maintenance task.

    The asset must exist. Without an explicit next due date one is derived
    from the last completion or the task's specific date.
    """
    if task.asset_id:
        store.get("assets", task.asset_id)
    if task.next_due_date is None:
        task.next_due_date = first_due_date(task, reference_date)
    return store.create("maintenanceTasks", task)


def add_coverage(store: YamlStore, collection: str, record: Any, asset_id: Optional[str] = None) -> Any:
    """Save a warranty or service contract, linking it to asset_id when given."""
    if collection not in COVERAGE_LINKS:
        raise KeyError(f"'{collection}' is not a coverage collection")
    link_collection, link_attr = COVERAGE_LINKS[collection]
    if asset_id:
        store.get("assets", asset_id)

    store.create(collection, record)
    if asset_id:
        store.create(link_collection, AssetLink(asset_id=asset_id, **{link_attr: record.id}))
    return record


def add_requirement(store: YamlStore, requirement: Requirement) -> Requirement:
    """Save a contract or warranty requirement after checking what it points at."""
    store.get("maintenanceTasks", requirement.maintenance_task_id)
    if requirement.contract_id:
        store.get("serviceContracts", requirement.contract_id)
        return store.create("contractRequirements", requirement)
    if requirement.warranty_id:
        store.get("warranties", requirement.warranty_id)
        return store.create("warrantyRequirements", requirement)
    raise ValueError("Requirement needs a contract or a warranty")


def complete_task(
    store: YamlStore,
    task_id: str,
    completed_on: date,
    mileage: Optional[int] = None,
    cost: Optional[float] = None,
    performed_by: Optional[str] = None,
    notes: Optional[str] = None,
) -> ServiceRecord:
    """
    Log a completed maintenance task.

    Writes a service record, stamps the task's last completion and advances
    its next due date (and next due mileage for usage-based intervals).
    """
    if performed_by is not None and performed_by not in PERFORMED_BY:
        raise ValueError(
            f"Invalid performed_by '{performed_by}' (expected one of: {', '.join(PERFORMED_BY)})"
        )

    task = store.get("maintenanceTasks", task_id)

    record = ServiceRecord(
        asset_id=task.asset_id,
        maintenance_task_id=task.id,
        service_name=task.task_name,
        service_date=completed_on,
        performed_by=performed_by,
        total_cost=cost,
        mileage_at_service=mileage,
        notes=notes,
    )
    store.create("serviceRecords", record)

    task.last_completed_date = completed_on
    task.next_due_date = calc_next_due_date(task, completed_on)
    if mileage is not None:
        task.last_completed_mileage = mileage
        if task.interval_miles:
            task.next_due_mileage = mileage + task.interval_miles
    store.update("maintenanceTasks", task)

    if mileage is not None and task.asset_id:
        try:
            asset = store.get("assets", task.asset_id)
        except RecordNotFound:
            return record
        if asset.current_mileage is None or mileage > asset.current_mileage:
            asset.current_mileage = mileage
            store.update("assets", asset)

    return record
