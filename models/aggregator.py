"""
Reminder aggregation across tasks, warranties and contracts.

aggregate() is pure: it merges already-fetched records into one list of
actionable ReminderItems sorted by due date. fetch_reminders() reads the
collections it needs from a store concurrently and degrades to an empty
list when any read fails.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Dict, Iterable, List, Optional

from .asset import Asset
from .calculations import DUE_SOON_DAYS, reminder_status
from .maintenance_task import MaintenanceTask
from .reminder import ReminderItem, ReminderType
from .requirement import AssetLink
from .service_contract import ServiceContract
from .status import ReminderStatus
from .warranty import Warranty

logger = logging.getLogger(__name__)

UNKNOWN_ASSET = "Unknown Asset"
GENERAL = "General"
LINKED_ASSET = "Linked Asset"

REMINDER_COLLECTIONS = (
    "maintenanceTasks",
    "warranties",
    "serviceContracts",
    "assets",
    "assetWarranties",
    "assetContracts",
)


def _linked_names(
    links: Iterable[AssetLink], asset_names: Dict[str, str]
) -> Dict[str, str]:
    """Map warranty/contract id -> comma-joined names of covered assets."""
    names: Dict[str, List[str]] = {}
    for link in links:
        coverage_id = link.coverage_id
        if coverage_id is None:
            continue
        name = asset_names.get(link.asset_id, UNKNOWN_ASSET)
        if name not in names.setdefault(coverage_id, []):
            names[coverage_id].append(name)
    return {cid: ", ".join(n) for cid, n in names.items()}


def aggregate(
    tasks: Iterable[MaintenanceTask],
    warranties: Iterable[Warranty],
    contracts: Iterable[ServiceContract],
    assets: Iterable[Asset],
    reference_date: date,
    horizon_days: int = DUE_SOON_DAYS,
    asset_links: Optional[Iterable[AssetLink]] = None,
) -> List[ReminderItem]:
    """
    Merge dated obligations into one list of overdue and due-soon reminders.

    Items further out than horizon_days are dropped. Warranty and contract
    items name their assets through asset_links; without a link they fall
    back to LINKED_ASSET.
    """
    asset_names = {a.id: a.name for a in assets}
    linked = _linked_names(asset_links or [], asset_names)

    def task_asset(asset_id: Optional[str]) -> str:
        if not asset_id:
            return GENERAL
        return asset_names.get(asset_id, UNKNOWN_ASSET)

    def actionable(due: date) -> Optional[ReminderStatus]:
        status = reminder_status(reference_date, due, horizon_days)
        return None if status == ReminderStatus.UPCOMING else status

    reminders: List[ReminderItem] = []

    for task in tasks:
        if not task.is_active or task.next_due_date is None:
            continue
        status = actionable(task.next_due_date)
        if status is None:
            continue
        reminders.append(
            ReminderItem(
                id=task.id,
                title=task.task_name,
                due_date=task.next_due_date,
                type=ReminderType.MAINTENANCE,
                status=status,
                asset_name=task_asset(task.asset_id),
                details=task.description or "Routine maintenance",
                cost=task.estimated_cost,
            )
        )

    for warranty in warranties:
        if not warranty.is_active:
            continue
        asset_name = linked.get(warranty.id, LINKED_ASSET)
        if warranty.end_date is not None:
            status = actionable(warranty.end_date)
            if status is not None:
                reminders.append(
                    ReminderItem(
                        id=warranty.id,
                        title=f"{warranty.warranty_name} Expiry",
                        due_date=warranty.end_date,
                        type=ReminderType.WARRANTY,
                        status=status,
                        asset_name=asset_name,
                        details=f"Provider: {warranty.provider_name}",
                    )
                )
        # Registration is independent of the expiry window
        if warranty.needs_registration:
            status = actionable(warranty.registration_deadline)
            if status is not None:
                reminders.append(
                    ReminderItem(
                        id=f"{warranty.id}_reg",
                        title=f"Register {warranty.warranty_name}",
                        due_date=warranty.registration_deadline,
                        type=ReminderType.REGISTRATION,
                        status=status,
                        asset_name=asset_name,
                        details="Registration required to activate warranty",
                    )
                )

    for contract in contracts:
        if not contract.is_active or contract.end_date is None:
            continue
        status = actionable(contract.end_date)
        if status is None:
            continue
        renewal = "Auto-renews" if contract.auto_renews else "Manual renewal required"
        reminders.append(
            ReminderItem(
                id=contract.id,
                title=f"{contract.contract_name} Renewal",
                due_date=contract.end_date,
                type=ReminderType.CONTRACT,
                status=status,
                asset_name=linked.get(contract.id, LINKED_ASSET),
                details=f"Provider: {contract.provider_name}. {renewal}",
                cost=contract.cost_amount,
            )
        )

    reminders.sort(key=lambda r: r.due_date)
    return reminders


def fetch_collections(store, collections: Iterable[str]) -> Dict[str, list]:
    """
    Read several collections concurrently and join once all have finished.

    The first failure is re-raised after every read has settled.
    """
    collections = list(collections)
    with ThreadPoolExecutor(max_workers=len(collections) or 1) as executor:
        futures = {name: executor.submit(store.list, name) for name in collections}
        return {name: future.result() for name, future in futures.items()}


def fetch_reminders(
    store, reference_date: date, horizon_days: int = DUE_SOON_DAYS
) -> List[ReminderItem]:
    """Fetch everything reminders need and aggregate; empty list on failure."""
    try:
        data = fetch_collections(store, REMINDER_COLLECTIONS)
    except Exception:
        logger.exception("Error fetching reminders")
        return []

    return aggregate(
        data["maintenanceTasks"],
        data["warranties"],
        data["serviceContracts"],
        data["assets"],
        reference_date,
        horizon_days=horizon_days,
        asset_links=data["assetWarranties"] + data["assetContracts"],
    )
