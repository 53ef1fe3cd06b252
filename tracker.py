#!/usr/bin/env python3
"""
Unified CLI for asset maintenance tracking.

Commands:
  reminders        - Overdue and due-soon tasks, warranty expiries and renewals
  schedule         - Maintenance schedule grouped by urgency
  assets           - List assets with derived health
  add-asset        - Add a new asset
  edit-asset       - Change an existing asset
  add-task         - Add a maintenance task
  add-warranty     - Add a warranty, optionally linked to an asset
  add-contract     - Add a service contract, optionally linked to an asset
  add-requirement  - Mark a task as required by a contract or warranty
  complete         - Log a completed maintenance task
  analytics        - Dashboard counts and cost summary
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from models import (
    PERFORMED_BY,
    TIME_RANGES,
    Asset,
    CostType,
    DueStatus,
    IntervalType,
    MaintenanceTask,
    Priority,
    RecordNotFound,
    RegistrationStatus,
    RenewalType,
    ReminderItem,
    ReminderType,
    Requirement,
    ServiceContract,
    TaskDue,
    Warranty,
    YamlStore,
    add_coverage,
    add_requirement,
    add_task,
    assess_health,
    complete_task,
    days_until,
    fetch_reminders,
    fetch_schedule,
    filter_schedule,
    group_by_status,
)
from models.aggregator import fetch_collections
from models.analytics import cost_metrics, cost_trend, dashboard_stats

logger = logging.getLogger("tracker")

# =============================================================================
# Formatting helpers
# =============================================================================


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def format_date(value: Optional[date]) -> str:
    return value.isoformat() if value is not None else "-"


def format_days(days: int) -> str:
    """Format a day delta, e.g. 'today', 'in 5d' or '3d overdue'."""
    if days == 0:
        return "today"
    if days < 0:
        return f"{abs(days)}d overdue"
    return f"in {days}d"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def parse_date(value: str) -> date:
    """argparse type for YYYY-MM-DD dates."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}' (expected YYYY-MM-DD)")


# =============================================================================
# Reminders command
# =============================================================================


def make_reminder_table(
    reminders: List[ReminderItem], reference_date: date
) -> List[List[str]]:
    """Convert reminders to table rows."""
    rows = []
    for item in reminders:
        days = days_until(reference_date, item.due_date)
        rows.append(
            [
                item.status.value.replace("_", " "),
                item.type.value,
                item.title,
                item.asset_name,
                format_date(item.due_date),
                format_days(days),
                format_cost(item.cost),
            ]
        )
    return rows


def cmd_reminders(args, store: YamlStore) -> int:
    """Show overdue and due-soon items across all collections."""
    reminders = fetch_reminders(store, args.as_of, horizon_days=args.horizon)
    if args.type:
        reminders = [r for r in reminders if r.type.value == args.type]

    print(f"Reminders as of {args.as_of} (next {args.horizon} days)")
    print()

    if not reminders:
        print("You're all caught up!")
        return 0

    headers = ["Status", "Type", "Title", "Asset", "Due", "When", "Cost"]
    print(
        tabulate(
            make_reminder_table(reminders, args.as_of), headers=headers, tablefmt="simple"
        )
    )
    return 0


# =============================================================================
# Schedule command
# =============================================================================

GROUP_TITLES = {
    DueStatus.OVERDUE_REQUIRED: "OVERDUE REQUIRED",
    DueStatus.OVERDUE_OPTIONAL: "OVERDUE (OPTIONAL)",
    DueStatus.DUE_SOON: "DUE SOON",
    DueStatus.UPCOMING: "UPCOMING",
}


def make_schedule_table(entries: List[TaskDue]) -> List[List[str]]:
    """Convert schedule entries to table rows."""
    rows = []
    for entry in entries:
        consequence = "-"
        if entry.requirement is not None:
            consequence = truncate(entry.requirement.consequence_if_missed)
        rows.append(
            [
                entry.task.task_name,
                entry.asset_name,
                entry.task.priority.value,
                format_date(entry.task.next_due_date),
                format_days(entry.days_until_due),
                format_cost(entry.task.estimated_cost),
                consequence,
            ]
        )
    return rows


def cmd_schedule(args, store: YamlStore) -> int:
    """Show the maintenance schedule grouped by urgency."""
    entries = fetch_schedule(store, args.as_of)
    entries = filter_schedule(
        entries, asset_id=args.asset, priority=args.priority, time_range=args.range
    )
    groups = group_by_status(entries)

    print(f"Maintenance schedule as of {args.as_of}")
    if args.range < 999:
        print(f"Filter: due within {args.range} days")
    if args.priority != "all":
        print(f"Filter: priority {args.priority}")
    print()

    headers = ["Task", "Asset", "Priority", "Due", "When", "Est. Cost", "If Missed"]
    shown = 0
    for status, title in GROUP_TITLES.items():
        bucket = groups[status]
        if not bucket:
            continue
        shown += len(bucket)
        print(f"{title} ({len(bucket)}):")
        print(tabulate(make_schedule_table(bucket), headers=headers, tablefmt="simple"))
        print()

    if not shown:
        print("No maintenance due in this range.")
    return 0


# =============================================================================
# Assets commands
# =============================================================================


def cmd_assets(args, store: YamlStore) -> int:
    """List assets with health derived from their task statuses."""
    try:
        assets = store.list("assets")
    except Exception:
        logger.exception("Error fetching assets")
        assets = []
    entries = fetch_schedule(store, args.as_of)

    print(f"Assets: {len(assets)}")
    print()
    if not assets:
        return 0

    rows = []
    for asset in sorted(assets, key=lambda a: a.name.lower()):
        asset_entries = [e for e in entries if e.task.asset_id == asset.id]
        score, health = assess_health(asset_entries)
        due = sum(1 for e in asset_entries if e.is_due)
        rows.append(
            [
                asset.id,
                asset.display_name,
                asset.category,
                asset.status.value,
                f"{health.value} ({score})",
                due,
            ]
        )

    headers = ["ID", "Asset", "Category", "Status", "Health", "Due Tasks"]
    print(tabulate(rows, headers=headers, tablefmt="simple"))
    return 0


def cmd_add_asset(args, store: YamlStore) -> int:
    """Add a new asset."""
    asset = Asset(
        name=args.name,
        category=args.category,
        manufacturer=args.manufacturer,
        model=args.model,
        serial_number=args.serial,
        purchase_date=args.purchase_date,
        purchase_price=args.price,
    )

    print(f"Adding asset to {args.data_file}:")
    print(f"  Name:     {asset.display_name}")
    print(f"  Category: {asset.category}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    try:
        store.create("assets", asset)
    except Exception as e:
        logger.exception("Error creating asset")
        print(f"Error: could not save asset: {e}")
        return 1
    print(f"Asset saved with id {asset.id}.")
    return 0


def cmd_edit_asset(args, store: YamlStore) -> int:
    """Change fields of an existing asset."""
    try:
        asset = store.get("assets", args.asset_id)
    except RecordNotFound:
        print(f"Error: Unknown asset id '{args.asset_id}'")
        return 1
    except Exception as e:
        logger.exception("Error reading asset %s", args.asset_id)
        print(f"Error: could not read {args.data_file}: {e}")
        return 1

    changes = {
        "name": args.name,
        "category": args.category,
        "manufacturer": args.manufacturer,
        "model": args.model,
        "serial_number": args.serial,
        "location": args.location,
        "purchase_date": args.purchase_date,
        "purchase_price": args.price,
        "current_mileage": args.mileage,
    }
    changes = {attr: value for attr, value in changes.items() if value is not None}
    if not changes:
        print("Error: no changes given")
        return 1

    print(f"Updating asset {asset.id} in {args.data_file}:")
    for attr, value in changes.items():
        print(f"  {attr}: {getattr(asset, attr)} -> {value}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    for attr, value in changes.items():
        setattr(asset, attr, value)
    try:
        store.update("assets", asset)
    except Exception as e:
        logger.exception("Error updating asset %s", asset.id)
        print(f"Error: could not save asset: {e}")
        return 1
    print("Asset updated.")
    return 0


# =============================================================================
# Task and coverage commands
# =============================================================================


def cmd_add_task(args, store: YamlStore) -> int:
    """Add a maintenance task, deriving its first due date when possible."""
    task = MaintenanceTask(
        task_name=args.name,
        asset_id=args.asset,
        description=args.description,
        category=args.category,
        interval_type=IntervalType(args.interval_type),
        interval_days=args.days,
        interval_miles=args.miles,
        interval_hours=args.hours,
        specific_date=args.specific_date,
        last_completed_date=args.last_done,
        next_due_date=args.next_due,
        estimated_cost=args.cost,
        is_required_by_contract=args.required,
        priority=Priority(args.priority),
    )

    print(f"Adding task to {args.data_file}:")
    print(f"  Task:     {task.task_name}")
    print(f"  Asset:    {task.asset_id or '-'}")
    print(f"  Interval: {task.interval_label}")
    print(f"  Priority: {task.priority.value}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    try:
        add_task(store, task, args.as_of)
    except RecordNotFound:
        print(f"Error: Unknown asset id '{args.asset}'")
        return 1
    except Exception as e:
        logger.exception("Error creating task")
        print(f"Error: could not save task: {e}")
        return 1
    print(f"Task saved with id {task.id}.")
    print(f"Next due: {format_date(task.next_due_date)}")
    return 0


def save_coverage(args, store: YamlStore, collection: str, record, name: str) -> int:
    print(f"Adding {name} to {args.data_file}:")
    print(f"  Provider: {record.provider_name}")
    print(f"  Ends:     {format_date(record.end_date)}")
    if args.asset:
        print(f"  Asset:    {args.asset}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    try:
        add_coverage(store, collection, record, asset_id=args.asset)
    except RecordNotFound:
        print(f"Error: Unknown asset id '{args.asset}'")
        return 1
    except Exception as e:
        logger.exception("Error creating %s record", collection)
        print(f"Error: could not save {name}: {e}")
        return 1
    print(f"Saved with id {record.id}.")
    return 0


def cmd_add_warranty(args, store: YamlStore) -> int:
    """Add a warranty, optionally linked to an asset."""
    warranty = Warranty(
        warranty_name=args.name,
        provider_name=args.provider,
        warranty_type=args.warranty_type,
        start_date=args.start,
        end_date=args.end,
        registration_status=RegistrationStatus(args.registration),
        registration_deadline=args.register_by,
    )
    return save_coverage(args, store, "warranties", warranty, warranty.warranty_name)


def cmd_add_contract(args, store: YamlStore) -> int:
    """Add a service contract, optionally linked to an asset."""
    contract = ServiceContract(
        contract_name=args.name,
        provider_name=args.provider,
        contract_type=args.contract_type,
        start_date=args.start,
        end_date=args.end,
        renewal_type=RenewalType(args.renewal),
        cost_type=CostType(args.cost_type) if args.cost_type else None,
        cost_amount=args.cost,
    )
    return save_coverage(args, store, "serviceContracts", contract, contract.contract_name)


def cmd_add_requirement(args, store: YamlStore) -> int:
    """Mark a task as required (or recommended) by a contract or warranty."""
    requirement = Requirement(
        maintenance_task_id=args.task_id,
        contract_id=args.contract,
        warranty_id=args.warranty,
        is_required=not args.optional,
        requirement_description=args.description,
        consequence_if_missed=args.consequence,
    )
    try:
        add_requirement(store, requirement)
    except RecordNotFound as e:
        print(f"Error: {e}")
        return 1
    except Exception as e:
        logger.exception("Error creating requirement")
        print(f"Error: could not save requirement: {e}")
        return 1
    kind = "required" if requirement.is_required else "recommended"
    print(f"Task {args.task_id} is now {kind} by {args.contract or args.warranty}.")
    return 0


# =============================================================================
# Complete command
# =============================================================================


def cmd_complete(args, store: YamlStore) -> int:
    """Log a completed maintenance task and advance its due date."""
    try:
        task = store.get("maintenanceTasks", args.task_id)
    except RecordNotFound:
        print(f"Error: Unknown task id '{args.task_id}'")
        print("\nActive tasks:")
        for t in sorted(store.list("maintenanceTasks", is_active=True), key=lambda t: t.task_name):
            print(f"  {t.id}  {t.task_name}")
        return 1
    except Exception as e:
        logger.exception("Error reading task %s", args.task_id)
        print(f"Error: could not read {args.data_file}: {e}")
        return 1

    completed_on = args.date or args.as_of

    print(f"Completing task in {args.data_file}:")
    print(f"  Task:    {task.task_name}")
    print(f"  Date:    {completed_on}")
    if args.mileage is not None:
        print(f"  Mileage: {args.mileage:,}")
    if args.by:
        print(f"  By:      {args.by}")
    if args.cost is not None:
        print(f"  Cost:    {format_cost(args.cost)}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    try:
        complete_task(
            store,
            task.id,
            completed_on,
            mileage=args.mileage,
            cost=args.cost,
            performed_by=args.by,
            notes=args.notes,
        )
    except Exception as e:
        logger.exception("Error completing task %s", task.id)
        print(f"Error: could not save service record: {e}")
        return 1

    updated = store.get("maintenanceTasks", task.id)
    print("Service record saved.")
    print(f"Next due: {format_date(updated.next_due_date)}")
    return 0


# =============================================================================
# Analytics command
# =============================================================================


def cmd_analytics(args, store: YamlStore) -> int:
    """Show dashboard counts and cost summary."""
    try:
        data = fetch_collections(
            store, ("assets", "maintenanceTasks", "serviceRecords", "serviceContracts")
        )
    except Exception:
        logger.exception("Error fetching analytics data")
        data = {"assets": [], "maintenanceTasks": [], "serviceRecords": [], "serviceContracts": []}

    stats = dashboard_stats(data["assets"], data["maintenanceTasks"], args.as_of)
    metrics = cost_metrics(data["assets"], data["serviceRecords"], data["serviceContracts"])

    print(f"Analytics as of {args.as_of}")
    print()
    summary = [
        ["Total assets", stats.total_assets],
        ["Healthy assets", stats.healthy_assets],
        ["Needs attention", stats.attention_assets],
        ["Critical", stats.critical_assets],
        ["Due in 30 days", stats.upcoming_maintenance],
        ["Overdue tasks", stats.overdue_tasks],
        ["Total asset value", format_cost(metrics.total_asset_value)],
        ["Maintenance cost", format_cost(metrics.total_maintenance_cost)],
        ["Contract cost (yearly)", format_cost(metrics.total_contract_cost)],
        ["Average monthly spend", format_cost(metrics.avg_monthly_spend)],
    ]
    print(tabulate(summary, tablefmt="simple"))
    print()

    trend = cost_trend(data["serviceRecords"], data["serviceContracts"], args.as_of)
    rows = [
        [m["month"], format_cost(m["maintenance_cost"]), format_cost(m["contract_cost"]),
         format_cost(m["total_cost"])]
        for m in trend
    ]
    print(tabulate(rows, headers=["Month", "Maintenance", "Contracts", "Total"], tablefmt="simple"))
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Asset maintenance tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/home.yaml reminders
  %(prog)s data/home.yaml reminders --type warranty --horizon 60
  %(prog)s data/home.yaml schedule --range 30 --priority required
  %(prog)s data/home.yaml assets
  %(prog)s data/home.yaml add-asset "Family car" Vehicle --manufacturer Honda
  %(prog)s data/home.yaml add-task "Replace filter" --asset ASSET_ID --days 90 --last-done 2025-03-01
  %(prog)s data/home.yaml add-warranty "Powertrain" Honda --end 2027-04-20 --asset ASSET_ID
  %(prog)s data/home.yaml add-contract "HVAC plan" "Cool Air" --cost-type monthly --cost 19.99 --asset ASSET_ID
  %(prog)s data/home.yaml add-requirement TASK_ID --contract CONTRACT_ID
  %(prog)s data/home.yaml complete TASK_ID --mileage 58000 --cost 79.99
  %(prog)s data/home.yaml analytics
""",
    )
    parser.add_argument(
        "data_file",
        type=Path,
        help="Path to data YAML file",
    )
    parser.add_argument(
        "--as-of",
        type=parse_date,
        default=date.today(),
        help="Reference date in YYYY-MM-DD format (default: today)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    reminders_parser = subparsers.add_parser(
        "reminders", help="Show overdue and due-soon items"
    )
    reminders_parser.add_argument(
        "--horizon",
        type=int,
        default=30,
        help="Days ahead to include (default: 30)",
    )
    reminders_parser.add_argument(
        "--type",
        choices=[t.value for t in ReminderType],
        help="Only show one reminder type",
    )

    schedule_parser = subparsers.add_parser(
        "schedule", help="Show the maintenance schedule grouped by urgency"
    )
    schedule_parser.add_argument(
        "--range",
        type=int,
        choices=TIME_RANGES,
        default=90,
        help="Days ahead to include, 999 for everything (default: 90)",
    )
    schedule_parser.add_argument(
        "--priority",
        choices=["all", "required", "high"],
        default="all",
        help="Priority filter (default: all)",
    )
    schedule_parser.add_argument(
        "--asset",
        type=str,
        help="Only show tasks for this asset id",
    )

    subparsers.add_parser("assets", help="List assets with derived health")

    add_asset_parser = subparsers.add_parser("add-asset", help="Add a new asset")
    add_asset_parser.add_argument("name", type=str, help="Asset name")
    add_asset_parser.add_argument(
        "category", type=str, help="Category (e.g., 'Vehicle', 'Appliance')"
    )
    add_asset_parser.add_argument("--manufacturer", type=str, help="Manufacturer")
    add_asset_parser.add_argument("--model", type=str, help="Model")
    add_asset_parser.add_argument("--serial", type=str, help="Serial number")
    add_asset_parser.add_argument(
        "--purchase-date", type=parse_date, help="Purchase date (YYYY-MM-DD)"
    )
    add_asset_parser.add_argument("--price", type=float, help="Purchase price")
    add_asset_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    edit_asset_parser = subparsers.add_parser("edit-asset", help="Change an existing asset")
    edit_asset_parser.add_argument("asset_id", type=str, help="Asset id")
    edit_asset_parser.add_argument("--name", type=str, help="New name")
    edit_asset_parser.add_argument("--category", type=str, help="New category")
    edit_asset_parser.add_argument("--manufacturer", type=str, help="Manufacturer")
    edit_asset_parser.add_argument("--model", type=str, help="Model")
    edit_asset_parser.add_argument("--serial", type=str, help="Serial number")
    edit_asset_parser.add_argument("--location", type=str, help="Location")
    edit_asset_parser.add_argument(
        "--purchase-date", type=parse_date, help="Purchase date (YYYY-MM-DD)"
    )
    edit_asset_parser.add_argument("--price", type=float, help="Purchase price")
    edit_asset_parser.add_argument("--mileage", type=int, help="Current mileage")
    edit_asset_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would change without saving",
    )

    add_task_parser = subparsers.add_parser("add-task", help="Add a maintenance task")
    add_task_parser.add_argument("name", type=str, help="Task name (e.g., 'Replace air filter')")
    add_task_parser.add_argument("--asset", type=str, help="Asset id the task belongs to")
    add_task_parser.add_argument("--description", type=str, help="Description")
    add_task_parser.add_argument("--category", type=str, help="Category")
    add_task_parser.add_argument(
        "--interval-type",
        choices=[t.value for t in IntervalType],
        default=IntervalType.TIME.value,
        help="Interval type (default: time)",
    )
    add_task_parser.add_argument("--days", type=int, help="Interval in days")
    add_task_parser.add_argument("--miles", type=int, help="Interval in miles")
    add_task_parser.add_argument("--hours", type=int, help="Interval in operating hours")
    add_task_parser.add_argument(
        "--specific-date", type=parse_date, help="Yearly date for date intervals (YYYY-MM-DD)"
    )
    add_task_parser.add_argument(
        "--last-done", type=parse_date, help="Last completion date (YYYY-MM-DD)"
    )
    add_task_parser.add_argument(
        "--next-due", type=parse_date, help="Next due date, overrides the derived one"
    )
    add_task_parser.add_argument("--cost", type=float, help="Estimated cost")
    add_task_parser.add_argument(
        "--priority",
        choices=[p.value for p in Priority],
        default=Priority.MEDIUM.value,
        help="Priority (default: medium)",
    )
    add_task_parser.add_argument(
        "--required",
        action="store_true",
        help="Task is required by a contract",
    )
    add_task_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    add_warranty_parser = subparsers.add_parser("add-warranty", help="Add a warranty")
    add_warranty_parser.add_argument("name", type=str, help="Warranty name")
    add_warranty_parser.add_argument("provider", type=str, help="Provider name")
    add_warranty_parser.add_argument(
        "--type", dest="warranty_type", type=str, help="Warranty type (e.g., 'manufacturer')"
    )
    add_warranty_parser.add_argument("--start", type=parse_date, help="Start date (YYYY-MM-DD)")
    add_warranty_parser.add_argument("--end", type=parse_date, help="End date (YYYY-MM-DD)")
    add_warranty_parser.add_argument(
        "--registration",
        choices=[s.value for s in RegistrationStatus],
        default=RegistrationStatus.NOT_REQUIRED.value,
        help="Registration status (default: not_required)",
    )
    add_warranty_parser.add_argument(
        "--register-by", type=parse_date, help="Registration deadline (YYYY-MM-DD)"
    )
    add_warranty_parser.add_argument("--asset", type=str, help="Link to this asset id")
    add_warranty_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    add_contract_parser = subparsers.add_parser("add-contract", help="Add a service contract")
    add_contract_parser.add_argument("name", type=str, help="Contract name")
    add_contract_parser.add_argument("provider", type=str, help="Provider name")
    add_contract_parser.add_argument(
        "--type", dest="contract_type", type=str, help="Contract type (e.g., 'maintenance_plan')"
    )
    add_contract_parser.add_argument("--start", type=parse_date, help="Start date (YYYY-MM-DD)")
    add_contract_parser.add_argument("--end", type=parse_date, help="End date (YYYY-MM-DD)")
    add_contract_parser.add_argument(
        "--renewal",
        choices=[r.value for r in RenewalType],
        default=RenewalType.MANUAL_RENEW.value,
        help="Renewal type (default: manual_renew)",
    )
    add_contract_parser.add_argument(
        "--cost-type", choices=[c.value for c in CostType], help="How the cost is billed"
    )
    add_contract_parser.add_argument("--cost", type=float, help="Cost amount")
    add_contract_parser.add_argument("--asset", type=str, help="Link to this asset id")
    add_contract_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    add_requirement_parser = subparsers.add_parser(
        "add-requirement", help="Mark a task as required by a contract or warranty"
    )
    add_requirement_parser.add_argument("task_id", type=str, help="Maintenance task id")
    coverage_group = add_requirement_parser.add_mutually_exclusive_group(required=True)
    coverage_group.add_argument("--contract", type=str, help="Service contract id")
    coverage_group.add_argument("--warranty", type=str, help="Warranty id")
    add_requirement_parser.add_argument(
        "--optional",
        action="store_true",
        help="Recommended rather than required",
    )
    add_requirement_parser.add_argument("--description", type=str, help="What is required")
    add_requirement_parser.add_argument(
        "--consequence", type=str, help="Consequence if missed (e.g., 'Claims denied')"
    )

    complete_parser = subparsers.add_parser(
        "complete", help="Log a completed maintenance task"
    )
    complete_parser.add_argument("task_id", type=str, help="Maintenance task id")
    complete_parser.add_argument(
        "--date",
        type=parse_date,
        help="Completion date in YYYY-MM-DD format (default: --as-of date)",
    )
    complete_parser.add_argument("--mileage", type=int, help="Mileage at service")
    complete_parser.add_argument(
        "--by",
        choices=PERFORMED_BY,
        help="Who performed the service",
    )
    complete_parser.add_argument("--cost", type=float, help="Total cost")
    complete_parser.add_argument("--notes", type=str, help="Notes about the service")
    complete_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be saved without saving",
    )

    subparsers.add_parser("analytics", help="Show dashboard counts and costs")

    return parser


COMMANDS = {
    "reminders": cmd_reminders,
    "schedule": cmd_schedule,
    "assets": cmd_assets,
    "add-asset": cmd_add_asset,
    "edit-asset": cmd_edit_asset,
    "add-task": cmd_add_task,
    "add-warranty": cmd_add_warranty,
    "add-contract": cmd_add_contract,
    "add-requirement": cmd_add_requirement,
    "complete": cmd_complete,
    "analytics": cmd_analytics,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Validate data file exists
    if not args.data_file.exists():
        print(f"Error: File not found: {args.data_file}")
        return 1

    store = YamlStore(args.data_file)
    return COMMANDS[args.command](args, store)


if __name__ == "__main__":
    sys.exit(main() or 0)
