"""Flask web application for asset maintenance tracking."""

import logging
import os
from datetime import date
from pathlib import Path
from typing import Optional

from flask import Flask, current_app, flash, redirect, render_template, request, url_for

from models import (
    PERFORMED_BY,
    TIME_RANGES,
    Asset,
    CostType,
    DueStatus,
    HealthStatus,
    IntervalType,
    MaintenanceTask,
    Priority,
    RegistrationStatus,
    RenewalType,
    Requirement,
    ServiceContract,
    Warranty,
    RecordNotFound,
    ReminderStatus,
    ReminderType,
    YamlStore,
    add_coverage,
    add_requirement,
    add_task,
    assess_health,
    complete_task,
    create_data_file,
    fetch_reminders,
    fetch_schedule,
    filter_schedule,
    group_by_asset,
    group_by_status,
)
from models.aggregator import fetch_collections
from models.analytics import cost_metrics, cost_trend, dashboard_stats, health_breakdown
from models.schedule import DEFAULT_TIME_RANGE, PRIORITY_FILTERS

logger = logging.getLogger(__name__)

# Default data file (relative to project root)
DEFAULT_DATA_FILE = Path(__file__).parent.parent / "data" / "assets.yaml"


def format_cost(cost):
    """Format cost with currency symbol."""
    if cost is None:
        return "—"
    return f"${cost:,.2f}"


def format_date(value):
    """Format date for display."""
    if value is None:
        return "—"
    return value.strftime("%b %d, %Y")


def format_days(days: int) -> str:
    if days == 0:
        return "due today"
    if days < 0:
        return f"{abs(days)} days overdue"
    return f"in {days} days"


def status_color(status: DueStatus) -> str:
    """Get Tailwind color classes for a due status."""
    colors = {
        DueStatus.OVERDUE_REQUIRED: "bg-red-100 text-red-800 border-red-200",
        DueStatus.OVERDUE_OPTIONAL: "bg-orange-100 text-orange-800 border-orange-200",
        DueStatus.DUE_SOON: "bg-yellow-100 text-yellow-800 border-yellow-200",
        DueStatus.UPCOMING: "bg-blue-100 text-blue-800 border-blue-200",
        DueStatus.FUTURE: "bg-gray-100 text-gray-500 border-gray-200",
    }
    return colors.get(status, "bg-gray-100 text-gray-800")


def reminder_badge_color(status: ReminderStatus) -> str:
    """Get Tailwind color classes for a reminder badge."""
    colors = {
        ReminderStatus.OVERDUE: "bg-red-500 text-white",
        ReminderStatus.DUE_SOON: "bg-yellow-500 text-white",
        ReminderStatus.UPCOMING: "bg-blue-500 text-white",
    }
    return colors.get(status, "bg-gray-500 text-white")


def health_badge_color(status: Optional[HealthStatus]) -> str:
    colors = {
        HealthStatus.EXCELLENT: "bg-green-500 text-white",
        HealthStatus.GOOD: "bg-blue-500 text-white",
        HealthStatus.ATTENTION: "bg-yellow-500 text-white",
        HealthStatus.CRITICAL: "bg-red-500 text-white",
    }
    return colors.get(status, "bg-gray-400 text-white")


def get_store() -> YamlStore:
    return current_app.config["STORE"]


def reference_date() -> date:
    """Reference date for derived statuses: ?as_of=YYYY-MM-DD or today."""
    as_of = request.args.get("as_of")
    if as_of:
        try:
            return date.fromisoformat(as_of)
        except ValueError:
            flash(f"Ignoring invalid date '{as_of}'", "error")
    return date.today()


def parse_float(value: Optional[str]) -> Optional[float]:
    return float(value) if value else None


def parse_int(value: Optional[str]) -> Optional[int]:
    return int(value) if value else None


def parse_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


def form_text(name: str) -> Optional[str]:
    """Stripped form value, None when blank."""
    return (request.form.get(name) or "").strip() or None


def register_routes(app: Flask) -> None:
    @app.route("/")
    def index():
        """Dashboard with counts and the most urgent reminders."""
        today = reference_date()
        try:
            data = fetch_collections(get_store(), ("assets", "maintenanceTasks"))
        except Exception:
            logger.exception("Error fetching dashboard data")
            data = {"assets": [], "maintenanceTasks": []}

        stats = dashboard_stats(data["assets"], data["maintenanceTasks"], today)
        reminders = fetch_reminders(
            get_store(), today, horizon_days=app.config["REMINDER_HORIZON_DAYS"]
        )

        return render_template(
            "index.html",
            stats=stats,
            reminders=reminders[:5],
            today=today,
        )

    @app.route("/reminders")
    def reminders():
        """All overdue and due-soon items, optionally filtered by type."""
        today = reference_date()
        type_filter = request.args.get("type", "all").lower()

        items = fetch_reminders(get_store(), today, horizon_days=app.config["REMINDER_HORIZON_DAYS"])
        if type_filter != "all":
            items = [r for r in items if r.type.value == type_filter]

        return render_template(
            "reminders.html",
            reminders=items,
            type_filter=type_filter,
            reminder_types=[t.value for t in ReminderType],
            horizon=app.config["REMINDER_HORIZON_DAYS"],
            today=today,
        )

    @app.route("/schedule")
    def schedule():
        """Maintenance schedule grouped by status, then by asset."""
        today = reference_date()
        asset_filter = request.args.get("asset") or None
        priority = request.args.get("priority", "all").lower()
        if priority not in PRIORITY_FILTERS:
            priority = "all"
        try:
            time_range = int(request.args.get("range", DEFAULT_TIME_RANGE))
        except ValueError:
            time_range = DEFAULT_TIME_RANGE
        if time_range not in TIME_RANGES:
            time_range = DEFAULT_TIME_RANGE

        entries = fetch_schedule(get_store(), today)
        assets = {e.asset.id: e.asset for e in entries if e.asset}
        filtered = filter_schedule(
            entries, asset_id=asset_filter, priority=priority, time_range=time_range
        )
        groups = {
            status: group_by_asset(bucket)
            for status, bucket in group_by_status(filtered).items()
        }

        return render_template(
            "schedule.html",
            groups=groups,
            assets=sorted(assets.values(), key=lambda a: a.name.lower()),
            asset_filter=asset_filter,
            priority=priority,
            time_range=time_range,
            time_ranges=TIME_RANGES,
            DueStatus=DueStatus,
            today=today,
        )

    @app.route("/assets")
    def assets():
        """Asset list."""
        try:
            items = get_store().list("assets")
        except Exception:
            logger.exception("Error fetching assets")
            items = []
        items.sort(key=lambda a: a.name.lower())
        return render_template("assets.html", assets=items)

    @app.route("/assets", methods=["POST"])
    def create_asset():
        """Handle new asset form submission."""
        name = request.form.get("name", "").strip()
        category = request.form.get("category", "").strip()
        if not name or not category:
            flash("Name and category are required", "error")
            return redirect(url_for("assets"))

        try:
            asset = Asset(
                name=name,
                category=category,
                manufacturer=request.form.get("manufacturer") or None,
                model=request.form.get("model") or None,
                serial_number=request.form.get("serial_number") or None,
                location=request.form.get("location") or None,
                purchase_price=parse_float(request.form.get("purchase_price")),
                current_mileage=parse_int(request.form.get("current_mileage")),
            )
        except ValueError:
            flash("Invalid numeric value", "error")
            return redirect(url_for("assets"))

        try:
            get_store().create("assets", asset)
        except Exception:
            logger.exception("Error creating asset")
            flash("Could not save asset", "error")
            return redirect(url_for("assets"))

        flash(f"Added asset: {asset.name}", "success")
        return redirect(url_for("asset_detail", asset_id=asset.id))

    @app.route("/asset/<asset_id>")
    def asset_detail(asset_id: str):
        """Asset detail page with tasks, derived health and service history."""
        store = get_store()
        try:
            asset = store.get("assets", asset_id)
        except RecordNotFound:
            flash(f"Asset '{asset_id}' not found", "error")
            return redirect(url_for("assets"))
        except Exception:
            logger.exception("Error fetching asset %s", asset_id)
            flash("Could not load asset", "error")
            return redirect(url_for("assets"))

        today = reference_date()
        entries = [e for e in fetch_schedule(store, today) if e.task.asset_id == asset_id]
        entries.sort(key=lambda e: (e.status.value, e.days_until_due))
        score, health = assess_health(entries)

        try:
            records = store.list("serviceRecords", asset_id=asset_id)
        except Exception:
            logger.exception("Error fetching service records for %s", asset_id)
            records = []
        records.sort(key=lambda r: r.service_date, reverse=True)

        return render_template(
            "asset.html",
            asset=asset,
            entries=entries,
            health=health,
            health_score=score,
            records=records,
            today=today,
            performed_by_choices=PERFORMED_BY,
            interval_types=[t.value for t in IntervalType],
            priorities=[p.value for p in Priority],
        )

    @app.route("/asset/<asset_id>/delete", methods=["POST"])
    def delete_asset(asset_id: str):
        try:
            get_store().delete("assets", asset_id)
        except RecordNotFound:
            flash(f"Asset '{asset_id}' not found", "error")
            return redirect(url_for("assets"))
        except Exception:
            logger.exception("Error deleting asset %s", asset_id)
            flash("Could not delete asset", "error")
            return redirect(url_for("asset_detail", asset_id=asset_id))

        flash("Asset deleted", "success")
        return redirect(url_for("assets"))

    @app.route("/asset/<asset_id>/edit", methods=["POST"])
    def edit_asset(asset_id: str):
        """Handle asset edit form submission."""
        store = get_store()
        try:
            asset = store.get("assets", asset_id)
        except RecordNotFound:
            flash(f"Asset '{asset_id}' not found", "error")
            return redirect(url_for("assets"))

        name = form_text("name")
        category = form_text("category")
        if not name or not category:
            flash("Name and category are required", "error")
            return redirect(url_for("asset_detail", asset_id=asset_id))

        try:
            asset.purchase_date = parse_date(request.form.get("purchase_date"))
            asset.in_service_date = parse_date(request.form.get("in_service_date"))
            asset.purchase_price = parse_float(request.form.get("purchase_price"))
        except ValueError:
            flash("Invalid date or numeric value", "error")
            return redirect(url_for("asset_detail", asset_id=asset_id))
        asset.name = name
        asset.category = category
        asset.manufacturer = form_text("manufacturer")
        asset.model = form_text("model")
        asset.location = form_text("location")

        try:
            store.update("assets", asset)
        except Exception:
            logger.exception("Error updating asset %s", asset_id)
            flash("Could not save asset", "error")
            return redirect(url_for("asset_detail", asset_id=asset_id))

        flash(f"Updated asset: {asset.name}", "success")
        return redirect(url_for("asset_detail", asset_id=asset_id))

    @app.route("/tasks", methods=["POST"])
    def create_task():
        """Handle new maintenance task form submission."""
        asset_id = form_text("asset_id")
        back = url_for("asset_detail", asset_id=asset_id) if asset_id else url_for("schedule")
        task_name = form_text("task_name")
        if not task_name:
            flash("Task name is required", "error")
            return redirect(back)

        try:
            task = MaintenanceTask(
                task_name=task_name,
                asset_id=asset_id,
                description=form_text("description"),
                category=form_text("category"),
                interval_type=IntervalType(request.form.get("interval_type") or "time"),
                interval_days=parse_int(request.form.get("interval_days")),
                interval_miles=parse_int(request.form.get("interval_miles")),
                interval_hours=parse_int(request.form.get("interval_hours")),
                specific_date=parse_date(request.form.get("specific_date")),
                last_completed_date=parse_date(request.form.get("last_completed_date")),
                next_due_date=parse_date(request.form.get("next_due_date")),
                estimated_cost=parse_float(request.form.get("estimated_cost")),
                is_required_by_contract=bool(request.form.get("is_required_by_contract")),
                priority=Priority(request.form.get("priority") or "medium"),
            )
        except ValueError:
            flash("Invalid date, number or choice", "error")
            return redirect(back)

        try:
            add_task(get_store(), task, reference_date())
        except RecordNotFound:
            flash(f"Asset '{asset_id}' not found", "error")
            return redirect(url_for("assets"))
        except Exception:
            logger.exception("Error creating task")
            flash("Could not save task", "error")
            return redirect(back)

        flash(f"Added task: {task.task_name}", "success")
        return redirect(back)

    @app.route("/task/<task_id>/complete", methods=["POST"])
    def complete(task_id: str):
        """Handle mark-complete form submission."""
        store = get_store()
        try:
            completed_on = date.fromisoformat(request.form.get("date") or date.today().isoformat())
            mileage = parse_int(request.form.get("mileage"))
            cost = parse_float(request.form.get("cost"))
        except ValueError:
            flash("Invalid date or numeric value", "error")
            return redirect(request.referrer or url_for("schedule"))

        try:
            record = complete_task(
                store,
                task_id,
                completed_on,
                mileage=mileage,
                cost=cost,
                performed_by=request.form.get("performed_by") or None,
                notes=request.form.get("notes") or None,
            )
        except RecordNotFound:
            flash(f"Task '{task_id}' not found", "error")
            return redirect(url_for("schedule"))
        except ValueError as e:
            flash(str(e), "error")
            return redirect(request.referrer or url_for("schedule"))
        except Exception:
            logger.exception("Error completing task %s", task_id)
            flash("Could not save service record", "error")
            return redirect(request.referrer or url_for("schedule"))

        flash(f"Logged service: {record.service_name}", "success")
        return redirect(request.referrer or url_for("asset_detail", asset_id=record.asset_id))

    @app.route("/coverage")
    def coverage():
        """Warranties, service contracts and their requirements."""
        try:
            data = fetch_collections(
                get_store(),
                ("assets", "maintenanceTasks", "warranties", "serviceContracts"),
            )
        except Exception:
            logger.exception("Error fetching coverage")
            data = {"assets": [], "maintenanceTasks": [], "warranties": [], "serviceContracts": []}

        return render_template(
            "coverage.html",
            assets=sorted(data["assets"], key=lambda a: a.name.lower()),
            tasks=sorted(data["maintenanceTasks"], key=lambda t: t.task_name.lower()),
            warranties=data["warranties"],
            contracts=data["serviceContracts"],
            registration_statuses=[s.value for s in RegistrationStatus],
            renewal_types=[r.value for r in RenewalType],
            cost_types=[c.value for c in CostType],
        )

    @app.route("/warranties", methods=["POST"])
    def create_warranty():
        """Handle new warranty form, linking it to the chosen asset."""
        name = form_text("warranty_name")
        provider = form_text("provider_name")
        if not name or not provider:
            flash("Warranty name and provider are required", "error")
            return redirect(url_for("coverage"))

        try:
            warranty = Warranty(
                warranty_name=name,
                provider_name=provider,
                warranty_type=form_text("warranty_type"),
                start_date=parse_date(request.form.get("start_date")),
                end_date=parse_date(request.form.get("end_date")),
                registration_status=RegistrationStatus(
                    request.form.get("registration_status") or "not_required"
                ),
                registration_deadline=parse_date(request.form.get("registration_deadline")),
            )
        except ValueError:
            flash("Invalid date or choice", "error")
            return redirect(url_for("coverage"))

        return save_coverage("warranties", warranty, warranty.warranty_name)

    @app.route("/contracts", methods=["POST"])
    def create_contract():
        """Handle new service contract form, linking it to the chosen asset."""
        name = form_text("contract_name")
        provider = form_text("provider_name")
        if not name or not provider:
            flash("Contract name and provider are required", "error")
            return redirect(url_for("coverage"))

        try:
            cost_type = request.form.get("cost_type")
            contract = ServiceContract(
                contract_name=name,
                provider_name=provider,
                contract_type=form_text("contract_type"),
                start_date=parse_date(request.form.get("start_date")),
                end_date=parse_date(request.form.get("end_date")),
                renewal_type=RenewalType(request.form.get("renewal_type") or "manual_renew"),
                cost_type=CostType(cost_type) if cost_type else None,
                cost_amount=parse_float(request.form.get("cost_amount")),
            )
        except ValueError:
            flash("Invalid date, number or choice", "error")
            return redirect(url_for("coverage"))

        return save_coverage("serviceContracts", contract, contract.contract_name)

    def save_coverage(collection: str, record, name: str):
        asset_id = form_text("asset_id")
        try:
            add_coverage(get_store(), collection, record, asset_id=asset_id)
        except RecordNotFound:
            flash(f"Asset '{asset_id}' not found", "error")
            return redirect(url_for("coverage"))
        except Exception:
            logger.exception("Error creating %s record", collection)
            flash(f"Could not save {name}", "error")
            return redirect(url_for("coverage"))

        flash(f"Added: {name}", "success")
        return redirect(url_for("coverage"))

    @app.route("/requirements", methods=["POST"])
    def create_requirement():
        """
        Handle requirement form submission.

        The coverage field is "contract:<id>" or "warranty:<id>".
        """
        task_id = form_text("maintenance_task_id")
        kind, _, coverage_id = (request.form.get("coverage") or "").partition(":")
        if not task_id or kind not in ("contract", "warranty") or not coverage_id:
            flash("Choose a task and a contract or warranty", "error")
            return redirect(url_for("coverage"))

        requirement = Requirement(
            maintenance_task_id=task_id,
            contract_id=coverage_id if kind == "contract" else None,
            warranty_id=coverage_id if kind == "warranty" else None,
            is_required=bool(request.form.get("is_required")),
            requirement_description=form_text("requirement_description"),
            consequence_if_missed=form_text("consequence_if_missed"),
        )
        try:
            add_requirement(get_store(), requirement)
        except RecordNotFound as e:
            flash(str(e), "error")
            return redirect(url_for("coverage"))
        except Exception:
            logger.exception("Error creating requirement")
            flash("Could not save requirement", "error")
            return redirect(url_for("coverage"))

        flash("Added requirement", "success")
        return redirect(url_for("coverage"))

    @app.route("/analytics")
    def analytics():
        """Cost metrics, monthly trend and per-asset health."""
        today = reference_date()
        try:
            data = fetch_collections(
                get_store(), ("assets", "serviceRecords", "serviceContracts")
            )
        except Exception:
            logger.exception("Error fetching analytics data")
            data = {"assets": [], "serviceRecords": [], "serviceContracts": []}

        return render_template(
            "analytics.html",
            metrics=cost_metrics(data["assets"], data["serviceRecords"], data["serviceContracts"]),
            trend=cost_trend(data["serviceRecords"], data["serviceContracts"], today),
            breakdown=health_breakdown(data["assets"], data["serviceRecords"]),
        )


def create_app(store: Optional[YamlStore] = None) -> Flask:
    """
    Build the Flask app around a record store.

    Without an explicit store, ASSET_DATA_FILE (or data/assets.yaml) is used
    and created empty if missing.
    """
    app = Flask(__name__)
    app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")
    app.config["REMINDER_HORIZON_DAYS"] = int(os.environ.get("REMINDER_HORIZON_DAYS", 30))

    if store is None:
        data_file = Path(os.environ.get("ASSET_DATA_FILE", DEFAULT_DATA_FILE))
        if not data_file.exists():
            data_file.parent.mkdir(parents=True, exist_ok=True)
            create_data_file(data_file)
            logger.info("Created empty data file %s", data_file)
        store = YamlStore(data_file)
    app.config["STORE"] = store

    # Register template filters
    app.jinja_env.filters["format_cost"] = format_cost
    app.jinja_env.filters["format_date"] = format_date
    app.jinja_env.filters["format_days"] = format_days
    app.jinja_env.filters["status_color"] = status_color
    app.jinja_env.filters["reminder_badge_color"] = reminder_badge_color
    app.jinja_env.filters["health_badge_color"] = health_badge_color

    register_routes(app)
    return app


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    create_app().run(debug=True, host="0.0.0.0", port=5001)
