#!/usr/bin/env python3
"""Tests for the Flask web app."""

from datetime import date

import pytest

from models import (
    Asset,
    DueStatus,
    HealthStatus,
    MaintenanceTask,
    ReminderStatus,
    Warranty,
    YamlStore,
    create_data_file,
)
from web.app import (
    create_app,
    format_cost,
    format_date,
    format_days,
    health_badge_color,
    reminder_badge_color,
    status_color,
)


@pytest.fixture
def store(tmp_path):
    path = tmp_path / "data.yaml"
    create_data_file(path)
    store = YamlStore(path)
    store.create("assets", Asset(id="car", name="Family Car", category="Vehicle", manufacturer="Honda"))
    store.create(
        "maintenanceTasks",
        MaintenanceTask(
            id="oil",
            task_name="Oil change",
            asset_id="car",
            interval_days=180,
            next_due_date=date(2025, 6, 10),
        ),
    )
    store.create(
        "warranties",
        Warranty(id="w1", warranty_name="Powertrain", provider_name="Honda", end_date=date(2025, 6, 20)),
    )
    return store


@pytest.fixture
def client(store):
    app = create_app(store)
    app.config["TESTING"] = True
    return app.test_client()


class TestFilters:
    """Tests for template filters."""

    def test_format_cost(self):
        assert format_cost(1234.5) == "$1,234.50"
        assert format_cost(None) == "—"

    def test_format_date(self):
        assert format_date(date(2025, 6, 5)) == "Jun 05, 2025"
        assert format_date(None) == "—"

    def test_format_days(self):
        assert format_days(0) == "due today"
        assert format_days(-2) == "2 days overdue"
        assert format_days(12) == "in 12 days"

    def test_colors(self):
        assert "red" in status_color(DueStatus.OVERDUE_REQUIRED)
        assert "yellow" in reminder_badge_color(ReminderStatus.DUE_SOON)
        assert "green" in health_badge_color(HealthStatus.EXCELLENT)
        assert "gray" in health_badge_color(None)


class TestCreateApp:
    """Tests for the app factory."""

    def test_creates_missing_data_file(self, tmp_path, monkeypatch):
        path = tmp_path / "sub" / "assets.yaml"
        monkeypatch.setenv("ASSET_DATA_FILE", str(path))
        app = create_app()
        assert path.exists()
        assert app.config["STORE"].filename == path

    def test_horizon_from_env(self, store, monkeypatch):
        monkeypatch.setenv("REMINDER_HORIZON_DAYS", "60")
        assert create_app(store).config["REMINDER_HORIZON_DAYS"] == 60


class TestPages:
    """Tests for read-only pages."""

    def test_index(self, client):
        response = client.get("/?as_of=2025-06-15")
        assert response.status_code == 200
        body = response.get_data(as_text=True)
        assert "Dashboard" in body
        assert "Oil change" in body

    def test_reminders(self, client):
        body = client.get("/reminders?as_of=2025-06-15").get_data(as_text=True)
        assert "Oil change" in body
        assert "Powertrain Expiry" in body

    def test_reminders_type_filter(self, client):
        body = client.get("/reminders?as_of=2025-06-15&type=warranty").get_data(as_text=True)
        assert "Powertrain Expiry" in body
        assert "Oil change" not in body

    def test_schedule(self, client):
        response = client.get("/schedule?as_of=2025-06-15&range=30&priority=all")
        assert response.status_code == 200
        body = response.get_data(as_text=True)
        assert "OVERDUE OPTIONAL" in body
        assert "Oil change" in body

    def test_schedule_bad_range_falls_back(self, client):
        assert client.get("/schedule?range=abc").status_code == 200

    def test_assets(self, client):
        body = client.get("/assets").get_data(as_text=True)
        assert "Family Car (Honda)" in body

    def test_asset_detail(self, client):
        body = client.get("/asset/car?as_of=2025-06-15").get_data(as_text=True)
        assert "Oil change" in body
        assert "Excellent (90)" in body

    def test_missing_asset_redirects(self, client):
        response = client.get("/asset/nope")
        assert response.status_code == 302

    def test_analytics(self, client):
        response = client.get("/analytics")
        assert response.status_code == 200
        assert "Family Car" in response.get_data(as_text=True)


class TestForms:
    """Tests for form submissions."""

    def test_create_asset(self, client, store):
        response = client.post("/assets", data={"name": "Mower", "category": "Yard", "purchase_price": "399"})
        assert response.status_code == 302
        [mower] = store.list("assets", name="Mower")
        assert mower.purchase_price == 399.0
        assert response.headers["Location"].endswith(f"/asset/{mower.id}")

    def test_create_asset_requires_name(self, client, store):
        response = client.post("/assets", data={"name": "", "category": "Yard"}, follow_redirects=True)
        assert "Name and category are required" in response.get_data(as_text=True)
        assert len(store.list("assets")) == 1

    def test_create_asset_bad_number(self, client, store):
        client.post("/assets", data={"name": "Mower", "category": "Yard", "purchase_price": "lots"})
        assert len(store.list("assets")) == 1

    def test_delete_asset(self, client, store):
        response = client.post("/asset/car/delete")
        assert response.status_code == 302
        assert store.list("assets") == []

    def test_complete_task(self, client, store):
        response = client.post(
            "/task/oil/complete",
            data={"date": "2025-06-14", "mileage": "51000", "cost": "80"},
            follow_redirects=True,
        )
        assert "Logged service: Oil change" in response.get_data(as_text=True)
        task = store.get("maintenanceTasks", "oil")
        assert task.last_completed_date == date(2025, 6, 14)
        assert task.next_due_date == date(2025, 12, 11)
        [record] = store.list("serviceRecords")
        assert record.total_cost == 80.0

    def test_complete_unknown_task(self, client, store):
        response = client.post("/task/nope/complete", data={"date": "2025-06-14"}, follow_redirects=True)
        assert "Task &#39;nope&#39; not found" in response.get_data(as_text=True)
        assert store.list("serviceRecords") == []

    def test_complete_rejects_unknown_performer(self, client, store):
        response = client.post(
            "/task/oil/complete",
            data={"date": "2025-06-14", "performed_by": "neighbour"},
            follow_redirects=True,
        )
        assert "Invalid performed_by" in response.get_data(as_text=True)
        assert store.list("serviceRecords") == []
        assert store.get("maintenanceTasks", "oil").last_completed_date is None

    def test_complete_records_performer(self, client, store):
        client.post("/task/oil/complete", data={"date": "2025-06-14", "performed_by": "dealer"})
        [record] = store.list("serviceRecords")
        assert record.performed_by == "dealer"

    def test_edit_asset(self, client, store):
        response = client.post(
            "/asset/car/edit",
            data={"name": "Civic", "category": "Vehicle", "location": "Garage", "purchase_date": "2019-04-20"},
        )
        assert response.status_code == 302
        asset = store.get("assets", "car")
        assert asset.name == "Civic"
        assert asset.location == "Garage"
        assert asset.purchase_date == date(2019, 4, 20)
        assert asset.manufacturer is None

    def test_edit_asset_requires_name(self, client, store):
        client.post("/asset/car/edit", data={"name": "", "category": "Vehicle"})
        assert store.get("assets", "car").name == "Family Car"

    def test_create_task(self, client, store):
        response = client.post(
            "/tasks",
            data={
                "asset_id": "car",
                "task_name": "Rotate tires",
                "interval_type": "time",
                "interval_days": "90",
                "last_completed_date": "2025-06-01",
                "priority": "high",
                "is_required_by_contract": "1",
            },
        )
        assert response.headers["Location"].endswith("/asset/car")
        [task] = store.list("maintenanceTasks", task_name="Rotate tires")
        assert task.next_due_date == date(2025, 8, 30)
        assert task.is_required_by_contract

    def test_create_task_bad_choice(self, client, store):
        client.post("/tasks", data={"asset_id": "car", "task_name": "X", "priority": "urgent"})
        assert len(store.list("maintenanceTasks")) == 1

    def test_create_task_unknown_asset(self, client, store):
        response = client.post("/tasks", data={"asset_id": "boat", "task_name": "Wash"}, follow_redirects=True)
        assert "Asset &#39;boat&#39; not found" in response.get_data(as_text=True)
        assert len(store.list("maintenanceTasks")) == 1

    def test_create_warranty_with_link(self, client, store):
        response = client.post(
            "/warranties",
            data={
                "warranty_name": "Battery",
                "provider_name": "Honda",
                "end_date": "2025-06-30",
                "registration_status": "registration_required",
                "registration_deadline": "2025-06-20",
                "asset_id": "car",
            },
        )
        assert response.status_code == 302
        warranty = [w for w in store.list("warranties") if w.warranty_name == "Battery"][0]
        assert warranty.needs_registration
        [link] = store.list("assetWarranties")
        assert (link.asset_id, link.warranty_id) == ("car", warranty.id)

        body = client.get("/reminders?as_of=2025-06-15&type=registration").get_data(as_text=True)
        assert "Register Battery" in body
        assert "Family Car" in body

    def test_create_contract_without_asset(self, client, store):
        client.post(
            "/contracts",
            data={"contract_name": "Plan", "provider_name": "Acme", "cost_type": "annual", "cost_amount": "300"},
        )
        [contract] = store.list("serviceContracts")
        assert contract.annual_cost == 300.0
        assert store.list("assetContracts") == []

    def test_create_contract_requires_provider(self, client, store):
        client.post("/contracts", data={"contract_name": "Plan", "provider_name": ""})
        assert store.list("serviceContracts") == []

    def test_create_requirement(self, client, store):
        response = client.post(
            "/requirements",
            data={"maintenance_task_id": "oil", "coverage": "warranty:w1", "is_required": "1"},
        )
        assert response.status_code == 302
        [req] = store.list("warrantyRequirements")
        assert req.warranty_id == "w1"
        assert req.is_required

        body = client.get("/schedule?as_of=2025-06-15").get_data(as_text=True)
        assert "OVERDUE REQUIRED" in body

    def test_create_requirement_bad_coverage(self, client, store):
        client.post("/requirements", data={"maintenance_task_id": "oil", "coverage": "policy:x"})
        assert store.list("contractRequirements") == []
        assert store.list("warrantyRequirements") == []


class TestCoveragePage:
    def test_lists_and_forms(self, client):
        body = client.get("/coverage").get_data(as_text=True)
        assert "Powertrain" in body
        assert "Add warranty" in body
        assert "Add contract" in body
        assert 'value="warranty:w1"' in body


class TestReadFailures:
    """Pages degrade instead of erroring when the data file cannot be read."""

    @pytest.fixture
    def broken_client(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("assets: [\n")
        app = create_app(YamlStore(path))
        app.config["TESTING"] = True
        return app.test_client()

    def test_asset_detail_redirects(self, broken_client):
        response = broken_client.get("/asset/car")
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/assets")

    def test_asset_detail_flashes(self, broken_client):
        response = broken_client.get("/asset/car", follow_redirects=True)
        assert response.status_code == 200
        assert "Could not load asset" in response.get_data(as_text=True)

    def test_other_pages_render(self, broken_client):
        for url in ("/", "/reminders", "/schedule", "/coverage", "/analytics"):
            assert broken_client.get(url).status_code == 200


class TestDashboardHorizon:
    def test_uses_configured_horizon(self, store, monkeypatch):
        store.create(
            "maintenanceTasks",
            MaintenanceTask(id="far", task_name="Flush coolant", next_due_date=date(2025, 7, 30)),
        )
        monkeypatch.setenv("REMINDER_HORIZON_DAYS", "60")
        client = create_app(store).test_client()
        assert "Flush coolant" in client.get("/?as_of=2025-06-15").get_data(as_text=True)

    def test_default_horizon_excludes(self, client, store):
        store.create(
            "maintenanceTasks",
            MaintenanceTask(id="far", task_name="Flush coolant", next_due_date=date(2025, 7, 30)),
        )
        assert "Flush coolant" not in client.get("/?as_of=2025-06-15").get_data(as_text=True)
