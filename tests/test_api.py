"""
End-to-end route tests against the seeded in-memory store.
"""
import json

import pytest

from core.auth import get_password_hash


def _errors(response):
    return response.json()["detail"]["errors"]


# ═══════════════════════════════════════════════════════════════
# 1. AUTH
# ═══════════════════════════════════════════════════════════════
class TestAuth:

    @pytest.fixture
    def admin_hash(self, monkeypatch):
        import controllers.auth_controller as auth_controller
        monkeypatch.setattr(auth_controller, "ADMIN_PASSWORD_HASH", get_password_hash("site-pass"))
        monkeypatch.setattr(auth_controller, "ADMIN_USERNAME", "admin")

    def test_login_sets_flag(self, client, admin_hash):
        import database
        from config import AUTH_FLAG_KEY
        response = client.post("/api/auth/login", json={"username": "admin", "password": "site-pass"})
        assert response.status_code == 200
        assert response.json()["token_type"] == "bearer"
        assert json.loads(database.backend.data[AUTH_FLAG_KEY]) is True

    def test_wrong_password(self, client, admin_hash):
        response = client.post("/api/auth/login", json={"username": "admin", "password": "nope"})
        assert response.status_code == 401

    def test_no_hash_configured_rejects(self, client, monkeypatch):
        import controllers.auth_controller as auth_controller
        monkeypatch.setattr(auth_controller, "ADMIN_PASSWORD_HASH", "")
        response = client.post("/api/auth/login", json={"username": "admin", "password": "anything"})
        assert response.status_code == 401

    def test_logout_clears_flag(self, client):
        import database
        from config import AUTH_FLAG_KEY
        assert client.post("/api/auth/logout").status_code == 200
        assert json.loads(database.backend.data[AUTH_FLAG_KEY]) is False

    def test_data_routes_require_token(self, seeded_store):
        from fastapi.testclient import TestClient
        from server import app
        response = TestClient(app).get("/api/projects")
        assert response.status_code in (401, 403)

    def test_health_is_public(self, client):
        assert client.get("/api/health").json()["status"] == "healthy"


# ═══════════════════════════════════════════════════════════════
# 2. PROJECTS
# ═══════════════════════════════════════════════════════════════
class TestProjects:

    PAYLOAD = {
        "name": "Lake View Towers", "projectCode": "LVT", "address": "Bopal", "startDate": "2024-05-01",
        "completionDate": "2025-05-01", "budget": 100000, "status": "In Progress",
        "completionPercentage": 10, "spent": 5000, "client": "LV Builders",
    }

    def test_create_and_fetch(self, client):
        created = client.post("/api/projects", json=self.PAYLOAD).json()
        assert created["projectCode"] == "LVT"
        assert client.get(f"/api/projects/{created['id']}").json()["name"] == "Lake View Towers"

    def test_filter_all_and_status(self, client):
        assert len(client.get("/api/projects", params={"status": "All"}).json()) == 3
        assert [p["id"] for p in client.get("/api/projects", params={"status": "Planning"}).json()] == ["p3"]

    def test_validation_errors(self, client):
        payload = {**self.PAYLOAD, "name": "green valley residency", "budget": 0, "completionDate": "2024-01-01"}
        response = client.post("/api/projects", json=payload)
        assert response.status_code == 400
        assert set(_errors(response)) == {"name", "budget", "completionDate"}

    def test_update_overwrites(self, client):
        payload = {**self.PAYLOAD, "name": "Riverside Warehouse", "spent": None}
        updated = client.put("/api/projects/p3", json=payload).json()
        assert updated["id"] == "p3"
        assert updated["spent"] is None

    def test_unknown_project_404(self, client):
        assert client.get("/api/projects/missing").status_code == 404

    def test_summary(self, client):
        summary = client.get("/api/projects/p1/summary").json()
        assert summary["workforce"]["workers"] == 3
        assert summary["financial"]["gst_liability"] == 324000

    def test_delete(self, client, seeded_store):
        client.delete("/api/projects/p3")
        assert seeded_store.get("projects", "p3") is None


# ═══════════════════════════════════════════════════════════════
# 3. WORKERS & ATTENDANCE
# ═══════════════════════════════════════════════════════════════
class TestWorkers:

    def test_generated_worker_id(self, client):
        worker = client.post("/api/workers", json={
            "projectId": "p1", "name": "Naresh Rao", "designation": "Helper", "joiningDate": "2024-04-01",
        }).json()
        assert worker["workerId"] == "SNE/GVR-004"
        assert worker["serialNo"] == 4

    def test_name_derived_key(self, client):
        worker = client.post("/api/workers", json={
            "projectId": "p2", "name": "Kiran", "designation": "Mason", "joiningDate": "2024-04-01",
        }).json()
        assert worker["workerId"] == "SNE/MM-003"

    def test_explicit_worker_id_kept(self, client):
        worker = client.post("/api/workers", json={
            "projectId": "p3", "name": "A", "designation": "Mason", "joiningDate": "2024-04-01", "workerId": "CUSTOM-1",
        }).json()
        assert worker["workerId"] == "CUSTOM-1"

    def test_serial_follows_project_after_delete(self, client):
        new_worker = {"projectId": "p3", "name": "Kalu", "designation": "Helper", "joiningDate": "2024-04-01"}
        assert client.post("/api/workers", json=new_worker).json()["serialNo"] == 1
        assert client.post("/api/workers", json=new_worker).json()["serialNo"] == 2
        client.delete("/api/workers/w1")
        response = client.post("/api/workers", json=new_worker)
        assert response.status_code == 200
        assert response.json()["serialNo"] == 3

    def test_update_without_worker_id_keeps_code(self, client):
        updated = client.put("/api/workers/w2", json={
            "projectId": "p1", "name": "Suresh Yadav", "designation": "Mason", "serialNo": 2, "joiningDate": "2024-01-15",
        }).json()
        assert updated["workerId"] == "SNE/GVR-002"
        assert updated["designation"] == "Mason"

    def test_validation(self, client):
        response = client.post("/api/workers", json={
            "projectId": "p1", "name": " ", "serialNo": 1, "joiningDate": "2024-04-01", "exitDate": "2024-01-01",
        })
        assert response.status_code == 400
        assert set(_errors(response)) == {"name", "serialNo", "designation", "exitDate"}

    def test_attendance_sheet_defaults_absent_and_saves(self, client, seeded_store):
        sheet = client.get("/api/attendance/sheet", params={"project_id": "p1", "date": "2024-03-05"}).json()
        assert sheet["counts"] == {"Present": 0, "Absent": 3, "Half Day": 0}

        payload = {"projectId": "p1", "date": "2024-03-05", "records": [{"workerId": "w1", "status": "Present"}]}
        assert client.post("/api/attendance/sheet", json=payload).status_code == 200
        assert client.post("/api/attendance/sheet", json=payload).status_code == 200

        day = [a for a in seeded_store.all("attendance") if a["date"] == "2024-03-05"]
        assert len(day) == 3
        sheet = client.get("/api/attendance/sheet", params={"project_id": "p1", "date": "2024-03-05"}).json()
        assert sheet["counts"] == {"Present": 1, "Absent": 2, "Half Day": 0}

    def test_attendance_bad_status(self, client):
        payload = {"projectId": "p1", "date": "2024-03-05", "records": [{"workerId": "w1", "status": "Late"}]}
        assert client.post("/api/attendance/sheet", json=payload).status_code == 400

    def test_attendance_mark_for_other_project_rejected(self, client, seeded_store):
        payload = {"projectId": "p1", "date": "2024-03-06", "records": [
            {"workerId": "w1", "status": "Present"},
            {"workerId": "w4", "status": "Present"},
        ]}
        response = client.post("/api/attendance/sheet", json=payload)
        assert response.status_code == 400
        assert _errors(response) == {"w4": "Worker does not belong to this project."}
        assert not [a for a in seeded_store.all("attendance") if a["date"] == "2024-03-06"]


# ═══════════════════════════════════════════════════════════════
# 4. KHARCHI & PAYROLL
# ═══════════════════════════════════════════════════════════════
class TestKharchiAndPayroll:

    def test_sheet_lists_sundays(self, client):
        sheet = client.get("/api/kharchi/sheet", params={"project_id": "p1", "month": "2024-02"}).json()
        assert sheet["sundays"] == ["2024-02-04", "2024-02-11", "2024-02-18", "2024-02-25"]

    def test_non_sunday_rejected(self, client, seeded_store):
        before = seeded_store.all("kharchi")
        payload = {"projectId": "p1", "entries": [{"workerId": "w1", "date": "2024-02-05", "amount": 100}]}
        response = client.post("/api/kharchi/sheet", json=payload)
        assert response.status_code == 400
        assert "w1@2024-02-05" in _errors(response)
        assert seeded_store.all("kharchi") == before

    def test_save_is_idempotent(self, client, seeded_store):
        payload = {"projectId": "p1", "entries": [{"workerId": "w1", "date": "2024-03-03", "amount": 650}]}
        client.post("/api/kharchi/sheet", json=payload)
        client.post("/api/kharchi/sheet", json=payload)
        cells = [k for k in seeded_store.all("kharchi") if k["workerId"] == "w1" and k["date"] == "2024-03-03"]
        assert len(cells) == 1
        assert cells[0]["amount"] == 650

    def test_payroll_net(self, client, seeded_store):
        worker = client.post("/api/workers", json={
            "projectId": "p3", "name": "Bhavesh", "designation": "Mason", "joiningDate": "2024-01-01",
        }).json()
        client.post("/api/kharchi/sheet", json={"projectId": "p3", "entries": [
            {"workerId": worker["id"], "date": "2024-02-04", "amount": 400},
            {"workerId": worker["id"], "date": "2024-02-11", "amount": 400},
        ]})
        client.post("/api/advances", json={"workerId": worker["id"], "projectId": "p3", "amount": 1200, "date": "2024-02-08"})

        payload = {"projectId": "p3", "month": "2024-02", "lines": [{"workerId": worker["id"], "workAmount": 10000, "messDeduction": 500}]}
        client.post("/api/payroll/sheet", json=payload)
        saved = client.post("/api/payroll/sheet", json=payload).json()["records"]

        assert saved[0]["netPayable"] == 7500
        assert saved[0]["kharchiDeduction"] == 800
        assert saved[0]["advanceDeduction"] == 1200
        assert saved[0]["isPaid"] is True
        payments = [p for p in seeded_store.all("worker_payments") if p["workerId"] == worker["id"]]
        assert len(payments) == 1

    def test_bad_month(self, client):
        response = client.get("/api/payroll/sheet", params={"project_id": "p1", "month": "2024-2"})
        assert response.status_code == 400

    def test_advance_serial_preserved_on_edit(self, client):
        payload = {"workerId": "w2", "projectId": "p1", "amount": 300, "date": "2024-03-09"}
        created = client.post("/api/advances", json=payload).json()
        assert created["serialNo"] == 3
        edited = client.put(f"/api/advances/{created['id']}", json={**payload, "amount": 350}).json()
        assert edited["serialNo"] == 3
        assert edited["amount"] == 350


# ═══════════════════════════════════════════════════════════════
# 5. MONEY & MATERIALS
# ═══════════════════════════════════════════════════════════════
class TestMoneyAndMaterials:

    def test_bill_grand_total_defaults(self, client):
        bill = client.post("/api/bills", json={"projectId": "p1", "billNo": "RA-02", "amount": 1000, "gstAmount": 180}).json()
        assert bill["grandTotal"] == 1180
        assert bill["serialNo"] == 3

    def test_gst_view(self, client):
        assert client.get("/api/gst").json()["gst_liability"] == 495000
        assert client.get("/api/gst", params={"project_id": "p2"}).json()["gst_liability"] == 171000

    def test_purchase_total_derived(self, client):
        purchase = client.post("/api/purchases", json={
            "projectId": "p3", "date": "2024-07-01", "description": "Sand", "quantity": 10, "unit": "Brass", "rate": 4500,
        }).json()
        assert purchase["totalAmount"] == 45000
        edited = client.put(f"/api/purchases/{purchase['id']}", json={
            "projectId": "p3", "date": "2024-07-01", "description": "Sand", "quantity": 12, "unit": "Brass", "rate": 4500,
        }).json()
        assert edited["totalAmount"] == 54000

    def test_inventory_balance(self, client):
        rows = {r["key"]: r for r in client.get("/api/inventory", params={"project_id": "p1"}).json()}
        assert rows["cement"]["balance"] == 320
        assert rows["cement"]["status"] == "in_stock"

    def test_mess_derived_fields(self, client):
        entry = client.post("/api/mess", json={"projectId": "p2", "workerCount": 10, "rate": 80, "amountPaid": 500}).json()
        assert entry["totalAmount"] == 800
        assert entry["balance"] == 300

    def test_expenses(self, client):
        pnl = client.get("/api/expenses", params={"project_id": "p1"}).json()
        assert pnl["income"] == 2000000
        assert pnl["expense"] == 190000 + 744000 + 1400 + 2000

    def test_dashboard(self, client):
        stats = client.get("/api/dashboard/stats").json()
        assert stats["projects"]["total"] == 3
        assert len(stats["attendance_trend"]) == 7


# ═══════════════════════════════════════════════════════════════
# 6. BACKUP
# ═══════════════════════════════════════════════════════════════
class TestBackup:

    def test_export(self, client):
        response = client.get("/api/backup/export")
        assert response.status_code == 200
        assert "SN_Enterprise_Backup_" in response.headers["content-disposition"]
        assert len(response.json()["projects"]) == 3

    def test_rejected_import_leaves_store_alone(self, client, seeded_store):
        before = seeded_store.snapshot()
        for content in (b"{broken", json.dumps({"workers": []}).encode()):
            response = client.post("/api/backup/import", files={"file": ("backup.json", content, "application/json")})
            assert response.status_code == 400
        assert seeded_store.snapshot() == before

    def test_import_replaces_present_collections(self, client, seeded_store):
        document = {"projects": [{"id": "x1", "name": "Imported"}], "messEntries": []}
        response = client.post("/api/backup/import", files={"file": ("backup.json", json.dumps(document).encode(), "application/json")})
        assert response.status_code == 200
        assert response.json()["restored"] == ["projects", "messEntries"]
        assert seeded_store.all("projects") == [{"id": "x1", "name": "Imported"}]
        assert seeded_store.all("mess") == []
        assert len(seeded_store.all("workers")) == 5


# ═══════════════════════════════════════════════════════════════
# 7. REPORTS, SYNC & AI
# ═══════════════════════════════════════════════════════════════
class TestAuxiliary:

    def test_projects_excel(self, client):
        response = client.get("/api/reports/export/projects", params={"format": "excel"})
        assert response.status_code == 200

    def test_salary_pdf(self, client):
        response = client.get("/api/reports/export/salary-sheet", params={"format": "pdf", "project_id": "p1", "month": "2024-03"})
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"

    def test_report_needs_project(self, client):
        assert client.get("/api/reports/export/kharchi-sheet", params={"month": "2024-03"}).status_code == 400

    def test_unknown_report(self, client):
        assert client.get("/api/reports/export/nope").status_code == 400

    @pytest.mark.parametrize("report_type", ["master-record", "advance-register", "gst"])
    def test_register_exports(self, client, report_type):
        for fmt in ("excel", "pdf"):
            response = client.get(f"/api/reports/export/{report_type}", params={"format": fmt})
            assert response.status_code == 200

    def test_master_record_sections(self, seeded_store):
        from controllers.reports_controller import build_report
        _, sections = build_report("master-record")
        assert [s[0] for s in sections] == [
            "1. Active Projects List", "2. Workers Register", "3. Billing Register",
            "4. Purchase Register", "5. Client Payments Received",
        ]
        bills = sections[2][2]
        assert bills[0][-1] == 2124000

    def test_gst_register_total(self, seeded_store):
        from controllers.reports_controller import build_report
        _, sections = build_report("gst", project_id="p1")
        rows = sections[0][2]
        assert rows[-1][-1] == 324000
        assert len(rows) == 2

    def test_advance_register_month_filter(self, seeded_store):
        from controllers.reports_controller import build_report
        _, sections = build_report("advance-register", month="2024-03")
        rows = sections[0][2]
        assert rows[0][2] == "Ramesh Patel"
        assert rows[-1][3] == 2000

    def test_execution_report(self, client, seeded_store):
        from controllers.reports_controller import build_report
        _, sections = build_report("execution", project_id="p1")
        assert sections[0][2] == [["Level 1", "2024-03-15", "2024-03-28"], ["Level 2", "2024-04-20", ""]]
        assert client.get("/api/reports/export/execution").status_code == 400

    def test_pay_slips(self, client, seeded_store):
        from controllers.reports_controller import build_report
        _, slips = build_report("pay-slips", project_id="p1", month="2024-03")
        assert len(slips) == 3
        assert slips[0][0].startswith("SNE/GVR-001")
        assert slips[0][2][-1] == ["Net Payable", -3000]
        response = client.get("/api/reports/export/pay-slips", params={"format": "pdf", "project_id": "p1", "month": "2024-03"})
        assert response.status_code == 200

    def test_sync_status_offline(self, client):
        status = client.get("/api/sync/status").json()
        assert status["online"] is False
        assert client.post("/api/sync").json()["started"] is False

    def test_estimate_offline(self, client):
        assert client.post("/api/ai/estimate", json={"description": "2BHK house"}).status_code == 503

    def test_chat_offline(self, client):
        reply = client.post("/api/ai/chat", json={"message": "Curing time for M20?"}).json()
        assert "offline" in reply["response"]
