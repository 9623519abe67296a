from fastapi import HTTPException
from fastapi.responses import FileResponse
from typing import Optional, List, Tuple
from datetime import datetime

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment
from reportlab.lib.pagesizes import landscape, A4
from reportlab.lib import colors
from reportlab.lib.units import mm
from reportlab.platypus import SimpleDocTemplate, Table as RLTable, TableStyle, Paragraph, Spacer
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle

from database import store
from config import EXPORT_DIR
from core import metrics
from core.sync import IST
from core.validation import validate_month

REPORT_TITLES = {
    "projects": "Project List",
    "salary-sheet": "Salary Sheet",
    "kharchi-sheet": "Kharchi Sheet",
    "pay-slips": "Pay Slips",
    "advance-register": "Advance Register",
    "gst": "GST Register",
    "execution": "Execution Report",
    "master-record": "Master Data Record",
}

# (heading, header, rows); heading is None for single-table reports
Section = Tuple[Optional[str], List[str], List[list]]


def style_excel_header(ws, row=1):
    header_font = Font(bold=True, color="FFFFFF", size=10)
    header_fill = PatternFill(start_color="1e293b", end_color="1e293b", fill_type="solid")
    for cell in ws[row]:
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center", vertical="center")


def auto_column_width(ws):
    for col in ws.columns:
        max_len = max((len(str(cell.value or "")) for cell in col), default=0)
        ws.column_dimensions[col[0].column_letter].width = min(max_len + 3, 40)


def _project_name(project_id: Optional[str]) -> str:
    project = store.get("projects", project_id) if project_id else None
    return (project or {}).get("name") or ""


def _require_project(project_id: Optional[str]) -> dict:
    if not project_id:
        raise HTTPException(status_code=400, detail="project_id is required for this report")
    project = store.get("projects", project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


def _require_project_and_month(project_id: Optional[str], month: Optional[str]) -> dict:
    if not project_id:
        raise HTTPException(status_code=400, detail="project_id is required for this report")
    validate_month(month or "")
    return _require_project(project_id)


def _salary_lines(project_id: str, month: str) -> List[dict]:
    """Saved payroll where it exists, otherwise zero work with the month's deductions."""
    payments = {p.get("workerId"): p for p in store.all("worker_payments", project_id) if p.get("month") == month}
    kharchi = store.all("kharchi")
    advances = store.all("advances")
    lines = []
    for w in sorted(store.all("workers", project_id), key=lambda w: w.get("serialNo") or 0):
        saved = payments.get(w.get("id"))
        if saved:
            work, mess = saved.get("workAmount") or 0, saved.get("messDeduction") or 0
            khr, adv = saved.get("kharchiDeduction") or 0, saved.get("advanceDeduction") or 0
        else:
            deductions = metrics.month_deductions(kharchi, advances, w.get("id"), month)
            work, mess, khr, adv = 0, 0, deductions["kharchi"], deductions["advance"]
        lines.append({
            "worker": w, "work": work, "mess": mess, "kharchi": khr, "advance": adv,
            "net": metrics.payroll_net(work, mess, khr, adv),
            "paid": bool(saved and saved.get("isPaid")),
        })
    return lines


# ── Report builders ───────────────────────────────────────

def _projects_table() -> Tuple[str, List[Section]]:
    header = ["Code", "Name", "Address", "Client", "Start Date", "Completion Date", "Budget", "Spent", "Status", "Completion %"]
    rows = [
        [
            p.get("projectCode") or "", p.get("name") or "", p.get("address") or "", p.get("client") or "",
            p.get("startDate") or "", p.get("completionDate") or "", p.get("budget") or 0, p.get("spent") or 0,
            p.get("status") or "", p.get("completionPercentage") or 0,
        ]
        for p in store.all("projects")
    ]
    return "All projects", [(None, header, rows)]


def _salary_table(project_id: Optional[str], month: Optional[str]) -> Tuple[str, List[Section]]:
    project = _require_project_and_month(project_id, month)
    header = ["SR No", "Worker ID", "Name", "Designation", "Work Amount", "Mess", "Kharchi", "Advance", "Net Payable", "Paid"]
    rows = [
        [
            line["worker"].get("serialNo"), line["worker"].get("workerId"), line["worker"].get("name"), line["worker"].get("designation"),
            line["work"], line["mess"], line["kharchi"], line["advance"], line["net"], "Yes" if line["paid"] else "No",
        ]
        for line in _salary_lines(project_id, month)
    ]
    return f"{project.get('name')} - {month}", [(None, header, rows)]


def _pay_slips(project_id: Optional[str], month: Optional[str]) -> Tuple[str, List[Section]]:
    project = _require_project_and_month(project_id, month)
    sections = []
    for line in _salary_lines(project_id, month):
        w = line["worker"]
        sections.append((
            f"{w.get('workerId')} - {w.get('name')} ({w.get('designation')})",
            ["Particulars", "Amount"],
            [
                ["Work Amount", line["work"]],
                ["Less: Mess", line["mess"]],
                ["Less: Kharchi", line["kharchi"]],
                ["Less: Advance", line["advance"]],
                ["Net Payable", line["net"]],
            ],
        ))
    return f"{project.get('name')} - {month}", sections


def _kharchi_table(project_id: Optional[str], month: Optional[str]) -> Tuple[str, List[Section]]:
    project = _require_project_and_month(project_id, month)
    sundays = metrics.sundays_in_month(month)
    amounts = {(k.get("workerId"), k.get("date")): k.get("amount") or 0 for k in store.all("kharchi", project_id)}
    header = ["SR No", "Worker ID", "Name"] + [datetime.fromisoformat(d).strftime("%d %b") for d in sundays] + ["Total"]
    rows = []
    for w in sorted(store.all("workers", project_id), key=lambda w: w.get("serialNo") or 0):
        cells = [amounts.get((w.get("id"), d), 0) for d in sundays]
        rows.append([w.get("serialNo"), w.get("workerId"), w.get("name")] + cells + [sum(cells)])
    totals = [sum(r[3 + i] for r in rows) for i in range(len(sundays))]
    rows.append(["", "", "Total"] + totals + [sum(totals)])
    return f"{project.get('name')} - {month}", [(None, header, rows)]


def _advance_table(project_id: Optional[str], month: Optional[str]) -> Tuple[str, List[Section]]:
    if month:
        validate_month(month)
    advances = store.all("advances", project_id)
    if month:
        advances = [a for a in advances if (a.get("date") or "").startswith(month)]
    names = {w.get("id"): w.get("name") for w in store.all("workers")}
    header = ["SR No", "Date", "Worker Name", "Amount", "Paid By", "Mode", "Remarks"]
    rows = [
        [a.get("serialNo"), a.get("date"), names.get(a.get("workerId"), ""), a.get("amount") or 0,
         a.get("paidBy") or "", a.get("paymentMode") or "", a.get("remarks") or ""]
        for a in sorted(advances, key=lambda a: a.get("date") or "")
    ]
    rows.append(["", "", "Total", sum(r[3] for r in rows), "", "", ""])
    scope = _project_name(project_id) if project_id and project_id != "All" else "All projects"
    return f"{scope} - {month}" if month else scope, [(None, header, rows)]


def _gst_table(project_id: Optional[str]) -> Tuple[str, List[Section]]:
    bills = metrics.for_project(store.all("bills"), project_id)
    header = ["Bill No", "Certify Date", "Project", "Amount", "GST Amount"]
    rows = [
        [b.get("billNo"), b.get("certifyDate") or "", _project_name(b.get("projectId")), b.get("amount") or 0, b.get("gstAmount") or 0]
        for b in bills
    ]
    rows.append(["", "", "Total GST Liability", "", metrics.gst_liability(bills)])
    scope = _project_name(project_id) if project_id and project_id != "All" else "All projects"
    return scope, [(None, header, rows)]


def _execution_table(project_id: Optional[str]) -> Tuple[str, List[Section]]:
    project = _require_project(project_id)
    header = ["Level", "Pour 1", "Pour 2"]
    rows = []
    for level in store.all("execution", project_id):
        pours = [p.get("date") or p.get("label") or "" for p in level.get("pours") or []]
        pours += [""] * (2 - len(pours))
        rows.append([level.get("levelName") or ""] + pours[:2])
    return project.get("name"), [(None, header, rows)]


def _master_record() -> Tuple[str, List[Section]]:
    projects = [
        [p.get("name"), p.get("address") or "", p.get("startDate") or "", p.get("budget") or 0, p.get("status") or ""]
        for p in store.all("projects")
    ]
    workers = [
        [w.get("workerId"), w.get("name"), w.get("designation"), _project_name(w.get("projectId")), w.get("joiningDate") or ""]
        for w in store.all("workers")
    ]
    bills = [
        [b.get("billNo"), b.get("certifyDate") or "", _project_name(b.get("projectId")), b.get("workNature") or "",
         b.get("amount") or 0, b.get("gstAmount") or 0, b.get("grandTotal") or b.get("amount") or 0]
        for b in store.all("bills")
    ]
    purchases = [
        [p.get("date"), _project_name(p.get("projectId")), p.get("description"), p.get("quantity") or 0,
         p.get("unit") or "", p.get("rate") or 0, p.get("totalAmount") or 0]
        for p in store.all("purchases")
    ]
    payments = [
        [c.get("date"), _project_name(c.get("projectId")), c.get("remarks") or "", c.get("amount") or 0]
        for c in store.all("client_payments")
    ]
    return "Complete data record", [
        ("1. Active Projects List", ["Project Name", "Address", "Start Date", "Budget", "Status"], projects),
        ("2. Workers Register", ["ID", "Name", "Designation", "Project Site", "Joining Date"], workers),
        ("3. Billing Register", ["Bill No", "Date", "Project", "Work Nature", "Amount", "GST", "Total"], bills),
        ("4. Purchase Register", ["Date", "Project", "Item", "Qty", "Unit", "Rate", "Total"], purchases),
        ("5. Client Payments Received", ["Date", "Project", "Remarks", "Amount"], payments),
    ]


def build_report(report_type: str, project_id: Optional[str] = None, month: Optional[str] = None) -> Tuple[str, List[Section]]:
    if report_type == "projects":
        return _projects_table()
    if report_type == "salary-sheet":
        return _salary_table(project_id, month)
    if report_type == "pay-slips":
        return _pay_slips(project_id, month)
    if report_type == "kharchi-sheet":
        return _kharchi_table(project_id, month)
    if report_type == "advance-register":
        return _advance_table(project_id, month)
    if report_type == "gst":
        return _gst_table(project_id)
    if report_type == "execution":
        return _execution_table(project_id)
    if report_type == "master-record":
        return _master_record()
    raise HTTPException(status_code=400, detail=f"Unknown report type: {report_type}")


def _pdf_cell(v) -> str:
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return f"{v:,.0f}"
    return str(v if v is not None else "")


async def export_report(report_type: str, format: str, project_id: Optional[str] = None, month: Optional[str] = None) -> FileResponse:
    if format not in ("excel", "pdf"):
        raise HTTPException(status_code=400, detail="Format must be 'excel' or 'pdf'")
    subtitle, sections = build_report(report_type, project_id, month)
    now = datetime.now(IST)
    timestamp = now.strftime("%Y%m%d_%H%M%S")
    title = f"SN Enterprise - {REPORT_TITLES[report_type]}"

    if format == "excel":
        wb = Workbook()
        ws = wb.active
        ws.title = REPORT_TITLES[report_type]
        ws.append([title])
        ws.append([f"{subtitle} | Generated: {now.strftime('%d %b %Y %H:%M')}"])
        for heading, header, rows in sections:
            ws.append([])
            if heading:
                ws.append([heading])
                ws.cell(row=ws.max_row, column=1).font = Font(bold=True, size=11)
            ws.append(header)
            style_excel_header(ws, ws.max_row)
            for row in rows:
                ws.append(row)
        auto_column_width(ws)
        filepath = EXPORT_DIR / f"{report_type}_{timestamp}.xlsx"
        wb.save(str(filepath))
        return FileResponse(str(filepath), filename=f"{report_type}_{timestamp}.xlsx", media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")

    filepath = EXPORT_DIR / f"{report_type}_{timestamp}.pdf"
    doc = SimpleDocTemplate(str(filepath), pagesize=landscape(A4), leftMargin=15*mm, rightMargin=15*mm, topMargin=15*mm, bottomMargin=15*mm)
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle("ReportTitle", parent=styles["Heading1"], fontSize=16, spaceAfter=6)
    subtitle_style = ParagraphStyle("ReportSubtitle", parent=styles["Normal"], fontSize=9, textColor=colors.grey, spaceAfter=12)
    section_style = ParagraphStyle("ReportSection", parent=styles["Heading3"], fontSize=11, spaceBefore=8, spaceAfter=4)
    header_style = TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1e293b")),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, 0), 8),
        ("FONTSIZE", (0, 1), (-1, -1), 7),
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f8fafc")]),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ])
    elements = [
        Paragraph(title, title_style),
        Paragraph(f"{subtitle} | Generated: {now.strftime('%d %b %Y %H:%M IST')}", subtitle_style),
    ]
    for heading, header, rows in sections:
        if heading:
            elements.append(Paragraph(heading, section_style))
        table = RLTable([header] + [[_pdf_cell(v) for v in row] for row in rows], repeatRows=1)
        table.setStyle(header_style)
        elements.append(table)
        elements.append(Spacer(1, 6*mm))
    doc.build(elements)
    return FileResponse(str(filepath), filename=f"{report_type}_{timestamp}.pdf", media_type="application/pdf")
