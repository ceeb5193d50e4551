"""Render a settlement statement to PDF with reportlab."""

from __future__ import annotations

import io
import logging
import re
import unicodedata
from decimal import Decimal
from typing import TYPE_CHECKING
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

if TYPE_CHECKING:
    from datetime import date

    from reportlab.platypus import Flowable

    from hr_portal.services.settlement import SettlementStatement

logger = logging.getLogger(__name__)

_TITLE = "Cálculo de Prestaciones Laborales"

_TERMINATION_REASON_LABELS = {
    "RESIGNATION": "Renuncia",
    "DISMISSAL": "Despido",
    "MUTUAL_AGREEMENT": "Mutuo acuerdo",
    "CONTRACT_END": "Fin de contrato",
    "OTHER": "Otro",
}


def format_national_id(national_id: str) -> str:
    """Format a 13-digit DNI as ``0000-0000-00000``; other values pass through."""
    digits = re.sub(r"\D", "", national_id)
    if len(digits) != 13:
        return national_id
    return f"{digits[:4]}-{digits[4:8]}-{digits[8:]}"


def _money(amount: Decimal, symbol: str) -> str:
    return f"{symbol} {amount:,.2f}"


def _day(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def _section_table(rows: list[list[str]], col_widths: list[float], header: bool = True) -> Table:
    table = Table(rows, colWidths=col_widths)
    style = [
        ("FONTNAME", (0, 0), (-1, -1), "Helvetica"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ALIGN", (-1, 0), (-1, -1), "RIGHT"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]
    if header:
        style += [
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1f3b57")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ]
    table.setStyle(TableStyle(style))
    return table


def render_settlement_pdf(
    statement: SettlementStatement,
    company_name: str = "",
    currency_symbol: str = "L.",
) -> bytes:
    """Return the PDF bytes of ``statement``."""
    output = io.BytesIO()
    doc = SimpleDocTemplate(
        output,
        pagesize=letter,
        leftMargin=0.75 * inch,
        rightMargin=0.75 * inch,
        topMargin=0.75 * inch,
        bottomMargin=0.75 * inch,
        title=_TITLE,
        author=company_name or "HR Portal",
    )
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle("SettlementTitle", parent=styles["Heading1"], fontSize=15, alignment=1)
    heading = styles["Heading3"]

    elements: list[Flowable] = []
    if company_name:
        elements.append(Paragraph(escape(company_name), styles["Title"]))
    elements.append(Paragraph(_TITLE, title_style))
    elements.append(Spacer(1, 12))

    # Employee
    service = statement.service
    employee_rows = [
        ["Empleado", statement.employee_name],
        ["DNI", format_national_id(statement.national_id)],
        ["Motivo", _TERMINATION_REASON_LABELS.get(statement.termination_reason.value, statement.termination_reason)],
        ["Fecha de ingreso", _day(statement.start_date)],
        ["Fecha de notificación", _day(statement.reference_date)],
        ["Fecha de retiro", _day(statement.termination_date)],
        ["Último aniversario", _day(statement.last_anniversary)],
        ["Tiempo laborado", f"{service.years} años, {service.months} meses, {service.days} días"],
    ]
    elements.append(_section_table(employee_rows, [2.2 * inch, 4.6 * inch], header=False))
    elements.append(Spacer(1, 12))

    # Salary
    salary = statement.salary
    elements.append(Paragraph("Salarios", heading))
    salary_rows = [
        ["Concepto", "Monto"],
        ["Salario mensual", _money(salary.base_monthly, currency_symbol)],
        ["Salario promedio mensual (14/12)", _money(salary.average_monthly, currency_symbol)],
        ["Salario promedio diario", _money(salary.average_daily, currency_symbol)],
        ["Salario base diario", _money(salary.base_daily, currency_symbol)],
    ]
    elements.append(_section_table(salary_rows, [4.8 * inch, 2.0 * inch]))
    elements.append(Spacer(1, 12))

    # Benefits
    items = statement.line_items
    manual = statement.manual
    elements.append(Paragraph("Prestaciones y derechos", heading))
    benefit_rows = [
        ["Concepto", "Días", "Monto"],
        ["Preaviso", str(statement.notice_days), _money(items.notice_pay, currency_symbol)],
        ["Cesantía", str(manual.cesantia_days), _money(items.cesantia_pay, currency_symbol)],
        [
            "Cesantía proporcional",
            str(manual.proportional_cesantia_days),
            _money(items.proportional_cesantia_pay, currency_symbol),
        ],
        ["Vacaciones pendientes", str(statement.vacation_proportional_days), _money(items.vacation_pay, currency_symbol)],
        ["Bono vacacional", str(manual.vacation_bonus_days), _money(items.vacation_bonus_pay, currency_symbol)],
        [
            f"Décimo tercer mes (desde {_day(statement.thirteenth_month.start)})",
            str(statement.thirteenth_month_proportional_days),
            _money(items.thirteenth_month_pay, currency_symbol),
        ],
        [
            f"Décimo cuarto mes (desde {_day(statement.fourteenth_month.start)})",
            str(statement.fourteenth_month_proportional_days),
            _money(items.fourteenth_month_pay, currency_symbol),
        ],
        ["Salarios adeudados", "", _money(manual.salaries_due, currency_symbol)],
        ["Horas extra", "", _money(manual.overtime_due, currency_symbol)],
        ["Séptimo día", "", _money(manual.seventh_day_payment, currency_symbol)],
        ["Reajuste salarial", "", _money(manual.wage_adjustment, currency_symbol)],
        ["Bono educativo", "", _money(manual.educational_bonus, currency_symbol)],
        ["Otros pagos", "", _money(manual.other_payments, currency_symbol)],
        ["Total prestaciones", "", _money(statement.total_benefits, currency_symbol)],
    ]
    elements.append(_section_table(benefit_rows, [4.0 * inch, 0.8 * inch, 2.0 * inch]))
    elements.append(Spacer(1, 12))

    # Deductions and net
    elements.append(Paragraph("Deducciones", heading))
    deduction_rows = [
        ["Concepto", "Monto"],
        ["Impuesto vecinal", _money(manual.municipal_tax, currency_symbol)],
        ["Preaviso no otorgado", _money(manual.notice_penalty, currency_symbol)],
        ["Total deducciones", _money(statement.total_deductions, currency_symbol)],
        ["Total a pagar", _money(statement.net_payment, currency_symbol)],
    ]
    deductions = _section_table(deduction_rows, [4.8 * inch, 2.0 * inch])
    deductions.setStyle(TableStyle([("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold")]))
    elements.append(deductions)

    for warning in statement.warnings:
        elements.append(Spacer(1, 6))
        elements.append(Paragraph(f"<i>Nota: {escape(warning)}</i>", styles["Normal"]))

    doc.build(elements)
    content = output.getvalue()
    output.close()

    logger.debug("Rendered settlement PDF for %s (%d bytes)", statement.employee_name, len(content))
    return content


def settlement_filename(statement: SettlementStatement) -> str:
    ascii_name = unicodedata.normalize("NFKD", statement.employee_name).encode("ascii", "ignore").decode()
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_name.lower()).strip("-") or "empleado"
    return f"liquidacion-{slug}-{statement.termination_date.isoformat()}.pdf"
