"""ReportLab PDF Generation Service Implementation

Implements invoice PDF generation using ReportLab library.
"""

from io import BytesIO
from typing import List, Optional
from decimal import Decimal
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.domain.billing_rules import from_minor_units
from src.domain.company_settings import CompanySettings
from src.domain.customer import Customer
from src.domain.invoice import Invoice
from src.domain.invoice_item import InvoiceItem

DEFAULT_COMPANY_NAME = "My Company"
CURRENCY = "EUR"


def _money(amount_minor: int) -> str:
    return f"{from_minor_units(amount_minor):,.2f} {CURRENCY}"


def _quantity(quantity: Decimal) -> str:
    text = f"{Decimal(str(quantity)):.2f}"
    return text.rstrip("0").rstrip(".") if "." in text else text


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Generates A4 invoices with a line item table and net/tax/gross totals.
    Draft invoices carry a DRAFT label.
    """

    def generate_invoice(
        self,
        invoice: Invoice,
        items: List[InvoiceItem],
        customer: Customer,
        settings: Optional[CompanySettings] = None,
    ) -> bytes:
        """
        Generate an invoice PDF

        Args:
            invoice: Invoice header with totals
            items: Line items, ordered by position
            customer: Billed customer
            settings: Workspace settings (company name), if any

        Returns:
            PDF document as bytes
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=f"Invoice {invoice.invoice_number}",
        )

        styles = getSampleStyleSheet()
        elements = []

        # Custom styles
        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=24,
            spaceAfter=10,
            textColor=colors.HexColor("#2C3E50"),
        )
        label_style = ParagraphStyle(
            "LabelStyle",
            parent=styles["Heading2"],
            fontSize=14,
            textColor=colors.HexColor("#E74C3C"),
            spaceAfter=20,
        )
        normal_style = ParagraphStyle(
            "NormalStyle",
            parent=styles["Normal"],
            fontSize=10,
        )
        bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=10,
            fontName="Helvetica-Bold",
        )

        company_name = settings.company_name if settings and settings.company_name else DEFAULT_COMPANY_NAME

        # Header
        elements.append(Paragraph(escape(company_name), title_style))
        elements.append(Spacer(1, 6 * mm))
        label = "DRAFT INVOICE" if invoice.is_draft else "INVOICE"
        elements.append(Paragraph(label, label_style))

        # Invoice details
        invoice_info = [
            ["Invoice Number:", invoice.invoice_number],
            ["Invoice Date:", invoice.date.strftime("%d.%m.%Y")],
            ["Due Date:", invoice.due_date.strftime("%d.%m.%Y")],
            ["Status:", invoice.status.value.upper()],
        ]
        if invoice.payment_terms:
            invoice_info.append(["Payment Terms:", invoice.payment_terms])

        invoice_table = Table(invoice_info, colWidths=[40 * mm, 100 * mm])
        invoice_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), colors.HexColor("#7F8C8D")),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(invoice_table)
        elements.append(Spacer(1, 10 * mm))

        # Customer
        elements.append(Paragraph("Bill To:", bold_style))
        elements.append(Paragraph(escape(customer.name), normal_style))
        if customer.customer_number:
            elements.append(Paragraph(f"Customer No.: {escape(customer.customer_number)}", normal_style))
        elements.append(Spacer(1, 10 * mm))

        # Line items
        line_data = [["Description", "Date", "Qty", "Unit", "Unit Price", "Tax", "Total"]]
        for item in items:
            service = item.service_date.strftime("%d.%m.%Y") if item.service_date else ""
            if item.start_time and item.end_time:
                service = f"{service} {item.start_time}-{item.end_time}".strip()
            line_data.append(
                [
                    Paragraph(escape(item.description), normal_style),
                    service,
                    _quantity(item.quantity),
                    item.unit,
                    _money(item.unit_price),
                    f"{Decimal(str(item.tax_rate)).normalize():f}%",
                    _money(item.total),
                ]
            )

        col_widths = [45 * mm, 30 * mm, 12 * mm, 15 * mm, 25 * mm, 13 * mm, 30 * mm]
        line_table = Table(line_data, colWidths=col_widths, repeatRows=1)
        line_table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2C3E50")),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 9),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    # Data rows
                    ("FONTSIZE", (0, 1), (-1, -1), 8),
                    ("ALIGN", (2, 1), (-1, -1), "RIGHT"),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    # Grid
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDC3C7")),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
                    ("TOPPADDING", (0, 0), (-1, -1), 5),
                    (
                        "ROWBACKGROUNDS",
                        (0, 1),
                        (-1, -1),
                        [colors.white, colors.HexColor("#F8F9F9")],
                    ),
                ]
            )
        )
        elements.append(line_table)
        elements.append(Spacer(1, 5 * mm))

        # Totals
        total_data = [
            ["Net:", _money(invoice.subtotal)],
            ["Tax:", _money(invoice.tax_total)],
            ["Total:", _money(invoice.total)],
        ]
        total_table = Table(total_data, colWidths=[140 * mm, 30 * mm])
        total_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 2), (-1, 2), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("ALIGN", (0, 0), (-1, -1), "RIGHT"),
                    ("LINEABOVE", (0, 2), (-1, 2), 1.5, colors.HexColor("#2C3E50")),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(total_table)
        elements.append(Spacer(1, 15 * mm))

        if invoice.notes:
            elements.append(Paragraph(escape(invoice.notes), normal_style))

        if invoice.is_draft:
            elements.append(
                Paragraph(
                    "<i>This is a draft and not a valid invoice until it has been sent.</i>",
                    ParagraphStyle(
                        "FooterNote",
                        parent=styles["Normal"],
                        fontSize=9,
                        textColor=colors.HexColor("#95A5A6"),
                    ),
                )
            )

        # Build PDF
        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
