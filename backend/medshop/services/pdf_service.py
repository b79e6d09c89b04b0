"""
PDF Invoice Generation Service
Renders a recorded sale as a printable tax invoice with its line items.
"""
from io import BytesIO
from datetime import datetime
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import inch
from reportlab.lib import colors
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.enums import TA_CENTER

from medshop.core.config import settings
from medshop.schemas.entities import Sale
from medshop.services.formatting import format_currency

# Built-in PDF fonts have no rupee glyph
CURRENCY = "Rs. "


def _money(amount: float) -> str:
    return format_currency(amount, symbol=CURRENCY)


def render_sale_invoice(sale: Sale, shop_name: str | None = None) -> BytesIO:
    shop_name = shop_name or settings.SHOP_NAME

    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, topMargin=0.5*inch, bottomMargin=0.5*inch)

    elements = []
    styles = getSampleStyleSheet()

    title_style = ParagraphStyle(
        'InvoiceTitle',
        parent=styles['Heading1'],
        fontSize=24,
        textColor=colors.HexColor('#1a56db'),
        alignment=TA_CENTER,
        spaceAfter=12
    )

    heading_style = ParagraphStyle(
        'InvoiceHeading',
        parent=styles['Heading2'],
        fontSize=14,
        textColor=colors.HexColor('#1f2937'),
        spaceAfter=6
    )

    normal_style = ParagraphStyle(
        'InvoiceNormal',
        parent=styles['Normal'],
        fontSize=10,
        textColor=colors.HexColor('#374151')
    )

    elements.append(Paragraph("TAX INVOICE", title_style))
    elements.append(Spacer(1, 0.3*inch))

    # Shop and invoice info
    info_data = [
        [
            Paragraph(f"<b>{escape(shop_name)}</b>", normal_style),
            Paragraph(f"<b>Invoice #:</b> {sale.invoice_number}<br/>"
                      f"<b>Date:</b> {sale.sale_date.strftime('%d %b %Y, %I:%M %p')}<br/>"
                      f"<b>Payment:</b> {sale.payment_method.upper()} ({sale.payment_status})", normal_style)
        ]
    ]

    info_table = Table(info_data, colWidths=[3.5*inch, 3*inch])
    info_table.setStyle(TableStyle([
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
    ]))
    elements.append(info_table)
    elements.append(Spacer(1, 0.3*inch))

    if sale.customer_name or sale.customer_phone:
        elements.append(Paragraph("<b>Bill To:</b>", heading_style))
        customer_info = f"<b>{escape(sale.customer_name or 'Walk-in customer')}</b>"
        if sale.customer_phone:
            customer_info += f"<br/>Phone: {escape(sale.customer_phone)}"
        elements.append(Paragraph(customer_info, normal_style))
        elements.append(Spacer(1, 0.3*inch))

    # Line items
    items_data = [[
        Paragraph("<b>Medicine</b>", normal_style),
        Paragraph("<b>Batch / Expiry</b>", normal_style),
        Paragraph("<b>Qty</b>", normal_style),
        Paragraph("<b>Rate</b>", normal_style),
        Paragraph("<b>Disc.</b>", normal_style),
        Paragraph("<b>Amount</b>", normal_style),
    ]]
    for item in sale.items:
        items_data.append([
            Paragraph(escape(item.medicine_name), normal_style),
            Paragraph(f"{escape(item.batch_number)}<br/>{item.expiry_date.strftime('%b %Y')}", normal_style),
            Paragraph(str(item.quantity), normal_style),
            Paragraph(_money(item.unit_price), normal_style),
            Paragraph(_money(item.discount), normal_style),
            Paragraph(_money(item.total_price), normal_style),
        ])

    items_table = Table(items_data, colWidths=[1.9*inch, 1.2*inch, 0.5*inch, 1*inch, 0.8*inch, 1.1*inch])
    items_table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#f3f4f6')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.HexColor('#1f2937')),
        ('ALIGN', (2, 0), (-1, -1), 'RIGHT'),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 8),
        ('TOPPADDING', (0, 0), (-1, 0), 8),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#fafafa')]),
    ]))
    elements.append(items_table)
    elements.append(Spacer(1, 0.2*inch))

    total_data = [
        ['', Paragraph("<b>Subtotal:</b>", normal_style), Paragraph(_money(sale.subtotal), normal_style)],
        ['', Paragraph("<b>Discount:</b>", normal_style), Paragraph(_money(sale.discount), normal_style)],
        ['', Paragraph("<b>Tax:</b>", normal_style), Paragraph(_money(sale.tax), normal_style)],
        ['', Paragraph("<b>TOTAL:</b>", heading_style), Paragraph(f"<b>{_money(sale.total)}</b>", heading_style)],
    ]

    total_table = Table(total_data, colWidths=[3.6*inch, 1.5*inch, 1.4*inch])
    total_table.setStyle(TableStyle([
        ('ALIGN', (1, 0), (-1, -1), 'RIGHT'),
        ('LINEABOVE', (1, 3), (-1, 3), 1, colors.black),
        ('TOPPADDING', (0, 0), (-1, -1), 4),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 4),
    ]))
    elements.append(total_table)

    footer_style = ParagraphStyle(
        'Footer',
        parent=styles['Normal'],
        fontSize=8,
        textColor=colors.grey,
        alignment=TA_CENTER
    )
    elements.append(Spacer(1, 0.5*inch))
    elements.append(Paragraph("Thank you for your purchase! Get well soon.", footer_style))
    elements.append(Paragraph(f"Invoice generated on {datetime.now().strftime('%d %b %Y at %I:%M %p')}", footer_style))

    doc.build(elements)

    buffer.seek(0)
    return buffer
