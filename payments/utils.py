"""
Utilities for payments - CSV export and PDF receipts.
"""
from io import BytesIO
import csv
from django.http import HttpResponse
from django.utils import timezone
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib.enums import TA_CENTER


def export_reconciliation_csv(reconciliation, rows=None):
    """
    Export a month's reconciliation as CSV

    Args:
        reconciliation: Reconciliation for one month
        rows: Optional filtered subset of reconciliation.rows

    Returns:
        HttpResponse with the CSV attachment
    """
    month_slug = reconciliation.month.replace(' ', '_')
    response = HttpResponse(content_type='text/csv')
    response['Content-Disposition'] = f'attachment; filename="payments_{month_slug}.csv"'

    writer = csv.writer(response)
    writer.writerow(['Month', 'Student', 'Room', 'Rent', 'Status', 'Amount', 'Method', 'Paid On'])

    for row in (reconciliation.rows if rows is None else rows):
        payment = row.payment
        writer.writerow([
            reconciliation.month,
            row.name,
            row.room_number,
            str(row.rent),
            row.payment_status,
            str(payment.amount) if payment else '',
            payment.method if payment else '',
            timezone.localtime(payment.date).strftime('%Y-%m-%d') if payment else '',
        ])

    return response


def generate_payment_receipt_pdf(payment, account_name=None, room_number=''):
    """
    Generate a rent receipt PDF for a payment

    Returns:
        BytesIO buffer containing the PDF
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=20*mm,
        leftMargin=20*mm,
        topMargin=20*mm,
        bottomMargin=20*mm
    )

    styles = getSampleStyleSheet()
    styles.add(ParagraphStyle(
        name='ReceiptTitle',
        parent=styles['Heading1'],
        fontSize=22,
        spaceAfter=10,
        alignment=TA_CENTER,
        textColor=colors.HexColor('#0d9488')
    ))
    styles.add(ParagraphStyle(
        name='ReceiptSubtitle',
        parent=styles['Normal'],
        fontSize=12,
        alignment=TA_CENTER,
        textColor=colors.HexColor('#64748b'),
        spaceAfter=20
    ))
    styles.add(ParagraphStyle(
        name='AmountLarge',
        parent=styles['Normal'],
        fontSize=26,
        fontName='Helvetica-Bold',
        alignment=TA_CENTER,
        textColor=colors.HexColor('#10b981'),
        spaceBefore=10,
        spaceAfter=20
    ))
    styles.add(ParagraphStyle(
        name='Footer',
        parent=styles['Normal'],
        fontSize=9,
        alignment=TA_CENTER,
        textColor=colors.HexColor('#94a3b8')
    ))

    elements = [
        Paragraph(account_name or "StayTrack", styles['ReceiptTitle']),
        Paragraph(f"Rent Receipt #{payment.id}", styles['ReceiptSubtitle']),
        Paragraph(f"Rs. {payment.amount:,.2f}", styles['AmountLarge']),
    ]

    paid_on = timezone.localtime(payment.date).strftime('%d %b %Y')
    details = [
        ['Student', payment.student_name],
        ['Room', room_number or '-'],
        ['Month', payment.month],
        ['Method', payment.method],
        ['Paid On', paid_on],
    ]
    if payment.notes:
        details.append(['Notes', payment.notes])

    table = Table(details, colWidths=[45*mm, 110*mm])
    table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (0, -1), 'Helvetica'),
        ('FONTNAME', (1, 0), (1, -1), 'Helvetica-Bold'),
        ('TEXTCOLOR', (0, 0), (0, -1), colors.HexColor('#64748b')),
        ('FONTSIZE', (0, 0), (-1, -1), 11),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 8),
        ('LINEBELOW', (0, 0), (-1, -2), 0.5, colors.HexColor('#e2e8f0')),
    ]))
    elements.append(table)
    elements.append(Spacer(1, 30))
    elements.append(Paragraph(
        f"Generated on {timezone.localtime().strftime('%d %b %Y, %I:%M %p')}",
        styles['Footer']
    ))

    doc.build(elements)
    buffer.seek(0)
    return buffer
