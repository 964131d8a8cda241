"""
A4 invoice rendering for a bill, with a payment QR code
"""
import io
import json
from reportlab.lib.pagesizes import A4
from reportlab.lib import colors
from reportlab.pdfgen import canvas
from reportlab.graphics import renderPDF
from reportlab.graphics.shapes import Drawing
from reportlab.graphics.barcode.qr import QrCodeWidget
from foody.config import RESTAURANT_NAME, TAX_RATE
from foody.database.models import Bill, PaymentMethod


ACCENT = colors.HexColor("#c47a5a")
MUTED = colors.HexColor("#666666")
RULE = colors.HexColor("#e0d5cc")
LEFT, RIGHT = 50, 545
QR_SIZE = 120


def payment_qr_payload(bill: Bill) -> str:
    """JSON scanned by the customer's payment app"""
    return json.dumps({
        "bill_number": bill.bill_number,
        "total": bill.total,
        "restaurant": RESTAURANT_NAME,
        "payment_methods": [
            method.value for method in PaymentMethod if method != PaymentMethod.CASH
        ],
    })


def _money(value: float) -> str:
    return f"Rs {value:.0f}" if float(value).is_integer() else f"Rs {value:.2f}"


def _rule(pdf: canvas.Canvas, y: float, color=RULE, width: float = 1, x1: float = LEFT) -> None:
    pdf.setStrokeColor(color)
    pdf.setLineWidth(width)
    pdf.line(x1, y, RIGHT, y)


def _draw_qr(pdf: canvas.Canvas, data: str, x: float, y: float) -> None:
    widget = QrCodeWidget(data)
    x1, y1, x2, y2 = widget.getBounds()
    drawing = Drawing(QR_SIZE, QR_SIZE, transform=[QR_SIZE / (x2 - x1), 0, 0, QR_SIZE / (y2 - y1), 0, 0])
    drawing.add(widget)
    renderPDF.draw(drawing, pdf, x, y)


def render_bill_pdf(bill: Bill) -> bytes:
    """
    Render the invoice for a bill.

    The bill's order and user relationships must already be loaded.
    """
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4
    pdf.setTitle(f"Bill {bill.bill_number}")
    y = height - 60

    # Header
    pdf.setFont("Helvetica-Bold", 28)
    pdf.setFillColor(ACCENT)
    pdf.drawCentredString(width / 2, y, RESTAURANT_NAME.upper())
    y -= 18
    pdf.setFont("Helvetica", 10)
    pdf.setFillColor(MUTED)
    pdf.drawCentredString(width / 2, y, "Restaurant & Cafe")
    y -= 14
    _rule(pdf, y)
    y -= 30

    pdf.setFont("Helvetica-Bold", 18)
    pdf.setFillColor(colors.HexColor("#333333"))
    pdf.drawCentredString(width / 2, y, "INVOICE")
    y -= 28

    # Bill info
    order = bill.order
    customer = bill.user.name if bill.user else "Guest"
    info = [
        f"Bill No: {bill.bill_number}",
        f"Date: {bill.created_at:%d %B %Y}",
        f"Customer: {customer}",
    ]
    if order is not None and order.table_number:
        info.append(f"Table: {order.table_number}")
    info.append(f"Payment: {bill.payment_method.value.upper()}")
    info.append(f"Status: {'PAID' if bill.is_paid else 'UNPAID'}")

    pdf.setFont("Helvetica", 10)
    pdf.setFillColor(MUTED)
    for line in info:
        pdf.drawString(LEFT, y, line)
        y -= 15
    y -= 10

    # Items table
    _rule(pdf, y, ACCENT, 2)
    y -= 16
    pdf.setFont("Helvetica-Bold", 10)
    pdf.setFillColor(colors.HexColor("#333333"))
    pdf.drawString(LEFT, y, "Item")
    pdf.drawCentredString(310, y, "Qty")
    pdf.drawRightString(430, y, "Price")
    pdf.drawRightString(RIGHT, y, "Total")
    y -= 8
    _rule(pdf, y)
    y -= 16

    pdf.setFont("Helvetica", 10)
    pdf.setFillColor(colors.HexColor("#444444"))
    for item in (order.items if order is not None else []):
        pdf.drawString(LEFT, y, item.name or "Item")
        pdf.drawCentredString(310, y, str(item.quantity))
        pdf.drawRightString(430, y, _money(item.price))
        pdf.drawRightString(RIGHT, y, _money(item.line_total))
        y -= 18
        if y < 260:
            pdf.showPage()
            pdf.setFont("Helvetica", 10)
            y = height - 60

    _rule(pdf, y + 6)
    y -= 14

    # Totals
    totals_x = 380
    pdf.setFont("Helvetica", 11)
    pdf.setFillColor(MUTED)
    pdf.drawString(totals_x, y, "Subtotal:")
    pdf.drawRightString(RIGHT, y, _money(bill.subtotal))
    y -= 16
    pdf.drawString(totals_x, y, f"Tax ({TAX_RATE:.0%}):")
    pdf.drawRightString(RIGHT, y, _money(bill.tax))
    y -= 10
    _rule(pdf, y, ACCENT, 2, x1=totals_x)
    y -= 18
    pdf.setFont("Helvetica-Bold", 14)
    pdf.setFillColor(ACCENT)
    pdf.drawString(totals_x, y, "TOTAL:")
    pdf.drawRightString(RIGHT, y, _money(bill.total))
    y -= 40

    # Payment QR
    pdf.setFont("Helvetica", 10)
    pdf.setFillColor(MUTED)
    pdf.drawCentredString(width / 2, y, "Scan to Pay via eSewa, Khalti or Bank Transfer:")
    y -= QR_SIZE + 10
    _draw_qr(pdf, payment_qr_payload(bill), (width - QR_SIZE) / 2, y)
    y -= 24

    pdf.setFont("Helvetica", 9)
    pdf.setFillColor(colors.HexColor("#999999"))
    pdf.drawCentredString(width / 2, y, "Thank you for dining with us!")
    pdf.drawCentredString(width / 2, y - 12, f"{RESTAURANT_NAME} - Your Favorite Restaurant")

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()
