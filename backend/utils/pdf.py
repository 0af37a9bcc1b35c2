# backend/utils/pdf.py

import io
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from models.stock import StockMovement, ENTRY

BACKEND_DIR = Path(__file__).resolve().parents[1]
FONT_DIRS = [BACKEND_DIR / "assets" / "fonts", BACKEND_DIR / "fonts"]

# Built-in fonts are used unless DejaVu is available for wider glyph coverage
FONT_REGULAR_NAME = "Helvetica"
FONT_BOLD_NAME = "Helvetica-Bold"

_fonts_inited = False
def _init_fonts():
    """Registers DejaVu fonts in ReportLab when they are shipped with the app."""
    global _fonts_inited, FONT_REGULAR_NAME, FONT_BOLD_NAME
    if _fonts_inited:
        return
    _fonts_inited = True

    from reportlab.pdfbase import pdfmetrics
    from reportlab.pdfbase.ttfonts import TTFont

    regular = _find_font("DejaVuSans.ttf")
    if regular is None:
        return
    pdfmetrics.registerFont(TTFont("DejaVuSans", str(regular)))
    FONT_REGULAR_NAME = FONT_BOLD_NAME = "DejaVuSans"

    bold = _find_font("DejaVuSans-Bold.ttf")
    if bold is not None:
        pdfmetrics.registerFont(TTFont("DejaVuSans-Bold", str(bold)))
        FONT_BOLD_NAME = "DejaVuSans-Bold"

def _find_font(name: str) -> Optional[Path]:
    for d in FONT_DIRS:
        p = d / name
        if p.exists():
            return p
    return None

def _period_label(start_date: Optional[date], end_date: Optional[date]) -> str:
    if start_date and end_date:
        return f"{start_date:%d/%m/%Y} - {end_date:%d/%m/%Y}"
    if start_date:
        return f"from {start_date:%d/%m/%Y}"
    if end_date:
        return f"until {end_date:%d/%m/%Y}"
    return "all movements"

def build_movements_report(
    movements: List[StockMovement],
    summary: Dict[str, Any],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> bytes:
    """
    Renders the stock movement report:
    - header with the reported period
    - one row per movement (date, product, type, quantity, value)
    - summary block with counts and valued totals
    """
    _init_fonts()
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    width, height = A4

    # --- 1. NAGŁÓWEK ---
    y = height - 20 * mm
    c.setFont(FONT_BOLD_NAME, 16)
    c.drawString(20 * mm, y, "Stock movements report")
    y -= 8 * mm

    c.setFont(FONT_REGULAR_NAME, 10)
    c.drawString(20 * mm, y, f"Period: {_period_label(start_date, end_date)}")
    c.drawRightString(190 * mm, y, f"Generated: {datetime.now():%d/%m/%Y %H:%M}")
    y -= 6 * mm
    c.setLineWidth(0.5)
    c.line(20 * mm, y, 190 * mm, y)
    y -= 8 * mm

    # --- 2. TABELA ---
    def draw_table_header(current_y):
        c.setFillColorRGB(0.95, 0.95, 0.95)
        c.rect(20 * mm, current_y - 2 * mm, 170 * mm, 8 * mm, fill=1, stroke=0)
        c.setFillColorRGB(0, 0, 0)
        c.setFont(FONT_BOLD_NAME, 9)
        c.drawString(22 * mm, current_y, "Date")
        c.drawString(52 * mm, current_y, "Product")
        c.drawString(125 * mm, current_y, "Type")
        c.drawRightString(155 * mm, current_y, "Qty")
        c.drawRightString(185 * mm, current_y, "Value")
        return current_y - 8 * mm

    y = draw_table_header(y)
    c.setFont(FONT_REGULAR_NAME, 9)

    if not movements:
        c.drawString(22 * mm, y, "No movements in this period")
        y -= 6 * mm

    for m in movements:
        product = m.product
        if m.type == ENTRY:
            label, value = "Entry", m.quantity * product.cost_price
        else:
            label, value = "Exit", m.quantity * product.sale_price

        c.drawString(22 * mm, y, f"{m.created_at:%d/%m/%Y %H:%M}")
        c.drawString(52 * mm, y, str(product.name)[:40])
        c.drawString(125 * mm, y, label)
        c.drawRightString(155 * mm, y, str(m.quantity))
        c.drawRightString(185 * mm, y, f"{value:.2f}")

        c.setLineWidth(0.1)
        c.line(20 * mm, y - 2 * mm, 190 * mm, y - 2 * mm)
        y -= 6 * mm

        # Obsługa nowej strony
        if y < 40 * mm:
            c.showPage()
            y = draw_table_header(height - 20 * mm)
            c.setFont(FONT_REGULAR_NAME, 9)

    # --- 3. PODSUMOWANIE ---
    y -= 6 * mm
    if y < 45 * mm:
        c.showPage()
        y = height - 30 * mm

    c.setFont(FONT_BOLD_NAME, 10)
    rows = [
        ("Entries:", f"{summary['entries']} ({summary['entries_quantity']} units)"),
        ("Exits:", f"{summary['exits']} ({summary['exits_quantity']} units)"),
        ("Balance:", str(summary["balance"])),
        ("Entries value:", f"{summary['entries_value']:.2f}"),
        ("Exits value:", f"{summary['exits_value']:.2f}"),
    ]
    for caption, text in rows:
        c.drawRightString(150 * mm, y, caption)
        c.drawRightString(185 * mm, y, text)
        y -= 5 * mm

    c.showPage()
    c.save()
    return buffer.getvalue()
