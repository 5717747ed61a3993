from __future__ import annotations

from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

TIME_FORMAT = "h:mm AM/PM"
HOURS_FORMAT = "0.00"

NIGHT_BLUE = "FF102542"
WHITE = "FFFFFFFF"
BLACK = "FF000000"
AMBER_BG = "FFFEF3C7"
AMBER_TEXT = "FFD97706"
OVERTIME_RED = "FFD90429"
TOTAL_GREY = "FFE0E0E0"
HEADER_DARK = "FF212529"
STRIPE = "FFF8F9FA"

FONT_NAME = "Arial"
FONT_SIZE = 20


def solid(argb: str) -> PatternFill:
    return PatternFill(fill_type="solid", start_color=argb, end_color=argb)


def data_font(*, size: int = FONT_SIZE, color: str = BLACK, bold: bool = True, underline: bool = False) -> Font:
    return Font(name=FONT_NAME, size=size, bold=bold, color=color, underline="single" if underline else None)


THIN = Side(style="thin", color=BLACK)
BORDER_FULL = Border(left=THIN, right=THIN, top=THIN, bottom=THIN)

CENTER = Alignment(horizontal="center", vertical="center")
CENTER_WRAP = Alignment(horizontal="center", vertical="center", wrap_text=True)
CENTER_BOTTOM = Alignment(horizontal="center", vertical="bottom")

FILL_DEPARTMENT = solid(NIGHT_BLUE)
FILL_DATA = solid(WHITE)
FILL_STATUS = solid(AMBER_BG)
FILL_TOTAL = solid(TOTAL_GREY)
FILL_HEADER = solid(HEADER_DARK)
FILL_STRIPE = solid(STRIPE)

FONT_DEPARTMENT = data_font(color=WHITE)
FONT_DATA = data_font()
FONT_STATUS = data_font(color=AMBER_TEXT)
FONT_OVERTIME = data_font(color=OVERTIME_RED)
FONT_HEADER = Font(size=FONT_SIZE, bold=True, color=WHITE)
