from __future__ import annotations

from io import BytesIO
from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from mixlog.services.aggregation import ProductSummary

def _widths(ws, cols: int, width: int = 22) -> None:
    for col in range(1, cols + 1):
        ws.column_dimensions[get_column_letter(col)].width = width

def summary_to_xlsx(summary: ProductSummary) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "By Mix Type"
    ws.append(["Mix Type", "Product", "Qty"])
    for mix_type, products in summary.by_mix_type.items():
        for product, qty in products.items():
            ws.append([mix_type, product, qty])
        ws.append([mix_type, "TOTAL", summary.mix_type_totals[mix_type]])
    ws.append([])
    ws.append(["GRAND TOTAL", None, summary.grand_total])
    _widths(ws, 3)

    ws_color = wb.create_sheet("By Color")
    ws_color.append(["Color", "Mix Type", "Product", "Qty"])
    for color, by_mix in summary.by_color.items():
        for mix_type, products in by_mix.items():
            for product, qty in products.items():
                ws_color.append([color, mix_type, product, qty])
        ws_color.append([color, None, "TOTAL", summary.color_totals[color]])
    _widths(ws_color, 4)

    ws_product = wb.create_sheet("By Product")
    ws_product.append(["Product", "Color", "Qty"])
    for product, colors in summary.by_product_type.items():
        for color, qty in colors.items():
            ws_product.append([product, color, qty])
        ws_product.append([product, "TOTAL", summary.product_totals[product]])
    _widths(ws_product, 3)

    bio = BytesIO()
    wb.save(bio)
    return bio.getvalue()
