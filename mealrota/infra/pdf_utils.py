import io
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from mealrota.domain.PlanningState import PlanningState


def generate_pdf_for_week(state: PlanningState, week_index: int) -> bytes:
    """Printable table for one rotation week: Day / Breakfast / Lunch / Dinner / Cook."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=landscape(A4),
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    start = state.start_date or "unscheduled"
    elements = [
        Paragraph(f"Meal Rotation – Week {week_index + 1} (rotation start {start})", styles["Title"]),
        Spacer(1, 16),
    ]

    show_all = not state.dinners_only
    header = ["Day", "Breakfast", "Lunch", "Dinner", "Cook"] if show_all else ["Day", "Dinner", "Cook"]
    data = [header]
    for cell in state.grid[week_index]:
        day = f"{cell.label} ({cell.date.strftime('%d.%m.%Y')})" if cell.date else cell.label
        row = [day]
        if show_all:
            row += [cell.dish_name("breakfast") or "-", cell.dish_name("lunch") or "-"]
        row += [cell.dish_name("dinner") or "-", state.cook_name(cell.cook)]
        data.append(row)

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#4CAF50")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (0,0), (-1,-1), "CENTER"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))

    elements.append(table)
    doc.build(elements)
    return buf.getvalue()
