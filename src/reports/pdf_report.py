"""
PDF Report Module
=================

Builds the downloadable churn report for a single prediction. All text
is assembled first into a ReportContent so the layout code only draws.
"""

import io
import re
from pathlib import Path
from typing import List, Tuple, Union
from xml.sax.saxutils import escape

from loguru import logger
from pydantic import BaseModel
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from src.api.schemas import PredictionResult
from src.features.encoder import FeatureEncoder
from src.utils.helpers import format_timestamp

TITLE = "CUSTOMER CHURN PREDICTION"
SUBTITLE = "CONFIDENTIAL REPORT"
BRAND = "CHURN PREDICTOR"
DISCLAIMER = "This prediction is based on statistical models and should be used as a guide only."

RED = "#DC2626"
GREEN = "#16A34A"
GREY = "#646464"

CHURN_RECOMMENDATIONS = [
    "Offer a personalized retention discount or promotion",
    "Schedule a customer service follow-up call",
    "Consider product upgrades or cross-selling opportunities",
    "Review pricing structure for this customer segment",
]

RETAIN_RECOMMENDATIONS = [
    "Continue providing excellent service",
    "Consider loyalty rewards to maintain satisfaction",
    "Explore opportunities for product expansion",
    "Use as reference for successful customer relationships",
]


class ReportContent(BaseModel):
    """Every piece of visible text in a report, plus the banner colours."""

    title: str
    subtitle: str
    customer_line: str
    banner_text: str
    banner_fill: str
    banner_text_color: str
    generated_line: str
    details: List[Tuple[str, str]]
    recommendations: List[Tuple[str, str]]
    brand: str
    disclaimer: str


def report_filename(customer_name: str) -> str:
    """File name for a customer's report, whitespace runs replaced by underscores."""
    stem = re.sub(r"\s+", "_", customer_name)
    return f"{stem}_Churn_Report.pdf"


def build_report_content(result: PredictionResult) -> ReportContent:
    """
    Assemble the report text for a prediction.

    Args:
        result: Completed prediction

    Returns:
        ReportContent for the churn or retention branch
    """
    if result.is_churn:
        banner_text = "HIGH RISK: Customer is likely to churn"
        banner_fill, banner_text_color = "#FECACA", RED
        recommendations = CHURN_RECOMMENDATIONS
    else:
        banner_text = "LOW RISK: Customer is unlikely to churn"
        banner_fill, banner_text_color = "#BBF7D0", GREEN
        recommendations = RETAIN_RECOMMENDATIONS

    return ReportContent(
        title=TITLE,
        subtitle=SUBTITLE,
        customer_line=f"Customer: {result.customer_name}",
        banner_text=banner_text,
        banner_fill=banner_fill,
        banner_text_color=banner_text_color,
        generated_line=f"Report generated: {format_timestamp(result.timestamp)}",
        details=FeatureEncoder().decode(result.form_data),
        recommendations=[(str(i), text) for i, text in enumerate(recommendations, 1)],
        brand=BRAND,
        disclaimer=DISCLAIMER,
    )


def _draw_footer(canvas, doc):
    width, _ = doc.pagesize
    canvas.saveState()
    canvas.setFont("Helvetica", 10)
    canvas.setFillColor(colors.HexColor(GREY))
    canvas.drawCentredString(width / 2, 20 * mm, DISCLAIMER)
    canvas.setFillColor(colors.HexColor("#EF4444"))
    canvas.drawCentredString(width / 2, 5 * mm, BRAND)
    canvas.restoreState()


def _build_story(content: ReportContent) -> list:
    styles = getSampleStyleSheet()

    s_title = ParagraphStyle("ReportTitle", parent=styles["Title"], fontSize=22,
                             leading=26, textColor=colors.HexColor(RED), alignment=TA_CENTER)
    s_sub = ParagraphStyle("ReportSubtitle", parent=styles["Normal"], fontSize=16,
                           leading=20, alignment=TA_CENTER, spaceAfter=10)
    s_customer = ParagraphStyle("Customer", parent=styles["Normal"], fontSize=14, leading=18)
    s_banner = ParagraphStyle("Banner", parent=styles["Normal"], fontSize=14, leading=18,
                              textColor=colors.HexColor(content.banner_text_color),
                              alignment=TA_CENTER)
    s_small = ParagraphStyle("Generated", parent=styles["Normal"], fontSize=10,
                             textColor=colors.HexColor(GREY))
    s_h2 = ParagraphStyle("Section", parent=styles["Heading2"], fontSize=14,
                          spaceBefore=8, spaceAfter=4)

    story = [
        Paragraph(escape(content.title), s_title),
        Paragraph(escape(content.subtitle), s_sub),
        Paragraph(escape(content.customer_line), s_customer),
        Spacer(1, 4 * mm),
    ]

    # Risk banner
    banner = Table([[Paragraph(escape(content.banner_text), s_banner)]],
                   colWidths=[170 * mm], rowHeights=[25 * mm])
    banner.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, -1), colors.HexColor(content.banner_fill)),
        ("ALIGN", (0, 0), (-1, -1), "CENTER"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]))
    story += [banner, Spacer(1, 4 * mm), Paragraph(escape(content.generated_line), s_small)]

    # Customer details
    story.append(Paragraph("Customer Details", s_h2))
    details = Table([["Attribute", "Value"]] + [list(row) for row in content.details],
                    colWidths=[85 * mm, 85 * mm])
    details.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(RED)),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#FAFAFA")]),
        ("TOPPADDING", (0, 0), (-1, -1), 5),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
    ]))
    story.append(details)

    # Recommendations
    story.append(Paragraph("Recommendations", s_h2))
    recommendations = Table([list(row) for row in content.recommendations],
                            colWidths=[10 * mm, 160 * mm])
    recommendations.setStyle(TableStyle([
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]))
    story.append(recommendations)

    return story


def generate_report(result: PredictionResult) -> bytes:
    """
    Render the PDF report for a prediction.

    Args:
        result: Completed prediction

    Returns:
        PDF document bytes
    """
    content = build_report_content(result)

    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        title=f"{content.title} - {result.customer_name}",
        topMargin=15 * mm,
        bottomMargin=30 * mm,
        leftMargin=20 * mm,
        rightMargin=20 * mm,
    )
    doc.build(_build_story(content), onFirstPage=_draw_footer, onLaterPages=_draw_footer)

    logger.info(f"Generated churn report for {result.customer_name}")
    return buf.getvalue()


def save_report(result: PredictionResult, directory: Union[str, Path]) -> Path:
    """
    Write the report to ``directory`` under its standard file name.

    Args:
        result: Completed prediction
        directory: Target directory, created if missing

    Returns:
        Path of the written file
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / report_filename(result.customer_name)
    path.write_bytes(generate_report(result))
    return path
