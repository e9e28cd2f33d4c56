#!/usr/bin/env python3
# results_export.py - save a finished quiz report as CSV or as a PDF results sheet
#
# Required: reportlab

import csv
import logging
from datetime import datetime
from typing import List, Optional

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.pdfgen import canvas

from quiz_engine import QuizReport

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "QUIZ RESULTS"
MARGIN = 2.0 * cm
LINE_HEIGHT = 0.6 * cm


def write_results_csv(report: QuizReport, path, taken_at: Optional[datetime] = None):
    taken_at = taken_at or datetime.now()
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["Date", "Score", "Total", "Percent"])
        w.writerow([taken_at.strftime("%Y-%m-%d %H:%M"), report.final_score,
                    report.total_questions, f"{report.percent}%"])
        w.writerow([]); w.writerow(["#", "Missed question", "Correct answer"])
        for i, m in enumerate(report.missed, start=1):
            w.writerow([i, m.question, m.correct_answer])
    logger.info("Saved CSV results to %s", path)


def _wrap(c: canvas.Canvas, text: str, max_width: float, font_name: str, font_size: float) -> List[str]:
    """Greedy word wrap by rendered width; overlong words get a line of their own."""
    lines = []
    for raw in text.splitlines() or [""]:
        cur = ""
        for w in raw.split():
            t = (cur + " " + w).strip()
            if c.stringWidth(t, font_name, font_size) <= max_width:
                cur = t
            else:
                if cur: lines.append(cur)
                cur = w
        lines.append(cur)
    return lines


def _draw_border(c: canvas.Canvas):
    W, H = A4
    c.setLineWidth(2); c.rect(1*cm, 1*cm, W-2*cm, H-2*cm)


def _new_page(c: canvas.Canvas) -> float:
    c.showPage()
    _draw_border(c)
    return A4[1] - MARGIN


def generate_results_pdf(
    report: QuizReport,
    path,
    taken_at: Optional[datetime] = None,
    *,
    title: str = DEFAULT_TITLE,
):
    taken_at = taken_at or datetime.now()
    c = canvas.Canvas(str(path), pagesize=A4)
    W, H = A4
    text_w = W - 2 * MARGIN
    _draw_border(c)

    c.setFont("Helvetica-Bold", 24)
    c.drawCentredString(W/2, H-3.5*cm, title)

    c.setFont("Helvetica", 13)
    c.drawCentredString(W/2, H-4.7*cm,
                        f"Score: {report.final_score}/{report.total_questions} ({report.percent}%)")
    c.setFont("Helvetica-Oblique", 11)
    c.drawCentredString(W/2, H-5.5*cm, f"Date: {taken_at.strftime('%Y-%m-%d %H:%M')}")

    y = H - 7.0*cm
    if not report.missed:
        c.setFont("Helvetica", 12)
        c.drawCentredString(W/2, y, "Perfect! You did not miss any questions.")
        c.showPage(); c.save()
        logger.info("Saved PDF results to %s", path)
        return

    c.setFont("Helvetica-Bold", 13)
    c.drawString(MARGIN, y, "Missed questions:")
    y -= 1.0*cm

    page_lines = int((H - 2 * MARGIN) / LINE_HEIGHT) + 1
    for i, m in enumerate(report.missed, start=1):
        block = [("Helvetica-Bold", 0, ln) for ln in _wrap(c, f"{i}. {m.question}", text_w, "Helvetica-Bold", 11)]
        block += [("Helvetica", 0.6*cm, ln) for ln in _wrap(c, f"Correct: {m.correct_answer}", text_w - 0.6*cm, "Helvetica", 11)]
        # keep an entry on one page unless it is taller than a page
        if y - LINE_HEIGHT * (len(block) - 1) < MARGIN and len(block) <= page_lines:
            y = _new_page(c)
        for font_name, indent, ln in block:
            if y < MARGIN:
                y = _new_page(c)
            c.setFont(font_name, 11)
            c.drawString(MARGIN + indent, y, ln)
            y -= LINE_HEIGHT
        y -= 0.3*cm

    c.showPage(); c.save()
    logger.info("Saved PDF results to %s", path)
