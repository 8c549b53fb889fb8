# app/pdf_system/text_shaping.py
"""
Persian text for reportlab.

reportlab draws glyphs left-to-right exactly as given, so Persian strings are
reshaped into their joined presentation forms and reordered for display
before drawing. Fonts are registered once per process.
"""
import logging
import re
from dataclasses import dataclass
from typing import List

import arabic_reshaper
from bidi.algorithm import get_display
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from config.pdfconfig import pdf_settings

logger = logging.getLogger(__name__)

_RTL_PATTERN = re.compile("[\u0590-\u08FF\uFB1D-\uFDFF\uFE70-\uFEFF]")


@dataclass(frozen=True)
class FontSet:
    regular: str
    bold: str
    italic: str
    unicode: bool  # False when falling back to the built-in Type 1 fonts

    def for_style(self, style: str) -> str:
        return {"bold": self.bold, "italic": self.italic}.get(style, self.regular)


_font_set = None


def _register(name: str, path) -> bool:
    if name in pdfmetrics.getRegisteredFontNames():
        return True
    if path is None or not path.is_file():
        return False
    try:
        pdfmetrics.registerFont(TTFont(name, str(path)))
        return True
    except Exception as e:
        logger.error(f"❌ Could not register font {path}: {e}")
        return False


def get_font_set() -> FontSet:
    """Configured TTF fonts when present, Helvetica otherwise."""
    global _font_set
    if _font_set is not None:
        return _font_set

    name = pdf_settings.PERSIAN_FONT_NAME
    if _register(name, pdf_settings.resolved_font_path):
        bold = f"{name}-Bold"
        if not _register(bold, pdf_settings.resolved_bold_font_path):
            bold = name
        _font_set = FontSet(regular=name, bold=bold, italic=name, unicode=True)
        logger.info(f"🔤 PDF font: {name}")
    else:
        logger.warning(
            f"⚠️  Font file not found at {pdf_settings.resolved_font_path} - "
            "using Helvetica, Persian text will not render"
        )
        _font_set = FontSet(
            regular="Helvetica", bold="Helvetica-Bold", italic="Helvetica-Oblique", unicode=False
        )
    return _font_set


def reset_font_set() -> None:
    global _font_set
    _font_set = None


def is_rtl(text: str) -> bool:
    return bool(text) and bool(_RTL_PATTERN.search(text))


def shape(text) -> str:
    """Display form of a string: Persian is reshaped and bidi-reordered, other text is untouched."""
    text = "" if text is None else str(text)
    if not is_rtl(text):
        return text
    return get_display(arabic_reshaper.reshape(text))


def wrap(text, font: str, size: float, max_width: float) -> List[str]:
    """
    Break logical text into lines no wider than ``max_width``.
    Returned lines are still in logical order; shape each one before drawing.
    """
    lines: List[str] = []
    for paragraph in ("" if text is None else str(text)).splitlines() or [""]:
        words = paragraph.split()
        current = ""
        for word in words:
            candidate = f"{current} {word}".strip()
            if pdfmetrics.stringWidth(shape(candidate), font, size) <= max_width or not current:
                current = candidate
            else:
                lines.append(current)
                current = word
        lines.append(current)
    return lines
