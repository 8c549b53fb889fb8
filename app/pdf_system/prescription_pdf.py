# app/pdf_system/prescription_pdf.py
"""
Prescription PDF rendering with reportlab.

Layout, top to bottom:
    header (logo, clinic, doctor, license) → patient box →
    two columns (clinical history | vitals, complaint, exam, medicines, instructions) →
    signature, with a footer on every page.

Positions are tracked top-down (`y` grows down the page) and converted to
reportlab's bottom-up coordinates only when drawing.
"""
import logging
import math
import re
from io import BytesIO
from pathlib import Path
from typing import List, Tuple, Union
from urllib.parse import quote

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape, legal, letter
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from app.helpers.calculations import calculate_bmi, get_bmi_category
from app.helpers.time import today
from app.pdf_system.pdf_config import PDFConfig, build_pdf_config
from app.pdf_system.schemas import PDFPrescription
from app.pdf_system.text_shaping import get_font_set, is_rtl, shape, wrap
from config.pdfconfig import pdf_settings

logger = logging.getLogger(__name__)

PAGE_SIZES = {"a4": A4, "letter": letter, "legal": legal}
NOT_AVAILABLE = "N/A"

# key, label, field, unit
VITAL_SIGNS = [
    ("pulse", "Pulse Rate", "pulse_rate", "bpm"),
    ("bp", "Blood Pressure", "blood_pressure", ""),
    ("heart", "Heart Rate", "heart_rate", "bpm"),
    ("temp", "Temperature", "temperature", "°C"),
    ("respiratory", "Respiratory Rate", "respiratory_rate", "/min"),
    ("oxygen", "Oxygen Saturation", "oxygen_saturation", "%"),
]


def _value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(str(item) for item in value if str(item).strip())
    return str(value).strip()


def _or_na(value) -> str:
    return _value(value) or NOT_AVAILABLE


def _items(value) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        value = [value]
    return [str(item).strip() for item in value if str(item).strip()]


class FooterCanvas(canvas.Canvas):
    """
    Canvas that holds every page back until save() so the footer can print
    "Page n of N" once the total is known.
    """

    def __init__(self, *args, footer=None, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states = []
        self._footer = footer

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        total = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            if self._footer is not None:
                self._footer(self, self.getPageNumber(), total)
            canvas.Canvas.showPage(self)
        canvas.Canvas.save(self)


class PrescriptionPDFRenderer:
    def __init__(self, prescription: PDFPrescription, config: PDFConfig):
        self.rx = prescription
        self.cfg = config
        self.fonts = get_font_set()
        self.sizes = config.typography.font_sizes
        self.margins = config.page.margins

        pagesize = PAGE_SIZES[config.page.format]
        if config.page.orientation == "landscape":
            pagesize = landscape(pagesize)
        self.width, self.height = pagesize

        self.buffer = BytesIO()
        self.c = FooterCanvas(
            self.buffer,
            pagesize=pagesize,
            footer=self._draw_footer if config.footer.show else None,
        )
        self.c.setTitle(f"Prescription - {_value(prescription.patient_name) or 'patient'}")
        self.c.setAuthor(_value(prescription.doctor_name))
        self.page_index = 0

    # ==================== DRAWING PRIMITIVES ====================

    def _color(self, rgb: Tuple[int, int, int]):
        r, g, b = rgb
        return colors.Color(r / 255.0, g / 255.0, b / 255.0)

    def _font(self, style: str) -> str:
        return self.fonts.for_style(style)

    def _text_width(self, text: str, style: str, size: float) -> float:
        return pdfmetrics.stringWidth(shape(text), self._font(style), size)

    def _text(self, x, y, text, style="normal", size=None, color=None, align="left"):
        size = size or self.sizes.body
        self.c.setFont(self._font(style), size)
        self.c.setFillColor(self._color(color or self.cfg.colors.text_dark))
        shaped = shape(text)
        baseline = self.height - y
        if align == "center":
            self.c.drawCentredString(x, baseline, shaped)
        elif align == "right":
            self.c.drawRightString(x, baseline, shaped)
        else:
            self.c.drawString(x, baseline, shaped)

    def _text_in(self, x, y, width, text, style="normal", size=None, color=None):
        """Left-aligned in the box for LTR text, right-aligned for Persian."""
        if is_rtl(text):
            self._text(x + width, y, text, style, size, color, align="right")
        else:
            self._text(x, y, text, style, size, color)

    def _fit(self, text: str, style: str, size: float, max_width: float) -> str:
        if max_width <= 0 or self._text_width(text, style, size) <= max_width:
            return text
        while text and self._text_width(text + "…", style, size) > max_width:
            text = text[:-1]
        return text + "…"

    def _rect(self, x, y, w, h, fill=None, stroke=None, radius=0, line_width=0.5):
        self.c.setLineWidth(line_width)
        if fill is not None:
            self.c.setFillColor(self._color(fill))
        if stroke is not None:
            self.c.setStrokeColor(self._color(stroke))
        bottom = self.height - y - h
        if radius:
            self.c.roundRect(x, bottom, w, h, radius, stroke=int(stroke is not None), fill=int(fill is not None))
        else:
            self.c.rect(x, bottom, w, h, stroke=int(stroke is not None), fill=int(fill is not None))

    def _line(self, x1, y1, x2, y2, color=None, width=0.5):
        self.c.setStrokeColor(self._color(color or self.cfg.colors.border))
        self.c.setLineWidth(width)
        self.c.line(x1, self.height - y1, x2, self.height - y2)

    # ==================== PAGE FLOW ====================

    def _new_page(self) -> float:
        self.c.showPage()
        self.page_index += 1
        self._draw_debug()
        return self.margins.top

    def _fits(self, y: float, needed: float) -> bool:
        page_break = self.cfg.page_break
        return not page_break.enabled or y + needed <= self.height - page_break.min_bottom_margin

    def check_page_break(self, y: float, needed: float) -> float:
        """Start a new page when ``needed`` points below ``y`` would run into the bottom margin."""
        if not self._fits(y, needed):
            if self.cfg.debug.log_positions:
                logger.debug(f"📄 Page break at y={y:.1f} (needed {needed:.1f})")
            return self._new_page()
        return y

    def _draw_debug(self):
        debug = self.cfg.debug
        if debug.show_grid:
            self.c.setStrokeColor(colors.Color(0.9, 0.9, 0.9))
            self.c.setLineWidth(0.25)
            for x in range(0, int(self.width), 50):
                self.c.line(x, 0, x, self.height)
            for y in range(0, int(self.height), 50):
                self.c.line(0, y, self.width, y)
        if debug.show_borders:
            m = self.margins
            self.c.setStrokeColor(colors.red)
            self.c.setLineWidth(0.5)
            self.c.rect(m.left, m.bottom, self.width - m.left - m.right, self.height - m.top - m.bottom)

    # ==================== HEADER & PATIENT ====================

    def _draw_logo(self, y: float) -> float:
        logo = self.cfg.logo
        path = Path(logo.path) if logo.path else pdf_settings.resolved_logo_path
        if not logo.enabled or path is None or not path.is_file():
            return y

        if logo.position == "left":
            x = self.margins.left
        elif logo.position == "right":
            x = self.width - self.margins.right - logo.width
        else:
            x = (self.width - logo.width) / 2
        try:
            self.c.drawImage(
                ImageReader(str(path)), x, self.height - y - logo.height,
                width=logo.width, height=logo.height, preserveAspectRatio=True, mask="auto",
            )
        except Exception as e:
            logger.warning(f"⚠️  Could not draw logo {path}: {e}")
            return y
        return y + logo.height + logo.margin_bottom

    def _draw_header(self, y: float) -> float:
        colors_cfg = self.cfg.colors
        spacing = self.cfg.layout.section_spacing
        center = self.width / 2

        y = self._draw_logo(y)

        clinic = _value(self.rx.clinic_name)
        if clinic:
            y = self.check_page_break(y, 50)
            self._text(center, y, clinic, "bold", self.sizes.title, colors_cfg.primary, "center")
            address = _value(self.rx.clinic_address)
            if address:
                y += 14
                self._text(center, y, address, "normal", self.sizes.small, colors_cfg.muted, "center")
            y += spacing

        y = self.check_page_break(y, 40)
        self._text(center, y, _or_na(self.rx.doctor_name), "bold", self.sizes.subtitle, colors_cfg.text_dark, "center")

        license_number = _value(self.rx.doctor_license_number)
        if license_number:
            y += 18
            self._text(center, y, f"License: {license_number}", "normal", self.sizes.small, colors_cfg.text_dark, "center")

        y += spacing
        self._line(self.margins.left, y, self.width - self.margins.right, y, colors_cfg.border, 1)
        return y

    def _bmi_text(self) -> str:
        bmi = _value(self.rx.bmi) or calculate_bmi(self.rx.weight, self.rx.height)
        if not bmi:
            return NOT_AVAILABLE
        category = get_bmi_category(bmi)["category"]
        return bmi if category == "Invalid" else f"{bmi} ({category})"

    def _patient_rows(self) -> List[Tuple[str, str]]:
        rx = self.rx
        prescription_date = rx.prescription_date or today()
        fields = {
            "name": ("Name", _or_na(rx.patient_name)),
            "age": ("Age", f"{_value(rx.patient_age)} years" if _value(rx.patient_age) else NOT_AVAILABLE),
            "gender": ("Gender", _or_na(rx.patient_gender)),
            "date": ("Date", prescription_date.strftime("%Y/%m/%d")),
            "weight": ("Weight", f"{_value(rx.weight)} kg" if _value(rx.weight) else NOT_AVAILABLE),
            "height": ("Height", f"{_value(rx.height)} cm" if _value(rx.height) else NOT_AVAILABLE),
            "bmi": ("BMI", self._bmi_text()),
            "phone": ("Phone", _or_na(rx.patient_phone)),
            "address": ("Address", _or_na(rx.patient_address)),
        }
        return [fields[key] for key in self.cfg.patient_info.include if key in fields]

    def _draw_patient_info(self, y: float) -> float:
        info = self.cfg.patient_info
        colors_cfg = self.cfg.colors
        block = self.cfg.layout.block_spacing
        rows = self._patient_rows()

        x = self.margins.left
        box_w = self.width - self.margins.left - self.margins.right
        row_count = math.ceil(len(rows) / info.columns) if rows else 0
        box_h = max(70, 35 + row_count * 16)

        y += block
        y = self.check_page_break(y, box_h + block)

        if info.box_style == "shadow":
            self._rect(x + 2, y + 2, box_w, box_h, fill=(220, 220, 220))
            self._rect(x, y, box_w, box_h, fill=colors_cfg.bg_light, stroke=colors_cfg.accent)
        elif info.box_style == "flat":
            self._rect(x, y, box_w, box_h, fill=colors_cfg.bg_light, stroke=colors_cfg.accent)
        else:
            self._rect(x, y, box_w, box_h, fill=colors_cfg.bg_light, stroke=colors_cfg.accent, radius=info.border_radius)

        self._text(x + 20, y + 15, "Patient Information", "bold", self.sizes.heading, colors_cfg.primary)

        col_w = box_w / info.columns
        label_w = min(60, col_w / 2) if info.show_labels else 0
        for index, (label, value) in enumerate(rows):
            cx = x + 10 + (index % info.columns) * col_w
            cy = y + 35 + (index // info.columns) * 16
            if info.show_labels:
                self._text(cx, cy, f"{label}:", info.label_style, self.sizes.small, colors_cfg.primary)
            value = self._fit(value, "normal", self.sizes.small, col_w - label_w - 12)
            self._text(cx + label_w, cy, value, "normal", self.sizes.small, colors_cfg.text_dark)

        return y + box_h + block

    # ==================== LEFT COLUMN: CLINICAL HISTORY ====================

    def _history_sections(self) -> List[Tuple[str, Union[List[str], str]]]:
        enabled = self.cfg.clinical_history.sections
        rx = self.rx
        candidates = [
            (enabled.lab_exams, "Lab Exams", _items(rx.medical_exams)),
            (enabled.allergies, "Allergies", _items(rx.allergies)),
            (enabled.current_meds, "Current Medications", _items(rx.current_medications)),
            (enabled.past_medical_history, "Past Medical History", _value(rx.past_medical_history)),
            (enabled.family_history, "Family History", _value(rx.family_history)),
            (enabled.social_history, "Social History", _value(rx.social_history)),
        ]
        return [(title, content) for show, title, content in candidates if show and content]

    def _history_lines(self, content, width: float) -> List[str]:
        if isinstance(content, list):
            return [
                self._fit(f"{index}. {item}", "normal", self.sizes.small, width - 20)
                for index, item in enumerate(content, 1)
            ]
        return wrap(content, self._font("normal"), self.sizes.small, width - 20)

    def _history_box_height(self, lines: List[str], as_list: bool) -> float:
        step = 15 if as_list else 12
        return max(self.cfg.clinical_history.box_height, len(lines) * step + 16)

    def _draw_history_box(
        self, x: float, top: float, width: float, lines: List[str], step: float, min_height: float
    ) -> float:
        history = self.cfg.clinical_history
        colors_cfg = self.cfg.colors
        box_h = max(min_height, len(lines) * step + 16)
        radius = 3 if history.box_style == "rounded" else 0
        self._rect(x, top - 5, width, box_h, fill=colors_cfg.bg_light, stroke=colors_cfg.border, radius=radius)
        for index, line in enumerate(lines):
            self._text_in(x + 10, top + 10 + index * step, width - 20, line, "normal", self.sizes.small)
        return top + box_h

    def _draw_history_section(self, title: str, content, y: float, x: float, width: float) -> float:
        """Title and boxed lines; a box that reaches the bottom margin is closed and continued on the next page."""
        block = self.cfg.layout.block_spacing
        as_list = isinstance(content, list)
        lines = self._history_lines(content, width)
        step = 15 if as_list else 12
        min_height = self.cfg.clinical_history.box_height

        self._text(x, y, title, "bold", self.sizes.subheading, self.cfg.colors.primary)
        top = y + block
        chunk: List[str] = []
        for line in lines:
            if chunk and not self._fits(top + 10 + len(chunk) * step, step):
                self._draw_history_box(x, top, width, chunk, step, min_height)
                min_height = 0
                top, chunk = self._new_page() + 5, []
            chunk.append(line)

        return self._draw_history_box(x, top, width, chunk, step, min_height) + block

    def _history_height(self, title: str, content, width: float) -> float:
        lines = self._history_lines(content, width)
        return self.cfg.layout.block_spacing * 2 + self._history_box_height(lines, isinstance(content, list))

    # ==================== RIGHT COLUMN ====================

    def _section_header(self, title: str, x: float, y: float) -> float:
        colors_cfg = self.cfg.colors
        self._rect(x, y - 14, 5, 20, fill=colors_cfg.accent)
        self._text(x + 15, y, title, "bold", self.sizes.heading, colors_cfg.primary)
        return y + 25

    def _text_block(self, text: str, x: float, y: float, width: float) -> float:
        size = self.sizes.body
        step = size * self.cfg.typography.line_heights.tight
        for line in wrap(text, self._font("normal"), size, width - 20):
            y = self.check_page_break(y, step)
            self._text_in(x + 10, y, width - 20, line, "normal", size)
            y += step
        return y + 20 - step

    def _present_vitals(self) -> List[Tuple[str, str]]:
        vitals = self.cfg.vital_signs
        present = []
        for key, label, field, unit in VITAL_SIGNS:
            value = _value(getattr(self.rx, field))
            if key not in vitals.include or not value:
                continue
            if vitals.show_units and unit and not value.endswith(unit):
                value = f"{value} {unit}"
            present.append((label, value))
        return present

    def _draw_vitals(self, vitals: List[Tuple[str, str]], x: float, y: float, width: float) -> float:
        cfg = self.cfg.vital_signs
        colors_cfg = self.cfg.colors
        cell = cfg.cell
        cell_w = min(cell.width, (width - 10 - cell.gap * (cfg.grid_columns - 1)) / cfg.grid_columns)

        for index, (label, value) in enumerate(vitals):
            cx = x + 10 + (index % cfg.grid_columns) * (cell_w + cell.gap)
            cy = y + (index // cfg.grid_columns) * (cell.height + cell.gap)
            self._rect(cx, cy, cell_w, cell.height, fill=colors_cfg.table_striped,
                       stroke=colors_cfg.border, radius=cell.border_radius)
            self._text(cx + 5, cy + 12, self._fit(label, "bold", 9, cell_w - 10), "bold", 9, colors_cfg.primary)
            self._text(cx + cell_w / 2, cy + 27, self._fit(value, "normal", 10, cell_w - 10), "normal", 10,
                       colors_cfg.text_dark, "center")

        rows = math.ceil(len(vitals) / cfg.grid_columns)
        return y + rows * (cell.height + cell.gap) + 10

    def _vitals_height(self, count: int) -> float:
        cfg = self.cfg.vital_signs
        return 25 + math.ceil(count / cfg.grid_columns) * (cfg.cell.height + cfg.cell.gap) + 10

    def _column_widths(self, width: float) -> List[float]:
        widths = list(self.cfg.medications.table.column_widths)
        available = width - 20
        total = sum(widths)
        if total > available and total > 0:
            widths = [w * available / total for w in widths]
        return widths

    def _draw_table_header(self, x: float, y: float, width: float, widths: List[float]) -> float:
        colors_cfg = self.cfg.colors
        xp = x + 10
        for index, (header, col_w) in enumerate(zip(self.cfg.medications.table.headers, widths)):
            pad = 2 if index == 0 else 8
            header = self._fit(header, "bold", self.sizes.small, col_w - 2 * pad)
            self._text(xp + pad, y, header, "bold", self.sizes.small, colors_cfg.primary)
            xp += col_w
        y += 5
        self._line(x + 10, y, x + width - 10, y, colors_cfg.border, 0.5)
        return y + 12

    def _medicine_details(self, med) -> str:
        parts = [
            f"{label}: {_value(value)}"
            for label, value in (("Form", med.form), ("Route", med.route), ("Timing", med.timing), ("Notes", med.notes))
            if _value(value)
        ]
        if med.with_food:
            parts.append("With food")
        return " | ".join(parts)

    def _draw_medications(self, x: float, y: float, width: float) -> float:
        table = self.cfg.medications.table
        colors_cfg = self.cfg.colors
        small = self.sizes.small
        regular = self._font("normal")

        y = self._section_header("Prescribed Medications", x, y)
        medicines = self.rx.medicines
        if not medicines:
            self._text(x + 12, y, "No medications prescribed.", "italic", self.sizes.body, colors_cfg.muted)
            return y + 20

        widths = self._column_widths(width)
        y = self._draw_table_header(x, y, width, widths)

        for index, med in enumerate(medicines):
            cells = [
                f"{index + 1}." if table.show_row_numbers else "",
                _or_na(med.medicine),
                _or_na(med.dosage),
                _or_na(med.frequency),
                _or_na(med.duration),
                _or_na(med.instructions),
            ]
            cell_lines = [
                wrap(cell, regular, small, col_w - (4 if col == 0 else 16))[:2]
                for col, (cell, col_w) in enumerate(zip(cells, widths))
            ]
            row_h = max(table.row_height, max((len(lines) for lines in cell_lines), default=1) * 11 + 9)

            details = self._medicine_details(med) if table.show_additional_details else ""
            detail_lines = wrap(details, self._font("italic"), self.sizes.tiny, width - 55) if details else []

            page_before = self.page_index
            y = self.check_page_break(y, row_h + len(detail_lines) * 10 + 5)
            if self.page_index != page_before and self.cfg.page_break.repeat_headers:
                y = self._draw_table_header(x, y, width, widths)

            if table.striped_rows and index % 2 == 0:
                self._rect(x + 10, y - 12, width - 20, row_h, fill=colors_cfg.table_striped)

            xp = x + 10
            for col, (lines, col_w) in enumerate(zip(cell_lines, widths)):
                pad = 2 if col == 0 else 8
                for line_no, line in enumerate(lines):
                    self._text_in(xp + pad, y + line_no * 11, col_w - 2 * pad, line, "normal", small)
                xp += col_w
            y += row_h

            for line in detail_lines:
                self._text(x + 45, y - 4, line, "italic", self.sizes.tiny, colors_cfg.muted)
                y += 10
            y += 5

        return y

    def _draw_instructions(self, x: float, y: float, width: float) -> float:
        sections = self.cfg.instructions.sections
        indent = self.cfg.instructions.indent
        colors_cfg = self.cfg.colors

        y = self._section_header("Additional Instructions", x, y)
        for enabled, title, text in (
            (sections.general, "General Instructions", _value(self.rx.instructions)),
            (sections.follow_up, "Follow-up", _value(self.rx.follow_up)),
            (sections.restrictions, "Restrictions", _value(self.rx.restrictions)),
        ):
            if not enabled or not text:
                continue
            y = self.check_page_break(y, 40)
            self._text(x + 10, y, title, "bold", self.sizes.subheading, colors_cfg.primary)
            y = self._text_block(
                text, x + indent - 10, y + self.sizes.subheading + self.cfg.layout.line_spacing, width - indent + 10
            )
        return y

    def _has_instructions(self) -> bool:
        return any(_value(v) for v in (self.rx.instructions, self.rx.follow_up, self.rx.restrictions))

    def _draw_right_column(self, x: float, y: float, width: float) -> float:
        rx = self.rx

        if self.cfg.vital_signs.show:
            vitals = self._present_vitals()
            if vitals:
                y = self.check_page_break(y, self._vitals_height(len(vitals)))
                y = self._section_header("Vital Signs", x, y)
                y = self._draw_vitals(vitals, x, y, width)

        for title, text in (
            ("Chief Complaint", _value(rx.chief_complaint)),
            ("Physical Examination", _value(rx.physical_examination)),
            ("Diagnosis", _value(rx.diagnosis)),
            ("Differential Diagnosis", _value(rx.differential_diagnosis)),
        ):
            if text:
                y = self.check_page_break(y, 50)
                y = self._section_header(title, x, y)
                y = self._text_block(text, x, y, width)

        if self.cfg.medications.show:
            y = self.check_page_break(y, 100)
            y = self._draw_medications(x, y, width)

        if self.cfg.instructions.show and self._has_instructions():
            y = self.check_page_break(y, 100)
            y = self._draw_instructions(x, y + 10, width)

        return y

    def _draw_columns(self, y: float) -> float:
        layout = self.cfg.layout
        m = self.margins
        start_page = self.page_index
        y += layout.block_spacing

        if not layout.two_column:
            y = self._draw_right_column(m.left, y, self.width - m.left - m.right)
            if self.cfg.clinical_history.show:
                for title, content in self._history_sections():
                    y = self.check_page_break(y, self._history_height(title, content, self.width - m.left - m.right))
                    y = self._draw_history_section(title, content, y, m.left, self.width - m.left - m.right)
            return y

        split_x = self.width * layout.left_column_width
        left_w = split_x - m.left - layout.column_gap / 2
        right_x = split_x + layout.column_gap
        right_w = self.width - m.right - right_x
        self._line(split_x, y - 10, split_x, self.height - m.bottom, self.cfg.colors.border, 0.5)

        # the left column only runs on the first page; what does not fit follows the right column
        y_left = y
        deferred = []
        if self.cfg.clinical_history.show:
            for title, content in self._history_sections():
                needed = self._history_height(title, content, left_w)
                if deferred or y_left + needed > self.height - self.cfg.page_break.min_bottom_margin:
                    deferred.append((title, content))
                    continue
                y_left = self._draw_history_section(title, content, y_left, m.left, left_w)

        y_right = self._draw_right_column(right_x, y, right_w)
        y = max(y_left, y_right) if self.page_index == start_page else y_right

        full_width = self.width - m.left - m.right
        for title, content in deferred:
            y = self.check_page_break(y, self._history_height(title, content, full_width))
            y = self._draw_history_section(title, content, y, m.left, full_width)
        return y

    # ==================== SIGNATURE & FOOTER ====================

    def _draw_signature(self, y: float) -> None:
        signature = self.cfg.signature
        colors_cfg = self.cfg.colors
        y = self.check_page_break(y + 20, 60)

        length = signature.line_length
        if signature.position == "left":
            x = self.margins.left
        elif signature.position == "center":
            x = (self.width - length) / 2
        else:
            x = self.width - self.margins.right - length

        self._line(x, y, x + length, y, colors_cfg.text_dark, signature.line_width)
        self._text(x + length / 2, y + 20, _or_na(self.rx.doctor_name), "bold", self.sizes.subheading,
                   colors_cfg.primary, "center")
        if signature.include_title:
            self._text(x + length / 2, y + 35, "Medical Practitioner", "normal", self.sizes.body,
                       colors_cfg.text_dark, "center")

    def _draw_footer(self, c: canvas.Canvas, page: int, total: int) -> None:
        footer = self.cfg.footer
        c.setFont(self._font("normal"), self.sizes.tiny)
        c.setFillColor(self._color(self.cfg.colors.muted))
        if footer.show_prescription_id:
            c.drawString(self.margins.left, footer.height, f"Prescription ID: {_or_na(self.rx.id)}")
        if footer.show_page_numbers:
            c.drawRightString(self.width - self.margins.right, footer.height, f"Page {page} of {total}")
        if footer.show_digital_note:
            c.drawCentredString(self.width / 2, footer.height - 15, "This is a digitally generated prescription.")

    # ==================== ENTRY ====================

    def render(self) -> bytes:
        self._draw_debug()
        y = self._draw_header(self.margins.top)
        if self.cfg.patient_info.show:
            y = self._draw_patient_info(y)
        y = self._draw_columns(y)
        if self.cfg.signature.show:
            self._draw_signature(y)

        self.c.showPage()
        self.c.save()
        return self.buffer.getvalue()


def generate_prescription_pdf(prescription, config: Union[PDFConfig, dict, None] = None) -> bytes:
    """
    Render a prescription (ORM row, dict, or PDFPrescription) to PDF bytes.
    ``config`` holds partial overrides; invalid values raise pydantic.ValidationError.
    """
    if not isinstance(prescription, PDFPrescription):
        prescription = PDFPrescription.model_validate(prescription)
    pdf_config = build_pdf_config(config)

    pdf_bytes = PrescriptionPDFRenderer(prescription, pdf_config).render()
    logger.info(f"📄 Rendered PDF for prescription {prescription.id or '(unsaved)'} ({len(pdf_bytes)} bytes)")
    return pdf_bytes


def generate_file_name(prescription) -> str:
    """prescription-<patient-name>-<YYYY-MM-DD>.pdf"""
    name = re.sub(r"\s+", "-", _value(getattr(prescription, "patient_name", None)).lower()) or "unknown"
    prescription_date = getattr(prescription, "prescription_date", None) or today()
    return f"prescription-{name}-{prescription_date:%Y-%m-%d}.pdf"


def content_disposition(file_name: str) -> str:
    """Attachment header with an ASCII fallback and the UTF-8 name for Persian patient names."""
    ascii_name = file_name.encode("ascii", "ignore").decode() or "prescription.pdf"
    ascii_name = re.sub(r"-{2,}", "-", ascii_name)
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(file_name)}"
