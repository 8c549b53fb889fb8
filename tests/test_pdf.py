# tests/test_pdf.py
import re
from datetime import date
from io import BytesIO

import pytest
from pydantic import ValidationError
from reportlab.lib.pagesizes import A4

from app.helpers import messages
from app.helpers.time import today
from app.pdf_system.pdf_config import PDFConfig, build_pdf_config, deep_merge
from app.pdf_system.prescription_pdf import (
    FooterCanvas,
    PrescriptionPDFRenderer,
    content_disposition,
    generate_file_name,
    generate_prescription_pdf,
)
from app.pdf_system.schemas import PDFPrescription
from app.pdf_system.text_shaping import get_font_set, is_rtl, shape, wrap
from app.system_models.medicine_model.medicine_schemas import MedicineIn


def page_count(pdf_bytes: bytes) -> int:
    return len(re.findall(rb"/Type\s*/Page(?![s\w])", pdf_bytes))


@pytest.fixture
def pdf_prescription(sample_prescription):
    body = dict(sample_prescription, id="rx-123", prescriptionDate="2024-03-05")
    return PDFPrescription.model_validate(body)


def _medicine(index: int) -> dict:
    return {
        "medicine": f"Medicine {index}",
        "dosage": "250 mg",
        "form": "tablet",
        "frequency": "هر ۸ ساعت",
        "duration": "۷ روز",
        "route": "oral",
        "timing": "after_meal",
        "instructions": "بعد از غذا با یک لیوان آب میل شود",
        "notes": "در صورت بروز حساسیت مصرف را قطع کنید",
    }


class TestPDFConfig:
    def test_defaults(self):
        config = build_pdf_config()

        assert config.page.format == "a4"
        assert config.page.margins.top == 40
        assert config.vital_signs.grid_columns == 3

    def test_camel_case_overrides_are_deep_merged(self):
        config = build_pdf_config(
            {"page": {"margins": {"top": 60}}, "vitalSigns": {"gridColumns": 2}, "footer": {"showDigitalNote": False}}
        )

        assert config.page.margins.top == 60
        assert config.page.margins.left == 40
        assert config.vital_signs.grid_columns == 2
        assert config.vital_signs.show is True
        assert config.footer.show_digital_note is False

    def test_lists_are_replaced(self):
        merged = deep_merge({"a": {"items": [1, 2, 3], "keep": True}}, {"a": {"items": [9]}})
        assert merged == {"a": {"items": [9], "keep": True}}

    def test_invalid_values_raise(self):
        with pytest.raises(ValidationError):
            build_pdf_config({"page": {"format": "a3"}})

    def test_config_instance_is_used_as_is(self):
        config = PDFConfig()
        assert build_pdf_config(config) is config


class TestTextShaping:
    def test_direction_detection(self):
        assert is_rtl("سلام")
        assert is_rtl("Dose: ۵۰۰ میلی‌گرم")
        assert not is_rtl("Amoxicillin 500 mg")
        assert not is_rtl("")

    def test_latin_text_is_untouched(self):
        assert shape("Amoxicillin 500 mg") == "Amoxicillin 500 mg"
        assert shape(None) == ""

    def test_persian_text_is_reshaped(self):
        shaped = shape("سلام")
        assert shaped != "سلام"
        assert len(shaped) > 0

    def test_wrap_respects_width(self):
        fonts = get_font_set()
        lines = wrap("word " * 60, fonts.regular, 10, 120)

        assert len(lines) > 1
        assert all(line for line in lines)

    def test_wrap_keeps_paragraphs(self):
        fonts = get_font_set()
        assert wrap("first\nsecond", fonts.regular, 10, 500) == ["first", "second"]


class TestGeneratePDF:
    def test_renders_a_complete_prescription(self, pdf_prescription):
        pdf = generate_prescription_pdf(pdf_prescription)

        assert pdf.startswith(b"%PDF")
        assert page_count(pdf) >= 1

    def test_empty_prescription_does_not_raise(self):
        pdf = generate_prescription_pdf({})
        assert pdf.startswith(b"%PDF")

    def test_blank_and_missing_fields_do_not_raise(self):
        pdf = generate_prescription_pdf(
            {
                "patientName": "",
                "allergies": None,
                "medicines": [{"medicine": None, "dosage": ""}, {}],
                "vitalSigns": None,
            }
        )
        assert pdf.startswith(b"%PDF")

    def test_long_medicine_list_spans_pages(self, pdf_prescription):
        pdf_prescription.medicines = [MedicineIn.model_validate(_medicine(i)) for i in range(40)]
        pdf = generate_prescription_pdf(pdf_prescription)

        assert page_count(pdf) >= 2

    def test_long_history_is_deferred_not_lost(self, pdf_prescription):
        pdf_prescription.past_medical_history = "سابقه بیماری قلبی و فشار خون بالا. " * 80
        pdf_prescription.family_history = "سابقه دیابت در خانواده. " * 40

        pdf = generate_prescription_pdf(pdf_prescription)
        assert page_count(pdf) >= 2

    def test_history_longer_than_a_page_is_continued(self, pdf_prescription, monkeypatch):
        drawn = []
        original = PrescriptionPDFRenderer._text_in

        def recording(self, x, y, width, text, *args, **kwargs):
            if text.startswith("chronic"):
                drawn.append(y)
            return original(self, x, y, width, text, *args, **kwargs)

        monkeypatch.setattr(PrescriptionPDFRenderer, "_text_in", recording)
        pdf_prescription.past_medical_history = "chronic " * 3000
        pdf = generate_prescription_pdf(pdf_prescription)

        bottom = A4[1] - PDFConfig().page_break.min_bottom_margin
        assert page_count(pdf) >= 3
        assert len(drawn) > (bottom / 12)
        assert max(drawn) <= bottom

    @pytest.mark.parametrize(
        "overrides",
        [
            {"page": {"orientation": "landscape", "format": "letter"}},
            {"layout": {"twoColumn": False}},
            {"patientInfo": {"boxStyle": "shadow", "columns": 3, "include": ["name", "address"]}},
            {"debug": {"showBorders": True, "showGrid": True, "logPositions": True}},
            {"pageBreak": {"enabled": False}},
            {"signature": {"position": "left"}, "footer": {"show": False}},
        ],
    )
    def test_layout_options(self, pdf_prescription, overrides):
        pdf = generate_prescription_pdf(pdf_prescription, overrides)
        assert pdf.startswith(b"%PDF")

    def test_accepts_an_orm_like_object(self, pdf_prescription):
        class Row:
            pass

        row = Row()
        for field in PDFPrescription.model_fields:
            setattr(row, field, getattr(pdf_prescription, field))

        assert generate_prescription_pdf(row).startswith(b"%PDF")


class TestFooterCanvas:
    def test_footer_knows_the_page_total(self):
        seen = []
        c = FooterCanvas(BytesIO(), pagesize=A4, footer=lambda canvas, page, total: seen.append((page, total)))
        for _ in range(3):
            c.drawString(100, 100, "page")
            c.showPage()
        c.save()

        assert seen == [(1, 3), (2, 3), (3, 3)]


class TestFileName:
    def test_name_and_date(self):
        prescription = PDFPrescription(patient_name="Ali  Reza Ahmadi", prescription_date=date(2024, 3, 5))
        assert generate_file_name(prescription) == "prescription-ali-reza-ahmadi-2024-03-05.pdf"

    def test_blank_name_and_missing_date(self):
        name = generate_file_name(PDFPrescription())
        assert name == f"prescription-unknown-{today():%Y-%m-%d}.pdf"

    def test_content_disposition_keeps_persian_names(self):
        header = content_disposition("prescription-احمد-2024-03-05.pdf")

        assert header.startswith('attachment; filename="prescription-')
        assert "filename*=UTF-8''prescription-%D8%A7" in header


class TestPDFEndpoints:
    def test_download_saved_prescription(self, client, sample_prescription):
        created = client.post("/api/prescriptions", json=sample_prescription).json()["data"]

        response = client.get(f"/api/prescriptions/{created['id']}/pdf")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert "attachment" in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    def test_download_unknown_prescription(self, client):
        response = client.get("/api/prescriptions/missing/pdf")

        assert response.status_code == 404
        assert response.json()["error"] == messages.PRESCRIPTION_NOT_FOUND

    def test_render_unsaved_prescription(self, client, sample_prescription):
        response = client.post(
            "/api/pdf", json={"prescription": sample_prescription, "config": {"page": {"format": "letter"}}}
        )

        assert response.status_code == 200
        assert response.content.startswith(b"%PDF")

    def test_invalid_config_is_rejected(self, client, sample_prescription):
        response = client.post(
            "/api/pdf", json={"prescription": sample_prescription, "config": {"page": {"orientation": "sideways"}}}
        )

        assert response.status_code == 400
        assert response.json()["error"] == messages.PDF_CONFIG_INVALID

    def test_renderer_failure_is_500(self, client, sample_prescription, monkeypatch):
        def broken(*args):
            raise RuntimeError("canvas exploded")

        monkeypatch.setattr("app.pdf_system.routes.generate_prescription_pdf", broken)
        response = client.post("/api/pdf", json={"prescription": sample_prescription})

        assert response.status_code == 500
        assert response.json()["error"] == messages.PDF_FAILED

    def test_default_config(self, client):
        config = client.get("/api/pdf/config").json()

        assert config["page"]["format"] == "a4"
        assert config["vitalSigns"]["gridColumns"] == 3
