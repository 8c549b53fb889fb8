# app/pdf_system/pdf_config.py
"""
Layout defaults for the prescription PDF.

Every length is in PDF points (1/72 inch). Callers override any subset of
keys, snake_case or camelCase; overrides are deep-merged into the defaults.
"""
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import Field
from pydantic.alias_generators import to_snake

from app.system_models.base_schema import CamelModel

RGB = Tuple[int, int, int]


class Margins(CamelModel):
    top: float = 40
    bottom: float = 40
    left: float = 40
    right: float = 40


class PageConfig(CamelModel):
    orientation: Literal["portrait", "landscape"] = "portrait"
    format: Literal["a4", "letter", "legal"] = "a4"
    margins: Margins = Field(default_factory=Margins)


class ColorsConfig(CamelModel):
    primary: RGB = (42, 94, 168)
    accent: RGB = (66, 133, 244)
    bg_light: RGB = (244, 247, 252)
    text_dark: RGB = (40, 40, 40)
    border: RGB = (200, 200, 200)
    table_striped: RGB = (250, 250, 250)
    warning: RGB = (255, 193, 7)
    success: RGB = (40, 167, 69)
    muted: RGB = (120, 120, 120)


class FontSizes(CamelModel):
    title: float = 16
    subtitle: float = 14
    heading: float = 12
    subheading: float = 10
    body: float = 10
    small: float = 9
    tiny: float = 8


class LineHeights(CamelModel):
    tight: float = 1.2
    normal: float = 1.5
    loose: float = 1.8


class TypographyConfig(CamelModel):
    font_sizes: FontSizes = Field(default_factory=FontSizes)
    line_heights: LineHeights = Field(default_factory=LineHeights)


class LogoConfig(CamelModel):
    enabled: bool = True
    path: Optional[str] = None  # None → pdf_settings.LOGO_PATH
    width: float = 80
    height: float = 80
    position: Literal["left", "center", "right"] = "center"
    margin_bottom: float = 20


class LayoutConfig(CamelModel):
    two_column: bool = True
    left_column_width: float = Field(0.25, gt=0, lt=1)  # fraction of page width, right column takes the rest
    column_gap: float = 15
    section_spacing: float = 25
    block_spacing: float = 15
    line_spacing: float = 5


class PatientInfoConfig(CamelModel):
    show: bool = True
    box_style: Literal["rounded", "flat", "shadow"] = "rounded"
    border_radius: float = 5
    columns: int = Field(4, ge=1)
    show_labels: bool = True
    label_style: Literal["bold", "normal", "italic"] = "bold"
    include: List[str] = Field(
        default_factory=lambda: ["name", "age", "gender", "date", "weight", "height", "bmi", "phone"]
    )


class ClinicalHistorySections(CamelModel):
    lab_exams: bool = True
    allergies: bool = True
    current_meds: bool = True
    past_medical_history: bool = True
    family_history: bool = True
    social_history: bool = True


class ClinicalHistoryConfig(CamelModel):
    show: bool = True
    sections: ClinicalHistorySections = Field(default_factory=ClinicalHistorySections)
    box_style: Literal["rounded", "flat"] = "rounded"
    box_height: float = 40


class VitalCell(CamelModel):
    width: float = 120
    height: float = 35
    gap: float = 5
    border_radius: float = 3


class VitalSignsConfig(CamelModel):
    show: bool = True
    grid_columns: int = Field(3, ge=1)
    cell: VitalCell = Field(default_factory=VitalCell)
    include: List[str] = Field(
        default_factory=lambda: ["pulse", "bp", "heart", "temp", "respiratory", "oxygen"]
    )
    show_units: bool = True


class MedicationTable(CamelModel):
    headers: List[str] = Field(
        default_factory=lambda: ["No.", "Medicine", "Dosage", "Frequency", "Duration", "Instructions"]
    )
    column_widths: List[float] = Field(default_factory=lambda: [30, 100, 70, 70, 70, 80])
    row_height: float = 20
    striped_rows: bool = True
    show_row_numbers: bool = True
    show_additional_details: bool = True


class MedicationsConfig(CamelModel):
    show: bool = True
    table: MedicationTable = Field(default_factory=MedicationTable)


class InstructionSections(CamelModel):
    general: bool = True
    follow_up: bool = True
    restrictions: bool = True


class InstructionsConfig(CamelModel):
    show: bool = True
    sections: InstructionSections = Field(default_factory=InstructionSections)
    indent: float = 20


class SignatureConfig(CamelModel):
    show: bool = True
    position: Literal["left", "center", "right"] = "right"
    line_width: float = 0.5
    line_length: float = 200
    include_title: bool = True


class FooterConfig(CamelModel):
    show: bool = True
    show_prescription_id: bool = True
    show_page_numbers: bool = True
    show_digital_note: bool = True
    height: float = 40


class PageBreakConfig(CamelModel):
    enabled: bool = True
    min_bottom_margin: float = 100
    repeat_headers: bool = True


class DebugConfig(CamelModel):
    show_borders: bool = False
    show_grid: bool = False
    log_positions: bool = False


class PDFConfig(CamelModel):
    page: PageConfig = Field(default_factory=PageConfig)
    colors: ColorsConfig = Field(default_factory=ColorsConfig)
    typography: TypographyConfig = Field(default_factory=TypographyConfig)
    logo: LogoConfig = Field(default_factory=LogoConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    patient_info: PatientInfoConfig = Field(default_factory=PatientInfoConfig)
    clinical_history: ClinicalHistoryConfig = Field(default_factory=ClinicalHistoryConfig)
    vital_signs: VitalSignsConfig = Field(default_factory=VitalSignsConfig)
    medications: MedicationsConfig = Field(default_factory=MedicationsConfig)
    instructions: InstructionsConfig = Field(default_factory=InstructionsConfig)
    signature: SignatureConfig = Field(default_factory=SignatureConfig)
    footer: FooterConfig = Field(default_factory=FooterConfig)
    page_break: PageBreakConfig = Field(default_factory=PageBreakConfig)
    debug: DebugConfig = Field(default_factory=DebugConfig)


def _snake_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {to_snake(key): _snake_keys(item) for key, item in value.items()}
    return value


def deep_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``overrides`` into a copy of ``base``. Lists are replaced."""
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def build_pdf_config(overrides: Union[PDFConfig, Dict[str, Any], None] = None) -> PDFConfig:
    """Defaults with ``overrides`` merged in. Invalid values raise pydantic.ValidationError."""
    if isinstance(overrides, PDFConfig):
        return overrides
    if not overrides:
        return PDFConfig()
    merged = deep_merge(PDFConfig().model_dump(), _snake_keys(overrides))
    return PDFConfig.model_validate(merged)
