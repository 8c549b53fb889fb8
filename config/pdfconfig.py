# config/pdfconfig.py
"""
PDF Rendering Configuration
File-system resources for the prescription PDF (fonts, logo). Layout
defaults live in app/pdf_system/pdf_config.py.
"""
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent.parent


class PDFSettings(BaseSettings):
    """Fonts and assets for bilingual prescriptions"""

    # TTF with Arabic-script coverage (e.g. Vazirmatn). Helvetica is used
    # when the file is missing, Persian glyphs then render as placeholders.
    PERSIAN_FONT_PATH: str = str(BASE_DIR / "assets" / "fonts" / "Vazirmatn-Regular.ttf")
    PERSIAN_BOLD_FONT_PATH: Optional[str] = str(BASE_DIR / "assets" / "fonts" / "Vazirmatn-Bold.ttf")
    PERSIAN_FONT_NAME: str = "Vazirmatn"

    LOGO_PATH: str = str(BASE_DIR / "assets" / "logo.png")

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def resolved_font_path(self) -> Path:
        path = Path(self.PERSIAN_FONT_PATH)
        return path if path.is_absolute() else BASE_DIR / path

    @property
    def resolved_bold_font_path(self) -> Optional[Path]:
        if not self.PERSIAN_BOLD_FONT_PATH:
            return None
        path = Path(self.PERSIAN_BOLD_FONT_PATH)
        return path if path.is_absolute() else BASE_DIR / path

    @property
    def resolved_logo_path(self) -> Path:
        path = Path(self.LOGO_PATH)
        return path if path.is_absolute() else BASE_DIR / path


pdf_settings = PDFSettings()
