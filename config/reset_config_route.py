# config/reset_config_route.py
from fastapi import APIRouter, Depends

from app.users.auth_dependencies import get_current_admin_id

router = APIRouter(tags=["admin"])


@router.post("/reset-all-configs")
async def reset_all_configs(admin_id: str = Depends(get_current_admin_id)):
    """
    Reset all runtime configs to file defaults.
    Admin-only operation.
    """
    from app.ai_system.inference_client import inference_client
    from app.pdf_system.text_shaping import reset_font_set
    from config.aiconfig import ai_settings
    from config.appconfig import settings
    from config.pdfconfig import pdf_settings

    # Reload settings from files
    settings.__init__()
    ai_settings.__init__()
    pdf_settings.__init__()
    inference_client.reset()
    reset_font_set()

    return {
        "message": "All configs reset to defaults",
        "reset_by": admin_id,
    }
