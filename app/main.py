# app/main.py
from dotenv import load_dotenv

load_dotenv()

import logging.config
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.appconfig import settings

# Apply logging configuration
logging.config.dictConfig(settings.LOGGING_CONFIG)

# Import routers
from app.ai_system.routes import router as ai_router
from app.database.connection import init_models
from app.pdf_system.routes import router as pdf_router
from app.system_services.preset_routes import router as preset_router
from app.system_services.system_routes import router as system_router

# Import configurations
from config.aiconfig import ai_settings
from config.pdfconfig import pdf_settings
from config.reset_config_route import router as reset_config_route

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    print("\n===============================================================================")
    print(f" 🚀 Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    print(f" ✅ Database: {settings.DATABASE_URL.split('://')[0]}")
    if ai_settings.inference_enabled:
        print(f" ✅ Symptom Models: {', '.join(ai_settings.SYMPTOM_MODELS)}")
        print(f" ✅ Analysis Models: {', '.join(ai_settings.ANALYSIS_MODELS)}")
    else:
        print(" ⚠️  No Hugging Face key - AI suggestions use the local knowledge base")
    print(f" ✅ PDF Font: {pdf_settings.PERSIAN_FONT_NAME} ({pdf_settings.resolved_font_path})")
    print("===============================================================================\n")

    await init_models()
    yield
    # Shutdown
    print("👋 Shutting down")


app = FastAPI(
    title=settings.APP_NAME,
    description="Dari/Persian prescriptions with AI suggestions, presets and PDF export",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"⚠️  Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=422,
        content={"success": False, "error": "Invalid request body", "details": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    return [{"loc": list(err.get("loc", ())), "msg": err.get("msg", "")} for err in exc.errors()]


# Include routers with prefixes
app.include_router(system_router, prefix="/api", tags=["Prescriptions"])
app.include_router(preset_router, prefix="/api", tags=["Presets"])
app.include_router(ai_router, prefix="/api", tags=["AI Suggestions"])
app.include_router(pdf_router, prefix="/api", tags=["PDF"])
app.include_router(reset_config_route, prefix="/api/system")


@app.get("/health")
async def health():
    return {"status": "ok", "aiEnabled": ai_settings.inference_enabled}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
