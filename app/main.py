from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from loguru import logger
import logging
import sys

from .controllers.v1.router import api_router
from .core.config import settings
from .core.exceptions import register_exception_handlers
from .database.session import init_models

# --- Loguru Intercept Handler ---
class InterceptHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())

def setup_logging():
    # Intercept everything at the root logger
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logger.configure(handlers=[{"sink": sys.stdout, "serialize": False, "level": settings.LOG_LEVEL}])
    # Keep SQL echo and connection chatter out of the application log
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.WARNING)

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if settings.CREATE_TABLES_ON_STARTUP:
        await init_models()
        logger.info("Database tables are in place")
    yield

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# Set up CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(api_router)

@app.get("/health")
def health_check():
    return {"status": "ok"}
