from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from config import settings, create_db_and_tables
from middleware.logging_middleware import CorrelationIdMiddleware, RequestTimingMiddleware
from routes.api import build_router
from routes.health import router as health_router
from utils.logger import setup_logger
from utils.prometheus_metrics import init_prometheus_metrics

logger = setup_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application lifespan")

    init_prometheus_metrics(enabled=settings.ENABLE_PROMETHEUS)

    create_db_and_tables()
    logger.info("Database tables synchronized")

    if not settings.JWT_SECRET_KEY:
        logger.warning("JWT_SECRET_KEY is not set; authenticated routes will reject every request")

    yield

    logger.info("Application shutdown complete")


app = FastAPI(title="Market Recommendations API", version="0.1.0", debug=settings.DEBUG, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestTimingMiddleware)
app.add_middleware(CorrelationIdMiddleware)

app.include_router(build_router(), prefix="/api")
app.include_router(health_router)


@app.get("/")
def root():
    return {"app": "market-recommendations", "status": "running"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
