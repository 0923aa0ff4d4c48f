from fastapi import APIRouter, Depends, Response
from sqlmodel import Session, select, func
from typing import Dict, Any
from datetime import datetime

from config.database import get_session
from models.catalog import Product
from models.user_history import UserHistory
from utils.logger import setup_logger
from utils.prometheus_metrics import get_prometheus_metrics

logger = setup_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.utcnow().isoformat(),
        "service": "market-recommendations"
    }


@router.get("/health/ready")
def readiness_check(session: Session = Depends(get_session)):
    checks: Dict[str, Any] = {}
    ready = True

    try:
        checks["database"] = {
            "status": "ready",
            "products_count": session.exec(select(func.count()).select_from(Product)).one(),
            "history_events_count": session.exec(select(func.count()).select_from(UserHistory)).one(),
        }
    except Exception as e:
        logger.warning("Database readiness probe failed", extra={"error": str(e)})
        checks["database"] = {"status": "not_ready", "error": str(e)}
        ready = False

    return {
        "ready": ready,
        "checks": checks,
        "timestamp": datetime.utcnow().isoformat()
    }


@router.get("/health/live")
def liveness_check():
    return {
        "alive": True,
        "timestamp": datetime.utcnow().isoformat()
    }


@router.get("/metrics", include_in_schema=False)
def metrics():
    collector = get_prometheus_metrics()
    return Response(content=collector.generate_metrics(), media_type=collector.get_content_type())
