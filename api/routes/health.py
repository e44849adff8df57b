"""Health check route"""

from datetime import datetime
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from domain.models import check_connection, get_db_session

router = APIRouter(tags=["Health"])
logger = logging.getLogger("foodplanner.api.health")


@router.get("/health")
def health_check(db: Session = Depends(get_db_session)):
    """Server and database status; 503 when the database does not answer."""
    timestamp = datetime.utcnow().isoformat() + "Z"
    if check_connection(db):
        return {"status": "OK", "database": "connected", "timestamp": timestamp}
    logger.error("Health check failed: database not reachable")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "ERROR", "database": "disconnected", "timestamp": timestamp},
    )
