# shopcart/api/routers/health.py
from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shopcart.data.database import get_db, ping
from shopcart.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health(db: Session = Depends(get_db)):
    """Zawsze 200, stan bazy w body."""
    try:
        ping(db)
        database = "healthy"
    except SQLAlchemyError as e:
        logger.warning(f"Database ping failed: {e}")
        database = "unhealthy"

    return {"status": "healthy", "service": "shopcart", "database": database}
