"""Analytics endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from autolead.app.core.logger import get_logger
from autolead.app.core.time import utc_now
from autolead.app.db.session import get_db
from autolead.app.dependencies.auth import get_current_user
from autolead.app.models.user import User
from autolead.app.schemas.analytics import AnalyticsOverview
from autolead.app.services.access import policy_for
from autolead.app.services.analytics import get_lead_analytics

router = APIRouter(prefix="/api/analytics", tags=["analytics"])
logger = get_logger(__name__)


@router.get("", response_model=AnalyticsOverview)
def get_analytics(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    criteria = policy_for(current_user).lead_scope(current_user)
    try:
        return get_lead_analytics(db, criteria=criteria, now=utc_now())
    except SQLAlchemyError:
        logger.exception("Analytics error")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to get analytics")
