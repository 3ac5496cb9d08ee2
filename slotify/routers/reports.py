# slotify/routers/reports.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from slotify.database import get_db
from slotify.dependencies import require_role
from slotify.models.user import Role
from slotify.schemas.report import DailyReportOut
from slotify.services import report_service

router = APIRouter()


@router.get("/reports/daily", response_model=DailyReportOut, summary="Today's occupancy",
            dependencies=[Depends(require_role(Role.ADMIN, Role.SECURITY))])
def get_daily_report(db: Session = Depends(get_db)):
    """Open check-ins made since local midnight against all active slots."""
    return report_service.daily_report(db)
