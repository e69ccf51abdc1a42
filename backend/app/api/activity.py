"""Activity log - read by ADMIN/DIREZIONE, cleared by ADMIN"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config import get_settings
from app.core.auth import Principal, RequireAdmin, require_role
from app.database import get_db
from app.models.user import Role
from app.schemas.activity import ActivityLogResponse
from app.services.activity import ActivityNotifier

router = APIRouter(prefix="/api/activity", tags=["activity"])
RequireManagement = Depends(require_role(Role.ADMIN, Role.DIREZIONE))


@router.get("", response_model=list[ActivityLogResponse])
def list_activity(
    db: Session = Depends(get_db),
    _: Principal = RequireManagement,
):
    return ActivityNotifier(db).recent(get_settings().activity_log_limit)


@router.delete("")
def clear_activity(
    db: Session = Depends(get_db),
    _: Principal = RequireAdmin,
):
    ActivityNotifier(db).clear()
    return {"ok": True}
