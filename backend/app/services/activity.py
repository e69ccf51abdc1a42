"""Activity log - best-effort audit sink, never fails the caller"""
import structlog
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from app.models import ActivityLog

log = structlog.get_logger(__name__)

SYSTEM_USER = "Sistema"


class ActivityNotifier:
    """Append-only audit entries; call after the core transaction committed"""

    def __init__(self, db: Session):
        self.db = db

    def record(self, principal, action: str, detail: str = "") -> ActivityLog | None:
        """Write one entry. Failures are logged and swallowed."""
        try:
            entry = ActivityLog(
                user_id=principal.id if principal else None,
                user_name=(principal.display_name if principal else "") or SYSTEM_USER,
                action=action,
                detail=detail or "",
            )
            self.db.add(entry)
            self.db.commit()
            return entry
        except Exception as e:
            log.warning("activity_log_failed", action=action, detail=detail, error=str(e))
            try:
                self.db.rollback()
            except Exception:
                log.warning("activity_log_rollback_failed", action=action)
            return None

    def recent(self, limit: int) -> list[ActivityLog]:
        stmt = select(ActivityLog).order_by(ActivityLog.id.desc()).limit(limit)
        return list(self.db.execute(stmt).scalars().all())

    def clear(self) -> None:
        self.db.execute(delete(ActivityLog))
        self.db.commit()
