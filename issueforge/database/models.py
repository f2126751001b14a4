import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Enum, Integer, String

from issueforge.database.config import Base
from issueforge.schemas import IssueStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


class Issue(Base):
    __tablename__ = "issues"
    __table_args__ = (CheckConstraint("effort >= 0", name="ck_issues_effort_non_negative"),)

    id = Column(String(36), primary_key=True, index=True, default=_new_id)
    title = Column(String, nullable=False)
    owner = Column(String, nullable=False)
    status = Column(
        Enum(*[s.value for s in IssueStatus], name="issue_status"),
        nullable=False,
        default=IssueStatus.NEW.value,
    )
    created = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    effort = Column(Integer, nullable=False, default=0)
    due_date = Column(Date, nullable=True)

    updated = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
