"""Store handle wrapping the async engine and session factory.

One IssueStore is created per application in the lifespan handler and
disposed on shutdown. Routes receive it through the get_store dependency.
"""

import logging
import uuid

from fastapi import Request
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from issueforge.database import models
from issueforge.database.config import Base, build_engine, build_session_factory
from issueforge.errors import InvalidIdentifier, NotFound, StoreError, StoreUnavailable
from issueforge.schemas import IssueCreate, IssueUpdate

logger = logging.getLogger(__name__)


def parse_issue_id(issue_id: str) -> str:
    """
    Normalise an issue id to its canonical UUID string.

    Raises:
        InvalidIdentifier: If issue_id is not a UUID
    """
    try:
        return str(uuid.UUID(issue_id))
    except (ValueError, TypeError, AttributeError):
        raise InvalidIdentifier(f"The provided ID is not a valid issue ID: {issue_id}")


class IssueStore:
    def __init__(self, database_url: str, echo: bool = False):
        self.engine = build_engine(database_url, echo=echo)
        self.session_factory = build_session_factory(self.engine)

    async def connect(self) -> None:
        """
        Open the initial connection and create tables.

        Raises:
            StoreUnavailable: If the database cannot be reached
        """
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (SQLAlchemyError, OSError) as exc:
            raise StoreUnavailable(f"Could not connect to database: {exc}") from exc
        logger.info("Connected to database", extra={"dialect": self.engine.dialect.name})

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("Database connection closed")

    async def list_issues(self) -> list[models.Issue]:
        """All issues, newest first."""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    select(models.Issue).order_by(models.Issue.created.desc())
                )
                return list(result.scalars().all())
        except (SQLAlchemyError, OSError) as exc:
            raise StoreUnavailable(f"Failed to fetch issues: {exc}") from exc

    async def create_issue(self, payload: IssueCreate) -> models.Issue:
        issue = models.Issue(
            title=payload.title,
            owner=payload.owner,
            status=payload.status.value,
            effort=payload.effort,
            due_date=payload.due_date,
        )
        try:
            async with self.session_factory() as session:
                session.add(issue)
                await session.commit()
                await session.refresh(issue)
        except (SQLAlchemyError, OSError) as exc:
            raise StoreError(f"Failed to create issue: {exc}") from exc

        logger.info("Issue created", extra={"issue_id": issue.id})
        return issue

    async def update_issue(self, issue_id: str, payload: IssueUpdate) -> models.Issue:
        """
        Replace the supplied mutable fields of an issue.

        Concurrent updates to the same issue are not reconciled: the last
        commit wins.

        Raises:
            InvalidIdentifier: If issue_id is not a UUID
            NotFound: If no issue has this id
            StoreError: On database failure
        """
        issue_id = parse_issue_id(issue_id)
        try:
            async with self.session_factory() as session:
                issue = await session.get(models.Issue, issue_id)
                if issue is None:
                    raise NotFound(f"No issue found with ID: {issue_id}")

                for name, value in payload.changes().items():
                    if name == "status":
                        value = value.value
                    setattr(issue, name, value)

                await session.commit()
                await session.refresh(issue)
        except (SQLAlchemyError, OSError) as exc:
            raise StoreError(f"Failed to update issue: {exc}") from exc

        logger.info("Issue updated", extra={"issue_id": issue_id})
        return issue

    async def delete_issue(self, issue_id: str) -> models.Issue:
        """
        Permanently remove an issue and return its last state.

        Raises:
            InvalidIdentifier: If issue_id is not a UUID
            NotFound: If no issue has this id
            StoreError: On database failure
        """
        issue_id = parse_issue_id(issue_id)
        try:
            async with self.session_factory() as session:
                issue = await session.get(models.Issue, issue_id)
                if issue is None:
                    raise NotFound(f"No issue found with ID: {issue_id}")

                await session.delete(issue)
                await session.commit()
        except (SQLAlchemyError, OSError) as exc:
            raise StoreError(f"Failed to delete issue: {exc}") from exc

        logger.info("Issue deleted", extra={"issue_id": issue_id})
        return issue


# Dependency to get the store handle
def get_store(request: Request) -> IssueStore:
    return request.app.state.store


# Path dependency; resolved before the request body is validated
def valid_issue_id(issue_id: str) -> str:
    return parse_issue_id(issue_id)
