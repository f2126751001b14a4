import logging

from fastapi import APIRouter, Depends, status

from issueforge.database.store import IssueStore, get_store, valid_issue_id
from issueforge.schemas import DeleteResponse, IssueCreate, IssueResponse, IssueUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/issues", tags=["issues"])


@router.get("", response_model=list[IssueResponse])
async def list_issues(store: IssueStore = Depends(get_store)):
    """List all issues, newest first."""
    issues = await store.list_issues()
    logger.info(f"Found {len(issues)} issues")
    return issues


@router.post("", response_model=IssueResponse, status_code=status.HTTP_201_CREATED)
async def create_issue(payload: IssueCreate, store: IssueStore = Depends(get_store)):
    """Create new issue"""
    return await store.create_issue(payload)


@router.put("/{issue_id}", response_model=IssueResponse, status_code=status.HTTP_200_OK)
async def update_issue(
    payload: IssueUpdate,
    issue_id: str = Depends(valid_issue_id),
    store: IssueStore = Depends(get_store),
):
    """Update issue by ID"""
    return await store.update_issue(issue_id, payload)


@router.delete("/{issue_id}", response_model=DeleteResponse, status_code=status.HTTP_200_OK)
async def delete_issue(
    issue_id: str = Depends(valid_issue_id),
    store: IssueStore = Depends(get_store),
):
    """Delete issue by ID"""
    deleted = await store.delete_issue(issue_id)
    return DeleteResponse(
        message="Issue deleted successfully",
        deleted_issue=IssueResponse.model_validate(deleted),
    )
