"""User endpoints: profile with stats, account deletion, activity and data export."""

import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from taskflow.api.auth_models import DeleteAccountRequest, ProfileUpdateRequest, UserResponse
from taskflow.api.routes.auth import apply_profile_update
from taskflow.api.task_models import MessageResponse, TaskExport
from taskflow.auth.dependencies import get_current_user
from taskflow.auth.passwords import verify_password
from taskflow.database.database import get_db
from taskflow.database.repository import TaskRepository
from taskflow.database.user_repository import UserRepository
from taskflow.engine.statistics import profile_stats, user_activity
from taskflow.models.constants import ACTIVITY_DEFAULT_DAYS
from taskflow.models.task import ActivityDay
from taskflow.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/profile")
def get_user_profile(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """The signed-in user plus headline task counts."""
    tasks = TaskRepository(db).get_all(current_user.id)
    return {
        "user": current_user.model_dump(mode="json", by_alias=True),
        "stats": profile_stats(tasks),
    }


@router.put("/profile", response_model=UserResponse)
def update_user_profile(
    request: ProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Change username and/or email."""
    user = apply_profile_update(UserRepository(db), current_user, request)
    return UserResponse(user=user, message="Profile updated successfully")


@router.delete("/account", response_model=MessageResponse)
def delete_user_account(
    request: DeleteAccountRequest = Body(...),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete the account and all of its tasks after confirming the password."""
    users = UserRepository(db)
    stored_hash = users.get_password_hash(current_user.id)
    if stored_hash is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if not verify_password(request.password, stored_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid password")

    deleted_tasks = TaskRepository(db).delete_all_for_user(current_user.id)
    users.delete(current_user.id)
    logger.info(f"Deleted user {current_user.id} and {deleted_tasks} tasks")
    return MessageResponse(message="Account and all associated data deleted successfully")


@router.get("/activity", response_model=List[ActivityDay])
def get_user_activity(
    days: int = Query(ACTIVITY_DEFAULT_DAYS, ge=1, le=365),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Tasks created/completed per day over the last `days` days."""
    tasks = TaskRepository(db).get_all(current_user.id)
    return user_activity(tasks, datetime.utcnow(), days=days)


@router.get("/export")
def export_user_data(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Download the user's profile and tasks as a JSON attachment."""
    tasks = TaskRepository(db).get_all(current_user.id)
    export = TaskExport(
        user=current_user,
        tasks=tasks,
        exported_at=datetime.utcnow(),
        total_tasks=len(tasks),
        completed_tasks=sum(1 for t in tasks if t.completed),
    )
    return JSONResponse(
        content=export.model_dump(mode="json", by_alias=True),
        headers={"Content-Disposition": "attachment; filename=user-data-export.json"},
    )
