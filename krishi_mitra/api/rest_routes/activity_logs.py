from typing import List

from fastapi import APIRouter, status

from krishi_mitra.collections.activity_log import get_activity_logs, save_activity_log
from krishi_mitra.models.farmer_profile import ActivityLog

router = APIRouter(prefix="/activity-logs", tags=["Activity Log"])


@router.get("/", response_model=List[ActivityLog])
async def list_activity_logs():
    """
    Get all logged activities, oldest first.
    """
    return await get_activity_logs()


@router.post("/", response_model=ActivityLog, status_code=status.HTTP_201_CREATED)
async def create_activity_log(activity_log: ActivityLog):
    return await save_activity_log(activity_log)
