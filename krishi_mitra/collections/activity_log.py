from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import TypeAdapter

from krishi_mitra.core.mongodb import get_key_value_collection
from krishi_mitra.models.farmer_profile import ActivityLog

ACTIVITY_LOGS_KEY = "activityLogs"

_activity_logs_adapter = TypeAdapter(list[ActivityLog])


async def get_activity_logs() -> list[ActivityLog]:
    """Stored activity logs, oldest first."""
    collection: AsyncIOMotorCollection = get_key_value_collection()
    try:
        document = await collection.find_one({"_id": ACTIVITY_LOGS_KEY})
        if not document:
            return []
        return _activity_logs_adapter.validate_python(document.get("value") or [])
    except Exception:
        raise


async def save_activity_log(activity_log: ActivityLog) -> ActivityLog:
    """Appends a log and keeps the stored list sorted by date, oldest first."""
    collection: AsyncIOMotorCollection = get_key_value_collection()
    try:
        payload = activity_log.model_dump(mode="json", by_alias=True)
        # ISO dates sort chronologically as strings
        await collection.update_one(
            {"_id": ACTIVITY_LOGS_KEY},
            {"$push": {"value": {"$each": [payload], "$sort": {"date": 1}}}},
            upsert=True,
        )
        return activity_log
    except Exception:
        raise
