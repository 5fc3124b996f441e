"""Activity services for logging lead events."""

from typing import Optional

from autolead.app.models.activity import Activity


def log_activity(db, lead_id: int, user_id: Optional[int], activity_type: str, description: str) -> Activity:
    activity = Activity(lead_id=lead_id, user_id=user_id, activity_type=activity_type, description=description)
    db.add(activity)
    db.commit()
    db.refresh(activity)
    return activity
