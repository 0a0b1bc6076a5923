"""
Yoga Workout Backend — Custom Plan Request/Response Schemas
=============================================================

What:  API contract for POST /getcustomplan.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SessionCredentials(BaseModel):
    """
    The user/session/device triple the mobile app sends with user-scoped calls.

    All optional at the schema level: absence is reported with the app's own
    400 message by the session dependency.
    """

    user_id: Optional[str] = Field(default=None, description="User ObjectId")
    session: Optional[str] = Field(default=None, description="Session token issued at login")
    device_id: Optional[str] = Field(default=None, description="Device the session belongs to")


class CustomPlanListData(BaseModel):
    custom_plans: List[Dict[str, Any]] = Field(
        description="The user's plans, newest first, each with total_exercise"
    )
