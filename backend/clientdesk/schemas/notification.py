"""
Notification payload attached to mutation responses.
"""

import enum
from pydantic import BaseModel


class NotificationVariant(str, enum.Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    """Toast the dashboard shows after a mutation."""
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT


def success(description: str) -> Notification:
    return Notification(title="Success", description=description)
