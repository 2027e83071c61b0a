from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from app.models.reminder import Frequency


class ReminderCreate(BaseModel):
    title: str = Field(min_length=1, max_length=256)
    description: str | None = None
    date_to_remember: date
    completed: bool
    frequency: Frequency
    user_id: str = Field(min_length=1)
    profile_id: str | None = None


class ReminderUpdate(BaseModel):
    id: str = Field(min_length=1)
    title: str | None = Field(default=None, min_length=1, max_length=256)
    description: str | None = None
    date_to_remember: date | None = None
    completed: bool | None = None
    frequency: Frequency | None = None
    profile_id: str | None = None

    @field_validator("title", "date_to_remember", "completed", "frequency")
    @classmethod
    def reject_null(cls, value, info):
        # Only runs for values the caller actually sent.
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class ReminderResponse(BaseModel):
    id: str
    title: str
    description: str | None
    date_to_remember: date
    completed: bool
    should_expire: bool
    frequency: Frequency
    user_id: str
    profile_id: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
