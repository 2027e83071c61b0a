from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class FavouriteCreate(BaseModel):
    title: str = Field(min_length=1, max_length=256)
    description: str | None = None
    user_id: str = Field(min_length=1)
    profile_id: str = Field(min_length=1)


class FavouriteUpdate(BaseModel):
    id: str = Field(min_length=1)
    title: str | None = Field(default=None, min_length=1, max_length=256)
    description: str | None = None
    profile_id: str | None = Field(default=None, min_length=1)

    @field_validator("title", "profile_id")
    @classmethod
    def reject_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class FavouriteResponse(BaseModel):
    id: str
    title: str
    description: str | None
    user_id: str
    profile_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
