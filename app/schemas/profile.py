from pydantic import BaseModel, Field, field_validator


class ProfileCreate(BaseModel):
    name: str = Field(min_length=1, max_length=256)
    description: str | None = None
    user_id: str = Field(min_length=1)


class ProfileUpdate(BaseModel):
    id: str = Field(min_length=1)
    name: str | None = Field(default=None, min_length=1, max_length=256)
    description: str | None = None
    profile_img_url: str | None = Field(default=None, max_length=512)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("name cannot be null")
        return value


class ProfileImageDelete(BaseModel):
    profile_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)


class ProfileResponse(BaseModel):
    id: str
    name: str
    description: str | None
    profile_img_url: str | None
    user_id: str

    model_config = {"from_attributes": True}


class ProfileDeletionResponse(BaseModel):
    deleted_reminders_count: int
    deleted_favourites_count: int
    image_deleted: bool
