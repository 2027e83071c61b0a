from pydantic import BaseModel, Field


class EntityIdRequest(BaseModel):
    id: str = Field(min_length=1)
