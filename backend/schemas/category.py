# backend/schemas/category.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class InsertCategory(BaseModel):
    name: str = Field(min_length=1)
    image_url: Optional[str] = None


class Category(InsertCategory):
    model_config = ConfigDict(from_attributes=True)

    id: int
