from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr
from typing import Optional

# Shared properties for user models
class UserBase(BaseModel):
    email: EmailStr
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    role: str = "customer"
    firebase_id: Optional[str] = None

# Schema for user registration requests
class UserCreate(UserBase):
    password: Optional[str] = None

# Fields handed to storage; the password is already hashed
class InsertUser(UserBase):
    password_hash: Optional[str] = None

# Stored user record
class User(InsertUser):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: Optional[datetime] = None

# Output schema for user profile details
class UserResponse(UserBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: Optional[datetime] = None
