from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=6)
    whatsapp: Optional[str] = Field(None, max_length=50, description="Contact number, digits only")


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str
    username: str


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    whatsapp: Optional[str] = Field(None, max_length=50)
    old_password: Optional[str] = Field(None, alias="oldPassword")
    new_password: Optional[str] = Field(None, alias="newPassword", min_length=6)
