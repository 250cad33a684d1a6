from pydantic import BaseModel, Field, ConfigDict


class UserCreate(BaseModel):
    """Schema for signing up a new user."""
    username: str = Field(..., min_length=1, max_length=255, description="Unique username")
    email: str = Field(..., min_length=1, max_length=255, description="Unique email address")
    password: str = Field(..., min_length=1, description="Plaintext password, hashed before storage")
    phone: str = Field(..., min_length=1, max_length=64, description="Contact phone number")


class UserLogin(BaseModel):
    """Schema for a credentials check."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """Public view of a user. Never carries the password."""
    id: str
    username: str
    email: str
    phone: str

    model_config = ConfigDict(from_attributes=True)
