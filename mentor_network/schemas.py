from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from .constants import BusinessRules
from .models import Role, Domain, Branch, RequestStatus, RequestAction

# --- Authentication Schemas ---

class SignupInput(BaseModel):
    name: str = Field(..., min_length=BusinessRules.MIN_NAME_LENGTH, max_length=BusinessRules.MAX_NAME_LENGTH)
    email: str = Field(..., min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=BusinessRules.MIN_PASSWORD_LENGTH)
    role: Role
    year_of_study: Optional[int] = Field(
        None, ge=BusinessRules.MIN_YEAR_OF_STUDY, le=BusinessRules.MAX_YEAR_OF_STUDY
    )
    domain: Optional[Domain] = None
    branch: Optional[Branch] = None
    companies: Optional[List[str]] = Field(None, description="Companies a mentor is at or from.")
    companies_interested: Optional[List[str]] = Field(None, description="Companies a mentee wants introductions to.")

class LoginInput(BaseModel):
    email: str
    password: str

class AuthContext(BaseModel):
    """The resolved caller identity; user_id is None for anonymous requests."""
    user_id: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

# --- Input Models ---

class UserFilter(BaseModel):
    role: Optional[Role] = None
    name: Optional[str] = Field(None, description="Case-insensitive substring of the user's name.")
    domain: Optional[Domain] = None
    branch: Optional[Branch] = None
    year_of_study: Optional[int] = None
    company: Optional[str] = Field(None, description="Company the user is at or from.")

class RespondInput(BaseModel):
    action: RequestAction

class ProfileImageUpdate(BaseModel):
    image_url: str = Field(..., min_length=1)

# --- Output Models ---

class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    image_url: str
    role: Role
    year_of_study: Optional[int]
    domain: Optional[Domain]
    branch: Optional[Branch]
    companies: List[str]
    companies_interested: List[str]
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }

class AuthPayload(BaseModel):
    token: str
    user: UserResponse

class FollowRequestResponse(BaseModel):
    mentor_id: str
    mentee_id: str
    status: RequestStatus
    created_at: datetime
    updated_at: datetime
    mentor: UserResponse
    mentee: UserResponse

    model_config = {
        "from_attributes": True,
    }
