from pydantic import BaseModel, ConfigDict

from budgetapp.users.models import Role


# -------- USERS --------
class RegisterSchema(BaseModel):
    username: str
    email: str
    password: str


class LoginSchema(BaseModel):
    username: str
    password: str


class UserDisplaySchema(BaseModel):
    id: int
    username: str
    email: str
    role: Role

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    id: int
    username: str
    email: str
    role: Role
