from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from budgetapp.errors import AuthError, ConflictError, NotFoundError, ValidationError
from budgetapp.users import crud as user_crud
from budgetapp.users import schemas
from budgetapp.users.auth import authenticate_user, create_access_token, hash_password


def _auth_response(user) -> schemas.AuthResponse:
    return schemas.AuthResponse(
        access_token=create_access_token(data={"sub": user.username}),
        id=user.id,
        username=user.username,
        email=user.email,
        role=user.role,
    )


# =========================
# Register
# =========================
def register(db: Session, username: str, email: str, password: str) -> schemas.AuthResponse:
    username = (username or "").strip()
    email = (email or "").strip().lower()

    if not username or not email or not password:
        raise ValidationError("Username, email and password are required")

    if user_crud.get_user_by_username(db, username):
        raise ConflictError("Username already exists")

    if user_crud.get_user_by_email(db, email):
        raise ConflictError("Email already exists")

    try:
        user = user_crud.create_user(db, username, email, hash_password(password))
    except IntegrityError:
        db.rollback()
        raise ConflictError("Username or email already exists")

    logger.info(f"User registered: {username}")
    return _auth_response(user)


# =========================
# Login
# =========================
def login(db: Session, username: str, password: str) -> schemas.AuthResponse:
    username = (username or "").strip()

    user = authenticate_user(db, username, password or "")
    if not user:
        logger.warning(f"Authentication denied for username: {username}")
        raise AuthError("Invalid username or password")

    logger.info(f"User authenticated: {username}")
    return _auth_response(user)


# =========================
# Current user
# =========================
def current_user(db: Session, owner_id: int) -> schemas.UserDisplaySchema:
    user = user_crud.get_user_by_id(db, owner_id)
    if not user:
        raise NotFoundError("User not found")
    return schemas.UserDisplaySchema.model_validate(user)
