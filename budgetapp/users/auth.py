from datetime import datetime, timedelta, timezone

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from budgetapp.config import settings
from budgetapp.database import get_db
from budgetapp.errors import AuthError
from budgetapp.users import crud as user_crud
from budgetapp.users import schemas


pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def hash_password(plain_password: str) -> str:
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def authenticate_user(db: Session, username: str, password: str):
    """Return the user for a valid username/password pair, otherwise None."""
    user = user_crud.get_user_by_username(db, username)
    if not user:
        # Keep the timing of unknown usernames close to wrong passwords
        pwd_context.dummy_verify()
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode["exp"] = datetime.now(timezone.utc) + expires_delta
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(db: Session, token: str | None):
    """
    Resolve a bearer token to its user.

    Fails with AuthError when the token is missing, malformed, signed
    with another key, expired, or names a user that no longer exists.
    Never writes to the store.
    """
    if not token:
        raise AuthError("Not authenticated")

    try:
        # jwt.decode checks the exp claim itself
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise AuthError("Invalid or expired token")

    username = payload.get("sub")
    if not username:
        raise AuthError("Invalid or expired token")

    user = user_crud.get_user_by_username(db, username)
    if not user:
        raise AuthError("Invalid or expired token")
    return user


def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> schemas.UserDisplaySchema:
    user = verify_token(db, token)
    return schemas.UserDisplaySchema.model_validate(user)
