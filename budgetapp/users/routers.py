from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from budgetapp.database import get_db
from budgetapp.users import schemas, service
from budgetapp.users.permissions import current_owner_id


router = APIRouter()


@router.post("/register", response_model=schemas.AuthResponse)
def register(user: schemas.RegisterSchema, db: Session = Depends(get_db)):
    return service.register(db, user.username, user.email, user.password)


@router.post("/login", response_model=schemas.AuthResponse)
def login(credentials: schemas.LoginSchema, db: Session = Depends(get_db)):
    return service.login(db, credentials.username, credentials.password)


@router.get("/me", response_model=schemas.UserDisplaySchema)
def get_current_user_info(
    owner_id: int = Depends(current_owner_id),
    db: Session = Depends(get_db),
):
    return service.current_user(db, owner_id)
