"""Login and profile endpoints for dealership users."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from autolead.app.core.logger import get_logger
from autolead.app.core.security import create_access_token, verify_password
from autolead.app.db.session import get_db
from autolead.app.dependencies.auth import get_current_user
from autolead.app.models.user import User
from autolead.app.schemas.login import LoginRequest, LoginResponse
from autolead.app.schemas.user import UserRead

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = get_logger(__name__)


@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    try:
        user = db.query(User).filter(User.email == credentials.email).first()
    except SQLAlchemyError:
        logger.exception("Login error")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Login failed")

    if not user or not user.hashed_password or not verify_password(credentials.password, user.hashed_password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = create_access_token(user_id=user.id, email=user.email, role=user.role)
    logger.info("User %s logged in", user.id)
    return {"token": token, "user": UserRead.model_validate(user)}


@router.get("/profile", response_model=UserRead)
def read_profile(current_user: User = Depends(get_current_user)):
    return current_user
