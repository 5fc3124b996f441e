"""Authentication dependencies for retrieving the current user."""

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from autolead.app.core.security import decode_access_token
from autolead.app.db.session import get_db
from autolead.app.models.user import User


def get_current_user(db: Session = Depends(get_db), authorization: str | None = Header(default=None)) -> User:
    # Expect Authorization: Bearer <token>
    if not authorization or not authorization.startswith("Bearer ") or not authorization[7:].strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    token = authorization.split(" ", 1)[1].strip()
    forbidden = HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid or expired token")
    try:
        payload = decode_access_token(token)
    except ValueError:
        raise forbidden

    user_id = payload.get("userId", payload.get("sub"))
    try:
        user_id_int = int(user_id)
    except (TypeError, ValueError):
        raise forbidden

    user = db.query(User).filter(User.id == user_id_int).first()
    if not user:
        raise forbidden
    return user

