import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import AuthenticationError, NotFound, RegistrationError, StorageError
from app.core.security import create_access_token, hash_password, verify_password
from app.models.user import User

logger = logging.getLogger(__name__)


def register_user(db: Session, username: str, password: str, whatsapp: Optional[str] = None) -> User:
    if db.query(User).filter(User.username == username).first():
        raise RegistrationError(f"Username {username} already exists")

    user = User(username=username, password_hash=hash_password(password), whatsapp=whatsapp or None)
    try:
        db.add(user)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise RegistrationError(f"Username {username} already exists") from e
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError("Could not create user") from e

    logger.info(f"User {username} registered")
    return user


def authenticate(db: Session, username: str, password: str) -> dict:
    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid credentials")
    return {"token": create_access_token(user.id, user.username), "username": user.username}


def get_profile(db: Session, user_id: int) -> dict:
    user = db.get(User, user_id)
    if user is None:
        raise NotFound(f"User {user_id} not found")
    return {
        "id": user.id,
        "username": user.username,
        "whatsapp": user.whatsapp,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    }


def update_profile(
    db: Session,
    user_id: int,
    whatsapp: Optional[str] = None,
    old_password: Optional[str] = None,
    new_password: Optional[str] = None,
) -> None:
    """Password changes require the current password; nothing is saved otherwise."""
    user = db.get(User, user_id)
    if user is None:
        raise NotFound(f"User {user_id} not found")

    if new_password:
        if not verify_password(old_password, user.password_hash):
            raise AuthenticationError("Wrong password")
        user.password_hash = hash_password(new_password)
    if whatsapp:
        user.whatsapp = whatsapp

    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise StorageError("Could not update profile") from e
