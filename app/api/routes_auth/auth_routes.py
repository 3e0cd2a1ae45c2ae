from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
import logging

from app.core.exceptions import AuthenticationError, NotFound, RegistrationError
from app.core.security import TokenUser, get_current_user
from app.db.session import get_db
from app.services import account_service
from .schemas import LoginRequest, LoginResponse, ProfileUpdate, RegisterRequest

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Auth"])


@router.post("/register")
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    try:
        account_service.register_user(db, request.username, request.password, request.whatsapp)
        return {"message": "User created"}

    except RegistrationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception(f"Error registering user {request.username}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    try:
        return account_service.authenticate(db, request.username, request.password)

    except AuthenticationError:
        logger.info(f"Failed login for {request.username}")
        raise HTTPException(status_code=401, detail="Invalid credentials")
    except Exception:
        logger.exception("Error during login")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/profile")
def read_profile(current: TokenUser = Depends(get_current_user), db: Session = Depends(get_db)):
    """Profile of the authenticated user, without the password hash."""
    try:
        return account_service.get_profile(db, current.id)

    except NotFound:
        raise HTTPException(status_code=404, detail="User not found")
    except Exception:
        logger.exception(f"Error reading profile of user {current.id}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.put("/profile")
def update_profile(
    request: ProfileUpdate,
    current: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update the WhatsApp contact and/or the password (requires the current one)."""
    try:
        account_service.update_profile(
            db,
            current.id,
            whatsapp=request.whatsapp,
            old_password=request.old_password,
            new_password=request.new_password,
        )
        return {"message": "Profile updated"}

    except AuthenticationError:
        raise HTTPException(status_code=401, detail="Wrong password")
    except NotFound:
        raise HTTPException(status_code=404, detail="User not found")
    except Exception:
        logger.exception(f"Error updating profile of user {current.id}")
        raise HTTPException(status_code=500, detail="Internal server error")
