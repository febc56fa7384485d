from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from app.config import settings
from app.schemas.auth import Token, TokenData
from app.core.security import ADMIN_ROLE, authenticate_admin, create_access_token, get_current_admin
from app.core.exceptions import AuthException

router = APIRouter()

@router.post("/login", response_model=Token)
def login(form_data: OAuth2PasswordRequestForm = Depends()):
    if not authenticate_admin(form_data.username, form_data.password):
        raise AuthException("Wrong email or password")

    access_token = create_access_token(
        data={"sub": settings.ADMIN_EMAIL, "rol": ADMIN_ROLE}
    )

    return {
        "access_token": access_token,
        "token_type": "bearer",
        "admin": {
            "email": settings.ADMIN_EMAIL,
            "rol": ADMIN_ROLE,
        }
    }

@router.get("/me", response_model=TokenData)
def me(admin: dict = Depends(get_current_admin)):
    return admin
