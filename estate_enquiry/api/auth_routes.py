from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from estate_enquiry.database import get_db
from estate_enquiry.schemas.user import UserLogin, Token, User
from estate_enquiry.services.user_service import UserService
from estate_enquiry.utils.auth import create_access_token, get_current_user
from estate_enquiry.config.logging import get_logger

router = APIRouter(prefix="/api/auth", tags=["authentication"])
logger = get_logger(__name__)


@router.post("/login", response_model=Token)
async def login(
    user_credentials: UserLogin,
    db: AsyncSession = Depends(get_db)
):
    """
    Authenticate a back-office user and return an access token
    """
    try:
        user = await UserService.authenticate_user(
            db,
            user_credentials.email,
            user_credentials.password
        )

        if not user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect email or password",
            )

        access_token = create_access_token(data={"sub": user.id})

        return Token(
            access_token=access_token,
            token_type="bearer",
            user=User.model_validate(user)
        )

    except HTTPException:
        raise
    except Exception:
        logger.error("Login failed", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Login failed"
        )


@router.get("/me", response_model=User)
async def get_current_user_profile(current_user = Depends(get_current_user)):
    return current_user
