import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from impacts.database import get_db
from impacts.models.user import User
from impacts.schemas.user import RegisterRequest, LoginRequest, UserResponse, AuthResponse
from impacts.auth import create_token, get_current_user, hash_password, verify_password, UserPrincipal

logger = logging.getLogger(__name__)

router = APIRouter()

# One message for unknown email and wrong password alike.
INVALID_CREDENTIALS = "Invalid credentials"


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(data: RegisterRequest, db: AsyncSession = Depends(get_db)):
    existing = await db.scalar(select(User.id).where(User.email == data.email))
    if existing is not None:
        raise HTTPException(status_code=400, detail="User already exists")

    user = User(
        email=data.email,
        password_hash=hash_password(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        hospital_name=data.hospital_name,
        role="normal",
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    logger.info("Registered user %s", user.id)

    return AuthResponse(token=create_token(user), user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(data: LoginRequest, db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(User).where(User.email == data.email))
    user = result.scalar_one_or_none()
    if not user or not verify_password(data.password, user.password_hash):
        raise HTTPException(status_code=400, detail=INVALID_CREDENTIALS)

    return AuthResponse(token=create_token(user), user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
async def get_me(
    db: AsyncSession = Depends(get_db),
    current_user: UserPrincipal = Depends(get_current_user),
):
    result = await db.execute(select(User).where(User.id == current_user.id))
    user = result.scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserResponse.model_validate(user)
