import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, EmailStr, field_validator
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from backend.auth import jwt_handler, passwords
from backend.auth.dependencies import get_current_user
from backend.database import get_db
from backend.models.user import CANDIDATE, USER_ROLES, User
from backend.routes.errors import database_error

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72  # bcrypt input limit


class RegisterRequest(BaseModel):
    name: str
    email: EmailStr
    password: str
    role: str = CANDIDATE

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Name is required.')
        return normalized

    @field_validator('email', mode='before')
    @classmethod
    def normalize_email(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters.')
        if len(value.encode('utf-8')) > MAX_PASSWORD_BYTES:
            raise ValueError(f'Password must be {MAX_PASSWORD_BYTES} bytes or fewer.')
        return value

    @field_validator('role')
    @classmethod
    def validate_role(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in USER_ROLES:
            raise ValueError('Invalid role.')
        return normalized


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return value.strip().lower()


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = 'bearer'
    user: UserResponse


@router.post('/register', response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    try:
        existing_user = db.query(User).filter(User.email == data.email).first()
        if existing_user:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail='User already exists',
            )

        user = User(
            name=data.name,
            email=data.email,
            hashed_password=passwords.hash_password(data.password),
            role=data.role,
        )
        db.add(user)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='User already exists',
        ) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise database_error(exc) from exc

    logger.info('Registered %s user %s', data.role, user.id)
    return MessageResponse(message='User registered successfully')


@router.post('/login', response_model=TokenResponse)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    try:
        user = db.query(User).filter(User.email == data.email).first()
    except SQLAlchemyError as exc:
        raise database_error(exc) from exc

    if user is None or not passwords.verify_password(data.password, user.hashed_password):
        logger.warning('Rejected login attempt')
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Invalid credentials',
        )

    token = jwt_handler.create_access_token(user_id=user.id, role=user.role)
    logger.info('User %s logged in', user.id)
    return TokenResponse(access_token=token, user=UserResponse.model_validate(user))


@router.get('/me', response_model=UserResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user
