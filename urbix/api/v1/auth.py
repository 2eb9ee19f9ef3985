from fastapi import APIRouter, Depends, HTTPException, status

from urbix.api.deps import get_user_directory
from urbix.core.errors import DuplicateUsername, InvalidCredentials
from urbix.core.security import create_access_token
from urbix.schemas.user import LoginRequest, RegisterRequest, TokenResponse, UserOut, to_user_out
from urbix.services.auth_service import authenticate_user, register_user
from urbix.services.user_directory import UserDirectory

router = APIRouter(prefix='/auth', tags=['auth'])


@router.post('/register', response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, directory: UserDirectory = Depends(get_user_directory)) -> UserOut:
    try:
        user = register_user(
            directory,
            payload.username,
            payload.password,
            email=payload.email,
            phone=payload.phone,
        )
    except DuplicateUsername as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='This name is already taken. Please choose another one.',
        ) from exc
    return to_user_out(user)


@router.post('/login', response_model=TokenResponse)
def login(payload: LoginRequest, directory: UserDirectory = Depends(get_user_directory)) -> TokenResponse:
    try:
        user = authenticate_user(directory, payload.username, payload.password)
    except InvalidCredentials as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc
    return TokenResponse(access_token=create_access_token(user.username), user=to_user_out(user))
