from fastapi import APIRouter, Depends

from urbix.models.user import User
from urbix.schemas.user import UserOut, to_user_out
from urbix.services.auth_service import get_current_user

router = APIRouter(prefix='/users', tags=['users'])


@router.get('/me', response_model=UserOut)
def me(user: User = Depends(get_current_user)) -> UserOut:
    return to_user_out(user)
