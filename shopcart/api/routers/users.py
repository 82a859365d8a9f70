from fastapi import APIRouter, Depends

from shopcart.api.deps import get_current_user_id, get_directory_service, get_user_service
from shopcart.domain.schemas import LoginIn, LoginOut, SignupIn, SignupOut, UsersOut
from shopcart.services.directory_service import DirectoryService
from shopcart.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=SignupOut, status_code=201)
def signup(payload: SignupIn, service: UserService = Depends(get_user_service)):
    user = service.register(payload.username, payload.password)
    return {"message": "User created successfully", "user_id": user.id}


@router.post("/login", response_model=LoginOut)
def login(payload: LoginIn, service: UserService = Depends(get_user_service)):
    token, user_id = service.login(payload.username, payload.password)
    return {"message": "Login successful", "token": token, "user_id": user_id}


@router.get("", response_model=UsersOut)
def list_users(
    _: int = Depends(get_current_user_id),
    directory: DirectoryService = Depends(get_directory_service),
):
    return {"users": directory.list_users()}
