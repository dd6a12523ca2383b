"""FastAPI endpoints for accounts, profiles and address books."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_user
from storefront.api.schemas import (
    AddAddressRequest,
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserResponse,
    VendorProfileRequest,
)
from storefront.identity.authentication import issue_token, login
from storefront.identity.profile import (
    AddAddress,
    BecomeVendor,
    RemoveAddress,
    UpdateProfile,
    load_user,
)
from storefront.identity.registration import RegisterUser
from storefront.identity.user import User

user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.post("/register", status_code=201, response_model=AuthResponse)
async def register(body: RegisterRequest) -> AuthResponse:
    command = RegisterUser(
        email=body.email,
        password=body.password,
        name=body.name,
        phone_number=body.phone_number,
        role=body.role,
    )
    user_id = current_domain.process(command, asynchronous=False)
    user = load_user(user_id)
    return AuthResponse(token=issue_token(user), user=UserResponse.from_user(user))


@user_router.post("/login", response_model=AuthResponse)
async def login_user(body: LoginRequest) -> AuthResponse:
    user, token = login(body.email, body.password)
    return AuthResponse(token=token, user=UserResponse.from_user(user))


@user_router.get("/me", response_model=UserResponse)
async def me(user: User = Depends(current_user)) -> UserResponse:
    return UserResponse.from_user(user)


@user_router.put("/me", response_model=UserResponse)
async def update_me(body: UpdateProfileRequest, user: User = Depends(current_user)) -> UserResponse:
    command = UpdateProfile(
        user_id=str(user.id),
        name=body.name,
        phone_number=body.phone_number,
        profile_image=body.profile_image,
        notification_preferences=(
            json.dumps(body.notification_preferences) if body.notification_preferences is not None else None
        ),
    )
    current_domain.process(command, asynchronous=False)
    return UserResponse.from_user(load_user(user.id))


@user_router.post("/me/addresses", status_code=201, response_model=UserResponse)
async def add_address(body: AddAddressRequest, user: User = Depends(current_user)) -> UserResponse:
    command = AddAddress(user_id=str(user.id), **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return UserResponse.from_user(load_user(user.id))


@user_router.delete("/me/addresses/{address_id}", response_model=UserResponse)
async def remove_address(address_id: str, user: User = Depends(current_user)) -> UserResponse:
    command = RemoveAddress(user_id=str(user.id), address_id=address_id)
    current_domain.process(command, asynchronous=False)
    return UserResponse.from_user(load_user(user.id))


@user_router.put("/me/vendor", response_model=UserResponse)
async def become_vendor(body: VendorProfileRequest, user: User = Depends(current_user)) -> UserResponse:
    command = BecomeVendor(user_id=str(user.id), **body.model_dump())
    current_domain.process(command, asynchronous=False)
    return UserResponse.from_user(load_user(user.id))
