"""Profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_current_user_id, get_profile_service, require_user_id
from src.api.uploads import read_upload
from src.database import get_db
from src.schemas.auth import ForgotPasswordRequest, LoginRequest, TokenResponse
from src.schemas.profile import (
    MediaUpdatedResponse,
    MessageResponse,
    ProfileCreatedResponse,
    ProfileLookupResponse,
    ProfileUpdate,
    ProfileView,
)
from src.services.auth import create_access_token, get_user_by_username, verify_password
from src.services.profile_service import (
    MIN_PASSWORD_LENGTH,
    MIN_SECURITY_CODE_LENGTH,
    ProfileService,
    split_highlights,
)

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.post("/create", response_model=ProfileCreatedResponse)
async def create_profile(
    service: Annotated[ProfileService, Depends(get_profile_service)],
    name: Annotated[str | None, Form()] = None,
    username: Annotated[str | None, Form()] = None,
    intro_text: Annotated[str | None, Form()] = None,
    highlights: Annotated[str | None, Form()] = None,
    password: Annotated[str | None, Form()] = None,
    security_code: Annotated[str | None, Form(alias="securityCode")] = None,
    profile_picture: Annotated[UploadFile | None, File(alias="profilePicture")] = None,
    cover_image: Annotated[UploadFile | None, File(alias="coverImage")] = None,
):
    """Create a new profile. No authentication; the returned profile id is the access key."""
    if not name or not username or not intro_text or not highlights:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name, username, intro text, and highlights are required",
        )

    if not security_code or len(security_code.strip()) < MIN_SECURITY_CODE_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Security code is required (min 2 characters)",
        )

    # Validate before reading files so rejected requests upload nothing
    service.validate_username(username)

    user = await service.create_profile(
        name=name,
        username=username,
        intro_text=intro_text,
        highlights=split_highlights(highlights),
        security_code=security_code,
        password=password,
        profile_picture=await read_upload(profile_picture),
        cover_image=await read_upload(cover_image),
    )

    return ProfileCreatedResponse(
        message="Profile created successfully",
        profile_id=user.profile_id,
        user_id=user.id,
    )


@router.get("", response_model=ProfileView)
def get_own_profile(
    user_id: Annotated[int, Depends(get_current_user_id)],
    service: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Get the complete profile of the authenticated user."""
    user = service.get_user(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return service.build_profile_view(user)


@router.put("", response_model=MessageResponse)
def update_profile(
    profile_data: ProfileUpdate,
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Update profile fields and, optionally, replace the highlights."""
    user_id = require_user_id(db, profile_data.profile_id)
    service.update_profile(
        user_id,
        name=profile_data.name,
        username=profile_data.username,
        intro_text=profile_data.intro_text,
        highlights=profile_data.highlights,
    )
    return MessageResponse(message="Profile updated successfully")


@router.post("/picture", response_model=MediaUpdatedResponse)
async def update_profile_picture(
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[ProfileService, Depends(get_profile_service)],
    profile_id: Annotated[str | None, Form(alias="profileId")] = None,
    profile_picture: Annotated[UploadFile | None, File(alias="profilePicture")] = None,
):
    """Replace the profile picture."""
    user_id = require_user_id(db, profile_id)
    upload = await read_upload(profile_picture)
    if upload is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    url = await service.replace_profile_picture(user_id, upload)
    return MediaUpdatedResponse(message="Profile picture updated successfully", url=url)


@router.post("/cover", response_model=MediaUpdatedResponse)
async def update_cover_image(
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[ProfileService, Depends(get_profile_service)],
    profile_id: Annotated[str | None, Form(alias="profileId")] = None,
    cover_image: Annotated[UploadFile | None, File(alias="coverImage")] = None,
):
    """Replace the cover image."""
    user_id = require_user_id(db, profile_id)
    upload = await read_upload(cover_image)
    if upload is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    url = await service.replace_cover_image(user_id, upload)
    return MediaUpdatedResponse(message="Cover image updated successfully", url=url)


@router.get("/username/{username}", response_model=ProfileLookupResponse)
def get_profile_by_username(
    username: str,
    service: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Look up a profile id by username."""
    user = service.get_by_username(username)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return ProfileLookupResponse(profile_id=user.profile_id, username=user.username, name=user.name)


@router.post("/login", response_model=TokenResponse)
def login(
    credentials: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """Login with username and password."""
    if not credentials.username or not credentials.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username and password are required",
        )

    user = get_user_by_username(db, credentials.username)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if not user.password_hash:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Password not set for this account",
        )

    if not verify_password(credentials.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return TokenResponse(token=create_access_token(user.id, user.username))


@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    request: ForgotPasswordRequest,
    service: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Reset a password after checking the account's security code."""
    if (
        not request.username
        or not request.security_code
        or not request.new_password
        or not request.confirm_password
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username, security code, new password, and confirm password are required",
        )
    if request.new_password != request.confirm_password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Passwords do not match")
    if len(request.new_password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Password must be at least 6 characters",
        )

    user = service.get_by_username(request.username)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if not user.security_code_hash:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Security code not set for this account",
        )
    if not verify_password(request.security_code.strip(), user.security_code_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid security code")

    service.set_password(user, request.new_password)
    return MessageResponse(message="Password updated successfully")


@router.get("/{profile_id}", response_model=ProfileView)
def get_profile(
    profile_id: str,
    service: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Get a complete public profile by its profile id."""
    user = service.get_by_profile_id(profile_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return service.build_profile_view(user)
