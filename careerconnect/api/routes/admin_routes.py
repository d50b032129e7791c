"""
Admin Routes

POST /admin/register - Register admin account
POST /admin/login - Login
GET /admin/profile?username= - Get profile
PUT /admin/{username} - Update profile
"""

from fastapi import APIRouter, HTTPException, Query
from pymongo.errors import DuplicateKeyError

from careerconnect.core.auth import hash_password, verify_password, issue_token
from careerconnect.services.mongo_service import AdminService
from careerconnect.schemas.schemas import (
    AdminRegister, AdminUpdate, AdminProfileResponse, LoginRequest, MessageResponse
)

router = APIRouter(prefix="/admin", tags=["Admins"])

ADMIN_NOT_FOUND = "Admin not found"


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(request: AdminRegister):
    """Register a new admin account."""
    data = request.model_dump(exclude={"password"})
    try:
        AdminService().register(data, hash_password(request.password))
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Username already exists")

    return MessageResponse(message="Admin registration successful")


@router.post("/login")
async def login(request: LoginRequest):
    """Login and receive admin name/position plus a JWT access token."""
    admin = AdminService().find_with_password(request.username)
    if not admin or not verify_password(request.password, admin["password"]):
        raise HTTPException(status_code=401, detail="Invalid username or password")

    return {
        "message": "Admin login successful",
        "admin": {"name": admin.get("name"), "position": admin.get("position")},
        **issue_token(admin["username"], "admin")
    }


@router.get("/profile", response_model=AdminProfileResponse)
async def get_profile(username: str = Query(...)):
    """Get admin profile by username."""
    admin = AdminService().get_by_username(username)
    if not admin:
        raise HTTPException(status_code=404, detail=ADMIN_NOT_FOUND)
    return AdminProfileResponse(
        username=admin["username"], email=admin["email"], position=admin["position"]
    )


@router.put("/{username}")
async def update_profile(username: str, data: AdminUpdate):
    """Update admin profile. Only provided fields are updated."""
    fields = data.model_dump(exclude_unset=True, exclude_none=True)
    try:
        admin = AdminService().update(username, fields)
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Email already in use")
    if not admin:
        raise HTTPException(status_code=404, detail=ADMIN_NOT_FOUND)
    return admin
