"""
Authentication Routes (students)

POST /register - Register student account
POST /login - Login with username/password
GET /me - Who does this bearer token belong to
"""

from fastapi import APIRouter, HTTPException, Depends
from pymongo.errors import DuplicateKeyError

from careerconnect.core.auth import hash_password, verify_password, issue_token, get_current_principal
from careerconnect.services.mongo_service import StudentService
from careerconnect.schemas.schemas import (
    StudentRegister, LoginRequest, PrincipalResponse, MessageResponse
)

router = APIRouter(tags=["Authentication"])

INVALID_LOGIN = "Invalid username or password"


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(request: StudentRegister):
    """
    Register a new student account.

    Username and email must be unique.
    """
    data = request.model_dump(exclude={"password"})
    try:
        StudentService().register(data, hash_password(request.password))
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Username already exists")

    return MessageResponse(message="Student registration successful")


@router.post("/login")
async def login(request: LoginRequest):
    """
    Login and receive the student summary plus a JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    student = StudentService().find_with_password(request.username)
    if not student or not verify_password(request.password, student["password"]):
        raise HTTPException(status_code=401, detail=INVALID_LOGIN)

    return {
        "message": "Login successful",
        "user": {
            "_id": str(student["_id"]),
            "name": student.get("name"),
            "username": student.get("username"),
            "email": student.get("email"),
            "department": student.get("department")
        },
        **issue_token(student["username"], "student")
    }


@router.get("/me", response_model=PrincipalResponse)
async def get_me(principal: dict = Depends(get_current_principal)):
    """Get the username and role behind the current token."""
    return PrincipalResponse(**principal)
