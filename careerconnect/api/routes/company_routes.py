"""
Company Routes

POST /company/register - Register company account
POST /company/login - Login
POST /company/announcements - Post a drive/notice as a company
GET /companies - List companies (search, paginated)
DELETE /companies/{id} - Delete company
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, Query
from pymongo.errors import DuplicateKeyError

from careerconnect.core.auth import hash_password, verify_password, issue_token, get_optional_principal
from careerconnect.services.mongo_service import CompanyService, AnnouncementService
from careerconnect.schemas.schemas import (
    CompanyRegister, LoginRequest, AnnouncementCreate, MessageResponse
)

router = APIRouter(tags=["Companies"])


@router.post("/company/register", response_model=MessageResponse, status_code=201)
async def register(request: CompanyRegister):
    """Register a new company account."""
    data = request.model_dump(exclude={"password"})
    try:
        CompanyService().register(data, hash_password(request.password))
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Username already exists")

    return MessageResponse(message="Company registration successful")


@router.post("/company/login")
async def login(request: LoginRequest):
    """Login and receive the company name plus a JWT access token."""
    company = CompanyService().find_with_password(request.username)
    if not company or not verify_password(request.password, company["password"]):
        raise HTTPException(status_code=401, detail="Invalid username or password")

    return {
        "message": "Company login successful",
        "company": {"name": company.get("name")},
        **issue_token(company["username"], "company")
    }


@router.post("/company/announcements", response_model=MessageResponse, status_code=201)
async def create_company_announcement(
    data: AnnouncementCreate,
    principal: Optional[dict] = Depends(get_optional_principal)
):
    """
    Post an announcement as a company.

    With a company bearer token and no `company` in the body, the
    posting company's name is filled in.
    """
    fields = data.model_dump(mode="json")
    if not fields.get("company") and principal and principal["role"] == "company":
        company = CompanyService().get_by_username(principal["username"])
        if company:
            fields["company"] = company.get("name")

    AnnouncementService().create(fields)
    return MessageResponse(message="Announcement created successfully by company")


@router.get("/companies")
async def list_companies(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = Query("")
):
    """List companies; `search` matches name or email. Passwords are never returned."""
    return CompanyService().list(page, limit, search=search)


@router.delete("/companies/{company_id}", response_model=MessageResponse)
async def delete_company(company_id: str):
    """Delete a company account."""
    if not CompanyService().delete(company_id):
        raise HTTPException(status_code=404, detail="Company not found")
    return MessageResponse(message="Company deleted successfully")
