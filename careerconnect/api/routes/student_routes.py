"""
Student Routes

GET /students - List students (search, department filter, paginated)
GET /students/count - Number of registered students
GET /students/{username} - Get profile
PUT /students/{username} - Update profile
POST /students/{username}/upload-photo - Upload profile picture
DELETE /students/{username} - Delete account
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, Query, UploadFile, File
from pymongo.errors import DuplicateKeyError

from careerconnect.services.mongo_service import StudentService
from careerconnect.services.media_storage import (
    MediaStorage, MediaUploadError, UnsupportedMediaError, get_media_storage
)
from careerconnect.utils.file_upload import read_upload
from careerconnect.schemas.schemas import StudentUpdate, CountResponse, MessageResponse

router = APIRouter(prefix="/students", tags=["Students"])
logger = logging.getLogger(__name__)

STUDENT_NOT_FOUND = "Student not found"


@router.get("")
async def list_students(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = Query(""),
    department: str = Query("")
):
    """List students. `search` matches name, username or email; department "All" means no filter."""
    return StudentService().list(page, limit, search=search, department=department)


@router.get("/count", response_model=CountResponse)
async def count_students():
    """Total registered students."""
    return CountResponse(count=StudentService().count())


@router.get("/{username}")
async def get_student(username: str):
    """Get a student's full profile, including activity histories."""
    student = StudentService().get_by_username(username)
    if not student:
        raise HTTPException(status_code=404, detail=STUDENT_NOT_FOUND)
    return student


@router.put("/{username}")
async def update_student(username: str, data: StudentUpdate):
    """Update profile. Only provided fields are updated."""
    fields = data.model_dump(exclude_unset=True, exclude_none=True)
    try:
        student = StudentService().update(username, fields)
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Email already in use")
    if not student:
        raise HTTPException(status_code=404, detail=STUDENT_NOT_FOUND)
    return student


@router.post("/{username}/upload-photo")
async def upload_photo(
    username: str,
    profilePicture: Optional[UploadFile] = File(None, description="Profile picture (jpg, jpeg or png)"),
    storage: MediaStorage = Depends(get_media_storage)
):
    """
    Upload a profile picture to Cloudinary and store its URL on the student.
    """
    if profilePicture is None or not profilePicture.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    service = StudentService()
    if not service.get_by_username(username):
        raise HTTPException(status_code=404, detail=STUDENT_NOT_FOUND)

    content = await read_upload(profilePicture)
    try:
        url = storage.upload_profile_picture(content, profilePicture.filename)
    except UnsupportedMediaError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except MediaUploadError:
        raise HTTPException(status_code=500, detail="Image upload failed")

    student = service.update(username, {"profilePicture": url})
    if not student:
        raise HTTPException(status_code=404, detail=STUDENT_NOT_FOUND)

    logger.info("Profile picture updated", extra={"username": username})
    return {
        "message": "Profile picture updated successfully",
        "profilePicture": url,
        "student": student
    }


@router.delete("/{username}", response_model=MessageResponse)
async def delete_student(username: str):
    """Delete a student account."""
    if not StudentService().delete(username):
        raise HTTPException(status_code=404, detail=STUDENT_NOT_FOUND)
    return MessageResponse(message="Student deleted successfully")
