"""
Announcement Routes

POST /announcements - Create announcement (admin)
GET /announcements - List, newest first (paginated)
GET /announcements/{id} - Get one
PUT /announcements/{id} - Edit (e.g. drive details)
PATCH /announcements/{id}/status - End or cancel
DELETE /announcements/{id} - Delete
"""

from fastapi import APIRouter, HTTPException, Query

from careerconnect.services.mongo_service import AnnouncementService
from careerconnect.schemas.schemas import (
    AnnouncementCreate, AnnouncementUpdate, AnnouncementStatus, AnnouncementStatusUpdate, MessageResponse
)

router = APIRouter(prefix="/announcements", tags=["Announcements"])

ANNOUNCEMENT_NOT_FOUND = "Announcement not found"


@router.post("", response_model=MessageResponse, status_code=201)
async def create_announcement(data: AnnouncementCreate):
    """Create a notice (type "normal") or placement drive (type "drive")."""
    AnnouncementService().create(data.model_dump(mode="json"))
    return MessageResponse(message="Announcement created successfully")


@router.get("")
async def list_announcements(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100)
):
    """List announcements, newest first."""
    return AnnouncementService().list(page, limit)


@router.get("/{announcement_id}")
async def get_announcement(announcement_id: str):
    announcement = AnnouncementService().get(announcement_id)
    if not announcement:
        raise HTTPException(status_code=404, detail=ANNOUNCEMENT_NOT_FOUND)
    return announcement


@router.put("/{announcement_id}")
async def update_announcement(announcement_id: str, data: AnnouncementUpdate):
    """Update the provided fields and return the updated announcement."""
    fields = data.model_dump(mode="json", exclude_unset=True)
    announcement = AnnouncementService().update(announcement_id, fields)
    if not announcement:
        raise HTTPException(status_code=404, detail=ANNOUNCEMENT_NOT_FOUND)
    return announcement


@router.patch("/{announcement_id}/status")
async def update_status(announcement_id: str, data: AnnouncementStatusUpdate):
    """
    Set status to Active, Ended or Cancelled.
    cancelReason is stored only for a cancellation.
    """
    fields = {"status": data.status.value}
    if data.status == AnnouncementStatus.cancelled and data.cancelReason:
        fields["cancelReason"] = data.cancelReason

    announcement = AnnouncementService().update(announcement_id, fields)
    if not announcement:
        raise HTTPException(status_code=404, detail=ANNOUNCEMENT_NOT_FOUND)
    return announcement


@router.delete("/{announcement_id}", response_model=MessageResponse)
async def delete_announcement(announcement_id: str):
    if not AnnouncementService().delete(announcement_id):
        raise HTTPException(status_code=404, detail=ANNOUNCEMENT_NOT_FOUND)
    return MessageResponse(message="Announcement deleted successfully")
