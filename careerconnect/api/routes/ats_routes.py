"""
ATS Routes (mounted under /api)

POST /ats/scan - Score a resume against a job description
GET /ats/history/{username} - Past scans, newest first
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, UploadFile, File, Form
from pymongo.errors import PyMongoError

from careerconnect.services.ats_service import ResumeScanner, build_scan_record, sort_history
from careerconnect.services.groq_client import GroqClient, LLM_ERRORS, get_groq_client
from careerconnect.services.media_storage import MediaStorage, MediaUploadError, get_media_storage
from careerconnect.services.mongo_service import StudentService
from careerconnect.utils.file_upload import extract_text_from_file

router = APIRouter(prefix="/ats", tags=["ATS"])
logger = logging.getLogger(__name__)


@router.post("/scan")
async def scan_resume(
    resume: Optional[UploadFile] = File(None, description="Resume file (PDF, DOCX, or TXT)"),
    jobDescription: Optional[str] = Form(None),
    username: Optional[str] = Form(None),
    llm: GroqClient = Depends(get_groq_client),
    storage: MediaStorage = Depends(get_media_storage)
):
    """
    Scan a resume against a job description.

    Process:
    1. Extract text from file
    2. AI returns match_percentage, missing_keywords, summary, recommendation
    3. Upload the file to Cloudinary (failure leaves resumeUrl empty)
    4. Save the scan on the student's history when username is given
    """
    if resume is None or not resume.filename or not jobDescription:
        raise HTTPException(status_code=400, detail="Resume and Job Description are required.")

    logger.info("Processing scan request, file %s", resume.filename, extra={"username": username})

    resume_text, content = await extract_text_from_file(resume)

    try:
        analysis = ResumeScanner(llm).analyze(resume_text, jobDescription)
    except LLM_ERRORS:
        logger.exception("ATS analysis failed")
        raise HTTPException(status_code=500, detail="Internal Server Error")

    resume_url = ""
    try:
        resume_url = storage.upload_resume(content, resume.filename)
    except MediaUploadError:
        logger.warning("Resume upload failed; scan continues without resumeUrl")

    if username:
        try:
            updated = StudentService().push_ats_scan(
                username, build_scan_record(analysis, jobDescription, resume_url)
            )
            if updated:
                logger.info("Scan history saved (%d scans)", len(updated.get("atsScans", [])),
                            extra={"username": username})
            else:
                logger.warning("Student not found; scan history not saved", extra={"username": username})
        except PyMongoError:
            logger.exception("Failed to save scan history", extra={"username": username})
    else:
        logger.info("No username provided; skipping history save")

    return {**analysis, "resumeUrl": resume_url}


@router.get("/history/{username}")
async def scan_history(username: str):
    """Past scans for a student (username matched case-insensitively)."""
    student = StudentService().get_by_username_ci(username, projection={"atsScans": 1})
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return sort_history(student.get("atsScans") or [])
