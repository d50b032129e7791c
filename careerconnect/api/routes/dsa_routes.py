"""
DSA Practice Routes (mounted under /api)

GET /dsa/questions - List/filter problems, or fetch one by qid
POST /dsa/run - Compile and run code
POST /dsa/submit - Record an attempt
GET /dsa/stats/{username} - Attempt history
GET /dsa/analytics/{username} - Dashboard analytics
POST /dsa/add - Add problem
DELETE /dsa/{id} - Delete problem
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, Query
from fastapi.responses import JSONResponse

from careerconnect.services.code_runner import CodeRunner, UnsupportedLanguageError, get_code_runner
from careerconnect.services.dsa_service import build_attempt, compute_analytics, slugify, summarize_problem
from careerconnect.services.mongo_service import DSAProblemService, StudentService
from careerconnect.schemas.schemas import (
    DSAProblemCreate, DSAAttemptCreate, CodeRunRequest, CodeRunResponse, MessageResponse
)

router = APIRouter(prefix="/dsa", tags=["DSA Practice"])
logger = logging.getLogger(__name__)


@router.get("/questions")
async def get_questions(
    difficulty: Optional[str] = Query(None),
    topic: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    qid: Optional[str] = Query(None, description="ObjectId or titleSlug"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100)
):
    """
    With qid: the full problem (plus QID). Otherwise a filtered page of summaries.
    """
    service = DSAProblemService()

    if qid:
        problem = service.get_by_id_or_slug(qid)
        if not problem:
            raise HTTPException(status_code=404, detail="Question not found")
        return {**problem, "QID": problem["_id"]}

    query = service.build_query(difficulty=difficulty, topic=topic, search=search)
    total, problems = service.list(query, page, limit)
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "questions": [summarize_problem(p) for p in problems]
    }


@router.post("/run", response_model=CodeRunResponse)
def run_code(request: CodeRunRequest, runner: CodeRunner = Depends(get_code_runner)):
    """
    Run code in python, c, cpp or java with optional stdin.

    Compile errors, runtime errors and timeouts come back as
    {"output": ..., "error": true} with status 200.
    """
    if not request.code:
        return JSONResponse(status_code=400, content={"output": "No code provided."})

    try:
        result = runner.run(request.language, request.code, request.input)
    except UnsupportedLanguageError:
        return JSONResponse(status_code=400, content={"output": "Unsupported language."})
    except OSError:
        logger.exception("Code execution failed", extra={"language": request.language})
        return JSONResponse(
            status_code=500,
            content={"output": "Internal Server Error during execution.", "error": True}
        )

    return result.to_dict()


@router.post("/submit", response_model=MessageResponse)
async def submit_attempt(data: DSAAttemptCreate):
    """Record an attempt (Solved or not) on the student's history."""
    attempt = build_attempt(data.qid, data.title, data.difficulty, data.status)
    if not StudentService().push_dsa_attempt(data.username, attempt):
        logger.warning("DSA attempt not saved: unknown student", extra={"username": data.username})
    return MessageResponse(message="Attempt recorded")


@router.get("/stats/{username}")
async def attempt_history(username: str):
    attempts = StudentService().get_dsa_attempts(username)
    if attempts is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return attempts


@router.get("/analytics/{username}")
async def analytics(username: str):
    """Solved counts, accuracy, difficulty split and the last 7 days of activity."""
    attempts = StudentService().get_dsa_attempts(username)
    if attempts is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return compute_analytics(attempts)


@router.post("/add", status_code=201)
async def add_problem(data: DSAProblemCreate):
    """Add a problem. Titles must be unique; the slug is derived from the title."""
    service = DSAProblemService()
    if service.exists(data.title):
        raise HTTPException(status_code=400, detail="Problem with this title already exists")

    problem = service.insert({**data.model_dump(), "titleSlug": slugify(data.title)})
    return {"message": "DSA Problem added successfully", "problem": problem}


@router.delete("/{problem_id}", response_model=MessageResponse)
async def delete_problem(problem_id: str):
    if not DSAProblemService().delete(problem_id):
        raise HTTPException(status_code=404, detail="Problem not found")
    return MessageResponse(message="Problem deleted successfully")
