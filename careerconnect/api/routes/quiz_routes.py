"""
Quiz Routes (mounted under /api)

GET /quiz/questions - Student quiz (10 random, no answers) or admin listing
POST /quiz/add - Add question
DELETE /quiz/{id} - Delete question
POST /quiz/submit - Grade answers and save attempt
GET /quiz/stats/{username} - Attempt statistics
POST /quiz/analyze-ai - AI performance report
POST /quiz/proctor - AI check of one webcam frame
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, Query
from fastapi.responses import JSONResponse

from careerconnect.services.groq_client import GroqClient, LLM_ERRORS, get_groq_client
from careerconnect.services.media_storage import MediaStorage, MediaUploadError, get_media_storage
from careerconnect.services.mongo_service import QuizQuestionService, StudentService
from careerconnect.services.quiz_service import (
    QuizCoach, MISSING_KEY_ANALYSIS, build_attempt, compute_stats,
    failed_analysis_markdown, grade_submission, pick_student_quiz
)
from careerconnect.schemas.schemas import (
    QuizQuestionCreate, QuizSubmission, QuizAnalysisRequest, ProctorFrameRequest,
    QuizStatsResponse, MessageResponse
)

router = APIRouter(prefix="/quiz", tags=["Quiz"])
logger = logging.getLogger(__name__)


@router.get("/stats/{username}", response_model=QuizStatsResponse)
async def quiz_stats(username: str):
    """Number of tests, best and average score (percent)."""
    attempts = StudentService().get_quiz_attempts(username)
    if attempts is None:
        raise HTTPException(status_code=404, detail="Student not found")
    return compute_stats(attempts)


@router.post("/analyze-ai")
def analyze_ai(request: QuizAnalysisRequest, llm: GroqClient = Depends(get_groq_client)):
    """
    Ask the LLM for a mentor-style report on a finished quiz.

    `analysis` is the model's JSON text; on failure it is a markdown
    explanation the client can render as-is.
    """
    if not llm.is_configured:
        logger.error("GROQ_API_KEY is missing")
        return JSONResponse(status_code=500, content={"analysis": MISSING_KEY_ANALYSIS})

    try:
        results = [r.model_dump() for r in request.results]
        analysis = QuizCoach(llm).analyze(results, request.score, request.total)
    except LLM_ERRORS as e:
        logger.exception("AI analysis failed")
        return JSONResponse(status_code=500, content={
            "message": "Error generating analysis",
            "error": str(e),
            "analysis": failed_analysis_markdown(e)
        })

    return {"analysis": analysis}


@router.get("/questions")
async def get_questions(
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    admin: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100)
):
    """
    Admin view (admin=true or any search): paginated questions with answers.
    Student view: up to 10 random questions, answers removed.
    """
    service = QuizQuestionService()
    query = service.build_query(category=category, search=search)

    if admin == "true" or search:
        return service.paginate(query, page, limit)

    return pick_student_quiz(service.find(query))


@router.post("/add", status_code=201)
async def add_question(data: QuizQuestionCreate):
    """Add a question. question_text must be unique."""
    service = QuizQuestionService()
    if service.exists(data.question_text):
        raise HTTPException(status_code=400, detail="Question already exists")

    question = service.insert(data.model_dump())
    return {"message": "Question added successfully", "question": question}


@router.delete("/{question_id}", response_model=MessageResponse)
async def delete_question(question_id: str):
    if not QuizQuestionService().delete(question_id):
        raise HTTPException(status_code=404, detail="Question not found")
    return MessageResponse(message="Question deleted successfully")


@router.post("/submit")
async def submit_quiz(submission: QuizSubmission):
    """
    Grade a quiz and append the attempt (with its proctoring log) to the student.
    """
    questions = QuizQuestionService().find_by_ids(list(submission.answers.keys()))
    score, total, results = grade_submission(submission.answers, questions)

    attempt = build_attempt(
        submission.category, score, total,
        [entry.model_dump() for entry in submission.proctoringLog]
    )
    if not StudentService().push_quiz_attempt(submission.username, attempt):
        logger.warning("Quiz attempt not saved: unknown student", extra={"username": submission.username})

    return {
        "score": score,
        "total": total,
        "message": f"You scored {score} out of {total}",
        "results": results
    }


@router.post("/proctor")
def proctor_frame(
    request: ProctorFrameRequest,
    llm: GroqClient = Depends(get_groq_client),
    storage: MediaStorage = Depends(get_media_storage)
):
    """
    Check one webcam frame (data URL). Suspicious frames are uploaded
    as evidence and returned with snapshotUrl.
    """
    if not llm.is_configured:
        raise HTTPException(status_code=500, detail="Groq key missing")

    try:
        result = QuizCoach(llm).inspect_frame(request.imageBase64)
    except LLM_ERRORS as e:
        logger.exception("Proctoring check failed")
        return JSONResponse(status_code=500, content={"isSuspicious": False, "error": str(e)})

    if result["isSuspicious"]:
        try:
            result["snapshotUrl"] = storage.upload_snapshot(request.imageBase64)
        except MediaUploadError:
            logger.warning("Proctoring snapshot upload failed; returning verdict without evidence")

    return result
