"""
Interview Routes (mounted under /api)

POST /interview/questions - Generate interview questions
POST /interview/feedback - Rate one answer
POST /interview/analyze-session - Verdict for a full session
"""

import logging

from fastapi import APIRouter, HTTPException, Depends
from fastapi.responses import JSONResponse

from careerconnect.services.groq_client import GroqClient, LLM_ERRORS, get_groq_client
from careerconnect.services.interview_service import InterviewCoach
from careerconnect.schemas.schemas import (
    InterviewQuestionsRequest, AnswerFeedbackRequest, SessionAnalysisRequest
)

router = APIRouter(prefix="/interview", tags=["Interview"])
logger = logging.getLogger(__name__)


def _failure(message: str, error: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"message": message, "error": str(error)})


@router.post("/questions")
def generate_questions(request: InterviewQuestionsRequest, llm: GroqClient = Depends(get_groq_client)):
    """
    10 technical questions, or 5 scenario questions when scenarioBased and topic are set.
    """
    if not request.jobRole or not request.techStack:
        raise HTTPException(status_code=400, detail="Job Role and Tech Stack are required")

    try:
        questions = InterviewCoach(llm).generate_questions(
            request.jobRole, request.techStack, request.experience,
            topic=request.topic, scenario_based=request.scenarioBased
        )
    except LLM_ERRORS as e:
        logger.exception("Question generation failed")
        return _failure("Failed to generate questions", e)

    return {"questions": questions}


@router.post("/feedback")
def answer_feedback(request: AnswerFeedbackRequest, llm: GroqClient = Depends(get_groq_client)):
    """Returns {rating, feedback, ideal_answer}."""
    try:
        return InterviewCoach(llm).evaluate_answer(request.question, request.answer)
    except LLM_ERRORS as e:
        logger.exception("Answer feedback failed")
        return _failure("Failed to generate feedback", e)


@router.post("/analyze-session")
def analyze_session(request: SessionAnalysisRequest, llm: GroqClient = Depends(get_groq_client)):
    """
    Returns {overallScore, verdict, summary, strengths, areasForImprovement, recommendedResources}.
    """
    if not isinstance(request.history, list):
        raise HTTPException(status_code=400, detail="Invalid history data")

    try:
        return InterviewCoach(llm).analyze_session(request.history)
    except LLM_ERRORS as e:
        logger.exception("Session analysis failed")
        return _failure("Failed to analyze session", e)
