"""
Communication Routes (mounted under /api)

POST /communication/chat - One coaching turn (voice, chat or scenario mode)
POST /communication/scenario-start - Opening line for a roleplay
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from careerconnect.services.communication_service import CommunicationCoach
from careerconnect.services.groq_client import GroqClient, LLM_ERRORS, get_groq_client
from careerconnect.schemas.schemas import ChatRequest, ScenarioStartRequest, ReplyResponse

router = APIRouter(prefix="/communication", tags=["Communication"])
logger = logging.getLogger(__name__)


@router.post("/chat", response_model=ReplyResponse)
def chat(request: ChatRequest, llm: GroqClient = Depends(get_groq_client)):
    try:
        history = [m.model_dump() for m in request.history]
        reply = CommunicationCoach(llm).reply(request.message, request.mode, history)
    except LLM_ERRORS as e:
        logger.exception("Communication chat failed")
        return JSONResponse(status_code=500, content={"message": "Failed to generate response", "error": str(e)})
    return ReplyResponse(reply=reply)


@router.post("/scenario-start", response_model=ReplyResponse)
def scenario_start(request: ScenarioStartRequest, llm: GroqClient = Depends(get_groq_client)):
    try:
        reply = CommunicationCoach(llm).open_scenario(request.scenario)
    except LLM_ERRORS as e:
        logger.exception("Scenario start failed")
        return JSONResponse(status_code=500, content={"message": "Failed to start scenario", "error": str(e)})
    return ReplyResponse(reply=reply)
