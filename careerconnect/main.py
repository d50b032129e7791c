"""
CareerConnect - Main Application

FastAPI backend with:
- MongoDB for every portal entity
- Groq LLM for ATS scans, quiz analysis, proctoring and coaching
- Cloudinary for uploaded media
- JWT authentication

Run: uvicorn careerconnect.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from careerconnect.api.error_handlers import register_error_handlers
from careerconnect.api.routes import api_router, core_router
from careerconnect.core.config import get_settings
from careerconnect.core.logging_config import setup_logging
from careerconnect.db.mongodb import init_mongo_indexes, test_mongo_connection

settings = get_settings()
setup_logging(settings.log_level, settings.log_format)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="CareerConnect",
    description="""
    Campus placement portal API.

    ## Features
    - **Accounts**: students, admins and companies with JWT login
    - **Announcements**: notices and placement drives
    - **Quiz**: aptitude tests with AI analysis and webcam proctoring
    - **DSA**: problem bank and code runner (python, c, cpp, java)
    - **ATS**: resume vs job description scoring
    - **Coaching**: mock interviews and communication practice
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(core_router)
app.include_router(api_router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
        logger.info("MongoDB indexes initialized")
    except PyMongoError as e:
        logger.warning("MongoDB index initialization failed: %s", e)


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "CareerConnect", "message": "API is running."}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected",
    }
