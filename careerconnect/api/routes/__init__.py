"""
API Routes - Combines all route modules.

core_router: portal routes served at the root path
api_router: practice and coaching features, mounted under /api
"""

from fastapi import APIRouter

from careerconnect.api.routes.auth_routes import router as auth_router
from careerconnect.api.routes.student_routes import router as student_router
from careerconnect.api.routes.admin_routes import router as admin_router
from careerconnect.api.routes.company_routes import router as company_router
from careerconnect.api.routes.announcement_routes import router as announcement_router
from careerconnect.api.routes.quiz_routes import router as quiz_router
from careerconnect.api.routes.dsa_routes import router as dsa_router
from careerconnect.api.routes.ats_routes import router as ats_router
from careerconnect.api.routes.interview_routes import router as interview_router
from careerconnect.api.routes.communication_routes import router as communication_router

core_router = APIRouter()

core_router.include_router(auth_router)
core_router.include_router(student_router)
core_router.include_router(admin_router)
core_router.include_router(company_router)
core_router.include_router(announcement_router)

api_router = APIRouter()

api_router.include_router(quiz_router)
api_router.include_router(dsa_router)
api_router.include_router(ats_router)
api_router.include_router(interview_router)
api_router.include_router(communication_router)
