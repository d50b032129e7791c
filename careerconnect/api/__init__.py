"""
API module - FastAPI routers and error handlers.

Usage:
    from careerconnect.api.routes import core_router, api_router
    app.include_router(core_router)
    app.include_router(api_router, prefix="/api")
"""
