from fastapi import FastAPI

from . import config
from .logger import setup_logging
from .routes import schedule

setup_logging(config.LOG_LEVEL, config.LOG_FILE)

# Create FastAPI app
app = FastAPI(
    title="Prep Scheduler API",
    description="Finds preparation time before the meetings of a day",
    version="1.0.0"
)

# Include routers
app.include_router(schedule.router, prefix="/schedule", tags=["schedule"])

@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": "Welcome to Prep Scheduler API",
        "version": "1.0.0",
        "endpoints": {
            "schedule": "POST /schedule/preparation - Schedule preparation slots for one day",
            "analysis": "POST /schedule/preparation/analysis - Schedule from a meeting analysis response",
            "batch": "POST /schedule/preparation/batch - Schedule several days through Celery"
        },
        "swagger_ui": "/docs - Interactive API documentation",
        "redoc": "/redoc - Alternative API documentation"
    }

@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}

# This allows running the app directly with: python -m prep_scheduler.main
if __name__ == "__main__":
    import uvicorn
    print("🚀 Starting Prep Scheduler API...")
    print("📖 API Documentation: http://localhost:8000/docs")
    uvicorn.run("prep_scheduler.main:app", host="0.0.0.0", port=8000, reload=True)
