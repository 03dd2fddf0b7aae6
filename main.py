import logging
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.config.settings import settings
from app.routers import (
    auth, user, organizations, organization_staff, organization_goals,
    goal_subtasks, corporate_tasks, project, entity_links, deadlines,
)
from app.models.user import User
from app.services.scheduler import deadline_scheduler
from app.utils.auth import require_platform_admin

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Organization Workspace API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})

# Route registration
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(user.router, prefix="/users", tags=["Users"])
app.include_router(organizations.router, prefix="/organizations", tags=["Organizations"])
app.include_router(organization_staff.router, prefix="/organization-staff", tags=["Organization Staff"])
app.include_router(organization_goals.router, prefix="/organization-goals", tags=["Goals"])
app.include_router(goal_subtasks.router, prefix="/goal-subtasks", tags=["Goals"])
app.include_router(corporate_tasks.router, tags=["Corporate Tasks"])
app.include_router(project.router, prefix="/projects", tags=["Projects"])
app.include_router(entity_links.router, prefix="/entity-links", tags=["Entity Links"])
app.include_router(deadlines.router, tags=["Deadlines"])

# Startup and shutdown events
@app.on_event("startup")
async def startup_event():
    logger.info("Starting Organization Workspace API...")
    if settings.SCHEDULER["enabled"]:
        deadline_scheduler.start()

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down Organization Workspace API...")
    deadline_scheduler.stop()

# Root route
@app.get("/")
def read_root():
    return {"message": "Organization Workspace API"}

@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/scheduler/status")
def get_scheduler_status():
    """Get scheduler status and job information"""
    return deadline_scheduler.get_status()

@app.post("/scheduler/trigger/overdue")
async def trigger_overdue_check(current_user: User = Depends(require_platform_admin)):
    """Manually trigger the overdue sweep - platform admins only"""
    result = await deadline_scheduler.check_overdue()
    return {"message": "Overdue check triggered successfully", "result": result}
