"""
FastAPI Application for the Medical Appointment Booking App.

Exposes the booking workflow's operations to the hosting UI as JSON endpoints.
The UI renders the returned state and calls back for every user action.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config import settings
from core.domain import PersistenceError, WorkflowClosed

from auth import (
    LoginRequest,
    LoginResponse,
    authenticate,
    create_session,
    delete_session,
    get_identity,
    get_session,
)

from use_cases.booking import BookingServer, BookingStep, BookingWorkflow

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Reduce Azure SDK logging verbosity
logging.getLogger("azure.cosmos").setLevel(logging.WARNING)
logging.getLogger("azure.core").setLevel(logging.WARNING)
logging.getLogger("azure.identity").setLevel(logging.WARNING)

# Global instances
server: Optional[BookingServer] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - handles startup and shutdown."""
    global server

    logger.info("Starting Medical Appointment Booking Application...")
    server = BookingServer.from_settings(settings)
    logger.info("Booking server initialized")

    yield

    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Medical Appointment Booking",
    description="Guided appointment booking: date, time, doctor, confirmation",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc"
)

# CORS middleware for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# REQUEST MODELS
# =============================================================================

class FieldsUpdate(BaseModel):
    """Form values sent by the UI; omitted fields are left unchanged."""
    date: Optional[str] = None
    time: Optional[str] = None
    doctor_id: Optional[str] = None


class JumpRequest(BaseModel):
    """Tab bar navigation target."""
    step: BookingStep


# =============================================================================
# HELPERS
# =============================================================================

def _get_token(request: Request) -> Optional[str]:
    """Read the auth token from the Authorization header, then the cookie."""
    auth_header = request.headers.get("Authorization", "")
    token = auth_header.replace("Bearer ", "") if auth_header.startswith("Bearer ") else None
    if not token:
        token = request.cookies.get("auth_token")
    return token


def _require_session(request: Request) -> Dict[str, Any]:
    session = get_session(_get_token(request))
    if not session:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return session


def _require_server() -> BookingServer:
    if server is None:
        raise HTTPException(status_code=503, detail="Server not initialized")
    return server


def _require_workflow(request: Request, workflow_id: str) -> BookingWorkflow:
    session = _require_session(request)
    workflow = _require_server().get_workflow(workflow_id, owner_id=session["user_id"])
    if workflow is None:
        raise HTTPException(status_code=404, detail="Workflow not found")
    return workflow


@app.exception_handler(WorkflowClosed)
async def workflow_closed_handler(request: Request, exc: WorkflowClosed):
    return JSONResponse(status_code=409, content={"detail": exc.message})


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    logger.error(f"Appointment store error: {exc.message}")
    return JSONResponse(status_code=503, content={"detail": "Appointment storage unavailable"})


# =============================================================================
# GENERAL ENDPOINTS
# =============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": "1.0.0",
        "use_case": "appointment_booking",
        "directory_backend": settings.directory_backend,
        "server_ready": server is not None,
    }


# =============================================================================
# AUTHENTICATION ENDPOINTS
# =============================================================================

@app.post("/api/auth/login")
async def login(request: LoginRequest):
    """
    Authenticate user with email and password.
    Returns a session token on success.
    """
    account = authenticate(request.email, request.password)
    if not account:
        return LoginResponse(
            success=False,
            message="Invalid email or password",
        )

    token = create_session(account)
    logger.info(f"User logged in: {account['email']}")

    return LoginResponse(
        success=True,
        message="Login successful",
        token=token,
        user={
            "id": account["id"],
            "name": account["name"],
            "email": account["email"],
            "role": account["role"],
        },
    )


@app.post("/api/auth/logout")
async def logout(request: Request):
    """
    Log out the current user by invalidating their session.
    """
    token = _get_token(request)
    if token and delete_session(token):
        return {"success": True, "message": "Logged out successfully"}
    return {"success": True, "message": "No active session"}


@app.get("/api/auth/me")
async def get_current_user(request: Request):
    """
    Get the current logged-in user's info.
    """
    session = get_session(_get_token(request))
    if not session:
        return {"authenticated": False, "user": None}

    return {
        "authenticated": True,
        "user": {
            "id": session["user_id"],
            "name": session["name"],
            "email": session["email"],
            "role": session["role"],
        }
    }


# =============================================================================
# BOOKING WORKFLOW ENDPOINTS
# =============================================================================

@app.post("/api/booking/workflows")
async def start_workflow(request: Request):
    """
    Start a booking workflow for the current user.
    Loads the doctor list before answering.
    """
    _require_session(request)
    identity = get_identity(_get_token(request))
    booking = _require_server()

    entry = booking.start_workflow(identity)
    await entry.value.initialize()

    return {"workflow_id": entry.session_id, "state": entry.value.snapshot()}


@app.get("/api/booking/workflows/{workflow_id}")
async def get_workflow_state(workflow_id: str, request: Request):
    """Current state of a workflow."""
    workflow = _require_workflow(request, workflow_id)
    return {"workflow_id": workflow_id, "state": workflow.snapshot()}


@app.put("/api/booking/workflows/{workflow_id}/fields")
async def update_fields(workflow_id: str, update: FieldsUpdate, request: Request):
    """Set form values without moving between steps."""
    workflow = _require_workflow(request, workflow_id)

    if update.date is not None:
        workflow.set_date(update.date)
    if update.time is not None:
        workflow.select_time(update.time)
    if update.doctor_id is not None:
        workflow.select_doctor_by_id(update.doctor_id)

    return {"workflow_id": workflow_id, "state": workflow.snapshot()}


@app.post("/api/booking/workflows/{workflow_id}/advance")
async def advance(workflow_id: str, request: Request):
    """Next button."""
    workflow = _require_workflow(request, workflow_id)
    moved = workflow.advance()
    return {"workflow_id": workflow_id, "moved": moved, "state": workflow.snapshot()}


@app.post("/api/booking/workflows/{workflow_id}/retreat")
async def retreat(workflow_id: str, request: Request):
    """Back button."""
    workflow = _require_workflow(request, workflow_id)
    moved = workflow.retreat()
    return {"workflow_id": workflow_id, "moved": moved, "state": workflow.snapshot()}


@app.post("/api/booking/workflows/{workflow_id}/jump")
async def jump(workflow_id: str, target: JumpRequest, request: Request):
    """Tab bar navigation."""
    workflow = _require_workflow(request, workflow_id)
    workflow.jump_to(target.step)
    return {"workflow_id": workflow_id, "moved": True, "state": workflow.snapshot()}


@app.post("/api/booking/workflows/{workflow_id}/submit")
async def submit(workflow_id: str, request: Request):
    """
    Book the appointment.
    On success the workflow is closed and the UI should navigate back.
    """
    workflow = _require_workflow(request, workflow_id)
    appointment = await workflow.submit()

    return {
        "workflow_id": workflow_id,
        "booked": appointment is not None,
        "appointment": appointment.model_dump(mode="json", by_alias=True) if appointment else None,
        "state": workflow.snapshot(),
    }


@app.post("/api/booking/workflows/{workflow_id}/cancel")
async def cancel(workflow_id: str, request: Request):
    """Cancel button - abandon the flow."""
    workflow = _require_workflow(request, workflow_id)
    cancelled = workflow.cancel()
    return {"workflow_id": workflow_id, "cancelled": cancelled}


# =============================================================================
# APPOINTMENT ENDPOINTS
# =============================================================================

@app.get("/api/appointments")
async def list_appointments(request: Request):
    """
    List appointments.
    Admins see every appointment; everyone else sees their own.
    """
    session = _require_session(request)
    booking = _require_server()

    patient_id = None if session["role"] == "admin" else session["user_id"]
    appointments = await booking.list_appointments(patient_id)

    return {
        "appointments": [a.model_dump(mode="json", by_alias=True) for a in appointments],
        "count": len(appointments),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=False,
        log_level=settings.log_level.lower()
    )
