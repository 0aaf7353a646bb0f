import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shiftdesk.core.config import settings
from shiftdesk.core.errors import InvalidInput, ServiceError, describe_errors
from shiftdesk.routers import clients, reference, shifts, staff_members

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
log = logging.getLogger("shiftdesk")

app = FastAPI(title="ShiftDesk API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(shifts.router)
app.include_router(clients.router)
app.include_router(staff_members.router)
app.include_router(reference.router)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        log.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=InvalidInput.status_code, content={"detail": describe_errors(exc.errors())})


@app.get("/health")
def health():
    return {"status": "ok"}
