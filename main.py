import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from config import settings
from database import engine, Base
from errors import ClinicError, DomainViolation, RequiredFieldViolation
from routers import patient, doctor, appointment, service
import models

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    yield
    engine.dispose()


app = FastAPI(title="Clinic Booking System", lifespan=lifespan)


@app.exception_handler(ClinicError)
async def clinic_error_handler(request: Request, exc: ClinicError):
    logger.warning(f"{type(exc).__name__} {exc.status_code}: {exc.message} - {request.url}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": type(exc).__name__,
            "detail": exc.message,
        }
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = exc.errors()
    # a request that only omits fields is a required-field error; anything else is out of domain
    error_cls = RequiredFieldViolation if all(p["type"] == "missing" for p in problems) else DomainViolation
    fields = ", ".join(".".join(str(part) for part in p["loc"]) for p in problems)
    logger.warning(f"{error_cls.__name__} 422: {fields} - {request.url}")
    return JSONResponse(
        status_code=422,
        content={
            "error": error_cls.__name__,
            "detail": f"Invalid request fields: {fields}",
            "errors": jsonable_encoder(problems),
        }
    )


app.include_router(patient.router)
app.include_router(doctor.router)
app.include_router(appointment.router)
app.include_router(service.router)
