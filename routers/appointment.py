from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from database import get_db
from repository import AppointmentRepository, AppointmentServiceRepository
from config import settings
import schemas
from datetime import datetime
from typing import List, Optional

router = APIRouter(prefix= "/appointments", tags=['Appointments'])

def appointments(db: Session = Depends(get_db)):
    return AppointmentRepository(db, enforce_transitions=settings.enforce_status_transitions)

@router.post("/", response_model= schemas.AppointmentOutput, status_code=201)
def post_appointment(appointment: schemas.AppointmentInput, repo: AppointmentRepository = Depends(appointments)):
    return repo.create(**appointment.model_dump())

@router.get("/", response_model= List[schemas.AppointmentOutput])
def get_appointments(patient_id: Optional[int] = Query(None), doctor_id: Optional[int] = Query(None),
                     status: Optional[schemas.AppointmentStatus] = Query(None),
                     date_from: Optional[datetime] = Query(None), date_to: Optional[datetime] = Query(None),
                     offset: int = Query(0, ge=0), limit: int = Query(100, ge=1, le=500),
                     repo: AppointmentRepository = Depends(appointments)):
    return repo.list(patient_id=patient_id, doctor_id=doctor_id, status=status,
                     date_from=date_from, date_to=date_to, offset=offset, limit=limit)

@router.get("/{id}", response_model= schemas.AppointmentOutput)
def get_appointment(id: int, repo: AppointmentRepository = Depends(appointments)):
    return repo.get(id)

@router.patch("/{id}", response_model= schemas.AppointmentOutput)
def update_appointment(id: int, appointment: schemas.AppointmentUpdate, repo: AppointmentRepository = Depends(appointments)):
    return repo.update(id, **appointment.model_dump(exclude_unset=True))

@router.delete("/{id}")
def delete_appointment(id: int, repo: AppointmentRepository = Depends(appointments)):
    repo.delete(id)
    return {"Message": "Deleted successfully"}

@router.get("/{id}/services", response_model= List[schemas.AppointmentServiceOutput])
def get_appointment_services(id: int, db: Session = Depends(get_db)):
    AppointmentRepository(db).get(id)
    return AppointmentServiceRepository(db).list(appointment_id=id)

@router.post("/{id}/services", response_model= schemas.AppointmentServiceOutput, status_code=201)
def add_appointment_service(id: int, link: schemas.AppointmentServiceInput, db: Session = Depends(get_db)):
    AppointmentRepository(db).get(id)
    return AppointmentServiceRepository(db).add(id, link.service_id, link.quantity)

@router.patch("/{id}/services/{service_id}", response_model= schemas.AppointmentServiceOutput)
def update_appointment_service(id: int, service_id: int, link: schemas.AppointmentServiceUpdate, db: Session = Depends(get_db)):
    return AppointmentServiceRepository(db).set_quantity(id, service_id, link.quantity)

@router.delete("/{id}/services/{service_id}")
def remove_appointment_service(id: int, service_id: int, db: Session = Depends(get_db)):
    AppointmentServiceRepository(db).remove(id, service_id)
    return {"Message": "Deleted successfully"}
