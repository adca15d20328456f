from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from database import get_db
from repository import DoctorRepository
from config import settings
import schemas
from typing import List, Optional

router = APIRouter(prefix= '/doctors',tags=['Doctors'])

def doctors(db: Session = Depends(get_db)):
    return DoctorRepository(db, prevent_cycles=settings.prevent_supervision_cycles, max_depth=settings.supervision_max_depth)

@router.post("/", response_model= schemas.DoctorOutput, status_code=201)
def create_doctor(doctor: schemas.DoctorInput, repo: DoctorRepository = Depends(doctors)):
    return repo.create(**doctor.model_dump())

@router.get("/", response_model= List[schemas.DoctorOutput])
def get_doctors(specialization: Optional[str] = Query(None), supervisor_id: Optional[int] = Query(None),
                offset: int = Query(0, ge=0), limit: int = Query(100, ge=1, le=500), repo: DoctorRepository = Depends(doctors)):
    return repo.list(specialization=specialization, supervisor_id=supervisor_id, offset=offset, limit=limit)

@router.get("/{id}", response_model= schemas.DoctorOutput)
def get_doctor(id: int, repo: DoctorRepository = Depends(doctors)):
    return repo.get(id)

@router.get("/{id}/supervisors", response_model= List[schemas.DoctorOutput])
def get_supervisors(id: int, repo: DoctorRepository = Depends(doctors)):
    return repo.supervision_chain(id)

@router.patch("/{id}", response_model= schemas.DoctorOutput)
def update_doctor(id: int, doctor: schemas.UpdateDoctor, repo: DoctorRepository = Depends(doctors)):
    return repo.update(id, **doctor.model_dump(exclude_unset=True))

@router.delete("/{id}")
def delete_doctor(id: int, repo: DoctorRepository = Depends(doctors)):
    repo.delete(id)
    return {"Message": "Deleted successfully"}
