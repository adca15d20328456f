from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from database import get_db
from repository import PatientRepository
import schemas
from typing import List, Optional

router = APIRouter(prefix= '/patients', tags=['Patients'])

@router.post("/", response_model= schemas.PatientOutput, status_code=201)
def create_patient(patient: schemas.PatientInput, db: Session = Depends(get_db)):
    return PatientRepository(db).create(**patient.model_dump())

@router.get("/", response_model= List[schemas.PatientOutput])
def get_patients(last_name: Optional[str] = Query(None), offset: int = Query(0, ge=0), limit: int = Query(100, ge=1, le=500), db: Session = Depends(get_db)):
    return PatientRepository(db).list(last_name=last_name, offset=offset, limit=limit)

@router.get("/{id}", response_model= schemas.PatientOutput)
def get_patient(id: int, db: Session = Depends(get_db)):
    return PatientRepository(db).get(id)

@router.patch("/{id}", response_model= schemas.PatientOutput)
def update_patient(id: int, patient: schemas.UpdatePatient, db: Session = Depends(get_db)):
    return PatientRepository(db).update(id, **patient.model_dump(exclude_unset=True))

@router.delete("/{id}")
def delete_patient(id: int, db: Session = Depends(get_db)):
    PatientRepository(db).delete(id)
    return {"Message": "Deleted successfully"}
