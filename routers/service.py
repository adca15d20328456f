from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from database import get_db
from repository import MedicalServiceRepository
import schemas
from typing import List, Optional

router = APIRouter(prefix= '/services', tags=['Medical services'])

@router.post("/", response_model= schemas.ServiceOutput, status_code=201)
def create_service(service: schemas.ServiceInput, db: Session = Depends(get_db)):
    return MedicalServiceRepository(db).create(**service.model_dump())

@router.get("/", response_model= List[schemas.ServiceOutput])
def get_services(name: Optional[str] = Query(None), offset: int = Query(0, ge=0), limit: int = Query(100, ge=1, le=500), db: Session = Depends(get_db)):
    return MedicalServiceRepository(db).list(name=name, offset=offset, limit=limit)

@router.get("/{id}", response_model= schemas.ServiceOutput)
def get_service(id: int, db: Session = Depends(get_db)):
    return MedicalServiceRepository(db).get(id)

@router.patch("/{id}", response_model= schemas.ServiceOutput)
def update_service(id: int, service: schemas.UpdateService, db: Session = Depends(get_db)):
    return MedicalServiceRepository(db).update(id, **service.model_dump(exclude_unset=True))

@router.delete("/{id}")
def delete_service(id: int, db: Session = Depends(get_db)):
    MedicalServiceRepository(db).delete(id)
    return {"Message": "Deleted successfully"}
