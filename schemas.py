from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator
from typing import Optional, Literal
from datetime import date, datetime
from decimal import Decimal
from models import naive_utc

Gender = Literal['Male', 'Female', 'Other']
AppointmentStatus = Literal['Scheduled', 'Confirmed', 'Cancelled', 'Completed']


class OrmOutput(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class PatientInput(BaseModel):
    first_name: str = Field(max_length=255)
    last_name: str = Field(max_length=255)
    date_of_birth: date
    gender: Gender
    contact_number: str = Field(max_length=20)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(None, max_length=255)

class UpdatePatient(BaseModel):
    first_name: Optional[str] = Field(None, max_length=255)
    last_name: Optional[str] = Field(None, max_length=255)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    contact_number: Optional[str] = Field(None, max_length=20)
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(None, max_length=255)

class PatientOutput(OrmOutput):
    patient_id: int
    first_name: str
    last_name: str
    date_of_birth: date
    gender: str
    contact_number: str
    email: Optional[str] = None
    address: Optional[str] = None
    registration_date: Optional[datetime] = None


class DoctorInput(BaseModel):
    first_name: str = Field(max_length=255)
    last_name: str = Field(max_length=255)
    specialization: str = Field(max_length=255)
    email: Optional[EmailStr] = None
    contact_number: Optional[str] = Field(None, max_length=20)
    room_number: Optional[str] = Field(None, max_length=10)
    hire_date: Optional[date] = None
    supervisor_id: Optional[int] = None

class UpdateDoctor(BaseModel):
    first_name: Optional[str] = Field(None, max_length=255)
    last_name: Optional[str] = Field(None, max_length=255)
    specialization: Optional[str] = Field(None, max_length=255)
    email: Optional[EmailStr] = None
    contact_number: Optional[str] = Field(None, max_length=20)
    room_number: Optional[str] = Field(None, max_length=10)
    hire_date: Optional[date] = None
    supervisor_id: Optional[int] = None

class DoctorOutput(OrmOutput):
    doctor_id: int
    first_name: str
    last_name: str
    specialization: str
    email: Optional[str] = None
    contact_number: Optional[str] = None
    room_number: Optional[str] = None
    hire_date: Optional[date] = None
    supervisor_id: Optional[int] = None


class AppointmentInput(BaseModel):
    patient_id: int
    doctor_id: int
    appointment_date: datetime
    reason: str = Field(max_length=255)
    status: AppointmentStatus = "Scheduled"
    notes: Optional[str] = None

    @field_validator("appointment_date")
    @classmethod
    def appointment_date_as_utc(cls, value):
        return naive_utc(value)

class AppointmentUpdate(BaseModel):
    patient_id: Optional[int] = None
    doctor_id: Optional[int] = None
    appointment_date: Optional[datetime] = None
    reason: Optional[str] = Field(None, max_length=255)
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None

    @field_validator("appointment_date")
    @classmethod
    def appointment_date_as_utc(cls, value):
        return naive_utc(value)

class AppointmentOutput(OrmOutput):
    appointment_id: int
    patient_id: int
    doctor_id: int
    appointment_date: datetime
    reason: str
    status: str
    notes: Optional[str] = None


class ServiceInput(BaseModel):
    service_name: str = Field(max_length=255)
    description: Optional[str] = None
    cost: Decimal = Field(ge=0, max_digits=10, decimal_places=2)

class UpdateService(BaseModel):
    service_name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    cost: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)

class ServiceOutput(OrmOutput):
    service_id: int
    service_name: str
    description: Optional[str] = None
    cost: Decimal


class AppointmentServiceInput(BaseModel):
    service_id: int
    quantity: int = Field(1, ge=1)

class AppointmentServiceUpdate(BaseModel):
    quantity: int = Field(ge=1)

class AppointmentServiceOutput(OrmOutput):
    appointment_id: int
    service_id: int
    quantity: int
