from database import Base
from datetime import timezone
from sqlalchemy import Column, Integer, String, Text, ForeignKey, Date, DateTime, Enum, DECIMAL, Index, UniqueConstraint, func
from sqlalchemy.orm import relationship
from sqlalchemy.sql.sqltypes import TIMESTAMP

GENDERS = ("Male", "Female", "Other")
APPOINTMENT_STATUSES = ("Scheduled", "Confirmed", "Cancelled", "Completed")
DEFAULT_STATUS = "Scheduled"


def naive_utc(value):
    """AppointmentDate is a naive DATETIME; aware values are stored as UTC wall time."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)

# Parent-side collections use passive_deletes="all" so the ORM never nulls out
# child foreign keys; deleting a referenced row is left to fail in the database.

class Patient(Base):
    __tablename__ = 'Patients'
    patient_id = Column("PatientID", Integer, primary_key= True, autoincrement= True)
    first_name = Column("FirstName", String(255), nullable= False)
    last_name = Column("LastName", String(255), nullable= False)
    date_of_birth = Column("DateOfBirth", Date, nullable= False)
    gender = Column("Gender", Enum(*GENDERS, name = "patient_gender", create_constraint = True), nullable=False)
    contact_number = Column("ContactNumber", String(20), nullable= False, unique= True)
    email = Column("Email", String(255), unique= True)
    address = Column("Address", String(255))
    registration_date = Column("RegistrationDate", TIMESTAMP, server_default= func.current_timestamp())

    appointments = relationship("Appointment", back_populates="patient", passive_deletes="all")

    __table_args__ = (Index("idx_LastName", "LastName"),)

class Doctor(Base):
    __tablename__ = 'Doctors'
    doctor_id = Column("DoctorID", Integer, primary_key= True, autoincrement= True)
    first_name = Column("FirstName", String(255), nullable= False)
    last_name = Column("LastName", String(255), nullable= False)
    specialization = Column("Specialization", String(255), nullable= False)
    email = Column("Email", String(255), unique= True)
    contact_number = Column("ContactNumber", String(20), unique= True)
    room_number = Column("RoomNumber", String(10))
    hire_date = Column("HireDate", Date)
    supervisor_id = Column("SupervisorID", Integer, ForeignKey('Doctors.DoctorID'))

    supervisor = relationship("Doctor", remote_side=[doctor_id], back_populates="supervisees")
    supervisees = relationship("Doctor", back_populates="supervisor", passive_deletes="all")
    appointments = relationship("Appointment", back_populates="doctor", passive_deletes="all")

    __table_args__ = (Index("idx_Specialization", "Specialization"),)

class Appointment(Base):
    __tablename__ = 'Appointments'
    appointment_id = Column("AppointmentID", Integer, primary_key= True, autoincrement= True)
    patient_id = Column("PatientID", Integer, ForeignKey('Patients.PatientID'), nullable= False)
    doctor_id = Column("DoctorID", Integer, ForeignKey('Doctors.DoctorID'), nullable= False)
    appointment_date = Column("AppointmentDate", DateTime, nullable= False)
    reason = Column("Reason", String(255), nullable= False)
    status = Column("Status", Enum(*APPOINTMENT_STATUSES, name="appointment_status", create_constraint=True),
                    nullable=False, default=DEFAULT_STATUS, server_default=DEFAULT_STATUS)
    notes = Column("Notes", Text)

    patient = relationship("Patient", back_populates="appointments")
    doctor = relationship("Doctor", back_populates="appointments")
    services = relationship("AppointmentService", back_populates="appointment", passive_deletes="all")

    __table_args__ = (
        UniqueConstraint("DoctorID", "AppointmentDate", name="uq_doctor_appointment_date"),
        Index("idx_AppointmentDate", "AppointmentDate"),
    )

class MedicalService(Base):
    __tablename__ = 'MedicalServices'
    service_id = Column("ServiceID", Integer, primary_key= True, autoincrement= True)
    service_name = Column("ServiceName", String(255), nullable= False, unique= True)
    description = Column("Description", Text)
    cost = Column("Cost", DECIMAL(10, 2), nullable= False)

    appointment_links = relationship("AppointmentService", back_populates="service", passive_deletes="all")

    __table_args__ = (Index("idx_ServiceName", "ServiceName"),)

class AppointmentService(Base):
    __tablename__ = 'AppointmentServices'
    appointment_id = Column("AppointmentID", Integer, ForeignKey('Appointments.AppointmentID'), primary_key= True)
    service_id = Column("ServiceID", Integer, ForeignKey('MedicalServices.ServiceID'), primary_key= True)
    quantity = Column("Quantity", Integer, nullable= False, default= 1, server_default= "1")

    appointment = relationship("Appointment", back_populates="services")
    service = relationship("MedicalService", back_populates="appointment_links")
