"""One gateway per table.

Every write is flushed and committed on its own, so the database checks
uniqueness, NOT NULL, enum and foreign-key constraints at the write boundary.
Engine errors are rolled back and re-raised as ``errors.ClinicError``.
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, DataError
from sqlalchemy.orm import Session

import errors
import models

logger = logging.getLogger(__name__)

STATUS_TRANSITIONS = {
    "Scheduled": {"Confirmed", "Cancelled"},
    "Confirmed": {"Completed", "Cancelled"},
    "Cancelled": set(),
    "Completed": set(),
}


class Repository:
    model = None
    entity = None
    identity = ()

    def __init__(self, db: Session):
        self.db = db

    def find(self, *key):
        return self.db.get(self.model, key[0] if len(key) == 1 else key)

    def get(self, *key):
        row = self.find(*key)
        if row is None:
            raise errors.NotFound(f"{self.entity} {'/'.join(str(k) for k in key)} not found")
        return row

    def list(self, offset: int = 0, limit: Optional[int] = None):
        return self._page(self.db.query(self.model), offset, limit)

    def create(self, **fields):
        row = self.model(**fields)
        self.db.add(row)
        self._commit("create", row)
        return row

    def update(self, key, **fields):
        row = self.get(*self._key(key))
        for name in fields:
            if name in self.identity:
                raise errors.ClinicError(f"{self.entity} identity field '{name}' cannot be changed")
        for name, value in fields.items():
            setattr(row, name, value)
        self._commit("update", row)
        return row

    def delete(self, key):
        row = self.get(*self._key(key))
        self.db.delete(row)
        self._commit("delete", row)

    def _key(self, key):
        return key if isinstance(key, tuple) else (key,)

    def _page(self, query, offset, limit):
        query = query.order_by(*[getattr(self.model, name) for name in self.identity])
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def _commit(self, action, row):
        # a deleted row is detached after commit, so describe it first
        label = self._describe(row) if action == "delete" else None
        try:
            self.db.flush()
            self.db.commit()
        except (IntegrityError, DataError) as exc:
            self.db.rollback()
            error = errors.translate(exc, self.entity)
            logger.warning("%s %s rejected: %s (%s)", self.entity, action, error.message, exc.orig)
            raise error from exc
        if action != "delete":
            self.db.refresh(row)
            label = self._describe(row)
        logger.info("%s %s: %s", self.entity, action, label)

    def _describe(self, row):
        return ", ".join(f"{name}={getattr(row, name)}" for name in self.identity)


class PatientRepository(Repository):
    model = models.Patient
    entity = "Patient"
    identity = ("patient_id",)

    def list(self, last_name: Optional[str] = None, offset: int = 0, limit: Optional[int] = None):
        query = self.db.query(models.Patient)
        if last_name is not None:
            query = query.filter(models.Patient.last_name == last_name)
        return self._page(query, offset, limit)

    def find_by_contact_number(self, contact_number: str):
        return self.db.query(models.Patient).filter(models.Patient.contact_number == contact_number).one_or_none()


class DoctorRepository(Repository):
    model = models.Doctor
    entity = "Doctor"
    identity = ("doctor_id",)

    def __init__(self, db: Session, prevent_cycles: bool = False, max_depth: int = 64):
        super().__init__(db)
        self.prevent_cycles = prevent_cycles
        self.max_depth = max_depth

    def list(self, specialization: Optional[str] = None, supervisor_id: Optional[int] = None,
             offset: int = 0, limit: Optional[int] = None):
        query = self.db.query(models.Doctor)
        if specialization is not None:
            query = query.filter(models.Doctor.specialization == specialization)
        if supervisor_id is not None:
            query = query.filter(models.Doctor.supervisor_id == supervisor_id)
        return self._page(query, offset, limit)

    def supervision_chain(self, doctor_id: int) -> List[models.Doctor]:
        """Supervisors of a doctor, nearest first. Stops when a doctor repeats."""
        chain = []
        seen = {doctor_id}
        current = self.get(doctor_id).supervisor_id
        while current is not None and current not in seen and len(chain) < self.max_depth:
            supervisor = self.find(current)
            if supervisor is None:
                break
            chain.append(supervisor)
            seen.add(current)
            current = supervisor.supervisor_id
        return chain

    def update(self, key, **fields):
        if self.prevent_cycles and fields.get("supervisor_id") is not None:
            self._check_supervisor(key, fields["supervisor_id"])
        return super().update(key, **fields)

    def _check_supervisor(self, doctor_id, supervisor_id):
        current = supervisor_id
        depth = 0
        while current is not None:
            if current == doctor_id:
                raise errors.SupervisionCycle(
                    f"Doctor {supervisor_id} is supervised by doctor {doctor_id}, directly or transitively",
                    {"doctor_id": doctor_id, "supervisor_id": supervisor_id})
            depth += 1
            if depth > self.max_depth:
                raise errors.SupervisionCycle(
                    f"Supervision chain above doctor {supervisor_id} is deeper than {self.max_depth}",
                    {"doctor_id": doctor_id, "supervisor_id": supervisor_id})
            supervisor = self.find(current)
            # unknown ids are left for the foreign key to reject
            current = supervisor.supervisor_id if supervisor is not None else None


class AppointmentRepository(Repository):
    model = models.Appointment
    entity = "Appointment"
    identity = ("appointment_id",)

    def __init__(self, db: Session, enforce_transitions: bool = False):
        super().__init__(db)
        self.enforce_transitions = enforce_transitions

    def list(self, patient_id: Optional[int] = None, doctor_id: Optional[int] = None,
             status: Optional[str] = None, date_from: Optional[datetime] = None,
             date_to: Optional[datetime] = None, offset: int = 0, limit: Optional[int] = None):
        query = self.db.query(models.Appointment)
        if patient_id is not None:
            query = query.filter(models.Appointment.patient_id == patient_id)
        if doctor_id is not None:
            query = query.filter(models.Appointment.doctor_id == doctor_id)
        if status is not None:
            query = query.filter(models.Appointment.status == status)
        if date_from is not None:
            query = query.filter(models.Appointment.appointment_date >= models.naive_utc(date_from))
        if date_to is not None:
            query = query.filter(models.Appointment.appointment_date < models.naive_utc(date_to))
        query = query.order_by(models.Appointment.appointment_date)
        return self._page(query, offset, limit)

    def create(self, **fields):
        status = fields.get("status")
        if self.enforce_transitions and status is not None and status != models.DEFAULT_STATUS:
            raise errors.InvalidStatusTransition(
                f"New appointments start as {models.DEFAULT_STATUS}, not {status}",
                {"status": status})
        if "appointment_date" in fields:
            fields["appointment_date"] = models.naive_utc(fields["appointment_date"])
        return super().create(**fields)

    def update(self, key, **fields):
        if self.enforce_transitions and fields.get("status") is not None:
            current = self.get(key).status
            self._check_transition(key, current, fields["status"])
        if "appointment_date" in fields:
            fields["appointment_date"] = models.naive_utc(fields["appointment_date"])
        return super().update(key, **fields)

    def set_status(self, appointment_id: int, status: str):
        return self.update(appointment_id, status=status)

    def _check_transition(self, appointment_id, current, new):
        if new == current or new not in STATUS_TRANSITIONS:
            # unknown statuses are rejected by the enum constraint
            return
        if new not in STATUS_TRANSITIONS[current]:
            raise errors.InvalidStatusTransition(
                f"Appointment {appointment_id} cannot move from {current} to {new}",
                {"from": current, "to": new})


class MedicalServiceRepository(Repository):
    model = models.MedicalService
    entity = "MedicalService"
    identity = ("service_id",)

    def list(self, name: Optional[str] = None, offset: int = 0, limit: Optional[int] = None):
        query = self.db.query(models.MedicalService)
        if name is not None:
            query = query.filter(models.MedicalService.service_name == name)
        return self._page(query, offset, limit)

    def find_by_name(self, name: str):
        return self.db.query(models.MedicalService).filter(models.MedicalService.service_name == name).one_or_none()


class AppointmentServiceRepository(Repository):
    model = models.AppointmentService
    entity = "AppointmentService"
    identity = ("appointment_id", "service_id")

    def list(self, appointment_id: Optional[int] = None, service_id: Optional[int] = None,
             offset: int = 0, limit: Optional[int] = None):
        query = self.db.query(models.AppointmentService)
        if appointment_id is not None:
            query = query.filter(models.AppointmentService.appointment_id == appointment_id)
        if service_id is not None:
            query = query.filter(models.AppointmentService.service_id == service_id)
        return self._page(query, offset, limit)

    def create(self, **fields):
        # the key is caller-supplied; a clash with a row already in the session
        # would otherwise surface as an ORM identity conflict, not a database error
        key = (fields.get("appointment_id"), fields.get("service_id"))
        if None not in key and self.find(*key) is not None:
            logger.warning("AppointmentService create rejected: duplicate %s", key)
            raise errors.ConstraintViolation(
                f"Service {key[1]} is already linked to appointment {key[0]}; update its quantity instead",
                {"appointment_id": key[0], "service_id": key[1]})
        return super().create(**fields)

    def add(self, appointment_id: int, service_id: int, quantity: int = 1):
        return self.create(appointment_id=appointment_id, service_id=service_id, quantity=quantity)

    def set_quantity(self, appointment_id: int, service_id: int, quantity: int):
        return self.update((appointment_id, service_id), quantity=quantity)

    def remove(self, appointment_id: int, service_id: int):
        self.delete((appointment_id, service_id))
