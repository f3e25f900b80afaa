# backend/paracal/routers/employees.py
from typing import List
import logging

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from paracal.db import get_db
from paracal.models.employee import Employee
from paracal.models.leave_event import LeaveEvent
from paracal.schemas.employee import EmployeeCreate, EmployeeUpdate, EmployeeOut

router = APIRouter(prefix="/employees", tags=["employees"])
logger = logging.getLogger(__name__)


def _get_or_404(db: Session, employee_id: int) -> Employee:
    emp = db.get(Employee, employee_id)
    if not emp:
        logger.warning("[employees] Employee not found: %s", employee_id)
        raise HTTPException(status_code=404, detail="Employee not found")
    return emp


@router.get("", response_model=List[EmployeeOut])
def list_employees(db: Session = Depends(get_db)):
    return db.execute(select(Employee).order_by(Employee.name, Employee.id)).scalars().all()


@router.get("/{employee_id}", response_model=EmployeeOut)
def get_employee(employee_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    return _get_or_404(db, employee_id)


@router.post("", status_code=201, response_model=EmployeeOut)
def create_employee(payload: EmployeeCreate, db: Session = Depends(get_db)):
    emp = Employee(name=payload.name)
    db.add(emp)
    db.commit()
    db.refresh(emp)
    logger.info("[employees] Created employee %s (%s)", emp.id, emp.name)
    return emp


@router.put("/{employee_id}", response_model=EmployeeOut)
def update_employee(
    payload: EmployeeUpdate,
    employee_id: int = Path(..., ge=1),
    db: Session = Depends(get_db),
):
    """
    Renames the employee only. Past events keep the name they were recorded with.
    """
    emp = _get_or_404(db, employee_id)
    if payload.name is not None:
        emp.name = payload.name
    db.commit()
    db.refresh(emp)
    logger.info("[employees] Updated employee %s", employee_id)
    return emp


@router.delete("/{employee_id}", status_code=204)
def delete_employee(employee_id: int = Path(..., ge=1), db: Session = Depends(get_db)):
    """
    Deletes an employee together with their leave events.
    """
    _get_or_404(db, employee_id)
    # Clean up events explicitly; not every backend enforces ON DELETE CASCADE
    removed = db.execute(delete(LeaveEvent).where(LeaveEvent.employee_id == employee_id)).rowcount
    db.execute(delete(Employee).where(Employee.id == employee_id))
    db.commit()
    logger.info("[employees] Deleted employee %s and %s events", employee_id, removed)
    return None
