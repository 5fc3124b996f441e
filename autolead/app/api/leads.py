"""Lead management endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from autolead.app.core.logger import get_logger
from autolead.app.core.time import utc_now
from autolead.app.db.session import get_db
from autolead.app.dependencies.auth import get_current_user
from autolead.app.models.activity import Activity
from autolead.app.models.lead import Lead
from autolead.app.models.user import User
from autolead.app.schemas.activity import ActivityRead
from autolead.app.schemas.lead import LeadCreate, LeadRead, LeadUpdate
from autolead.app.services.access import policy_for
from autolead.app.services.activity import log_activity

router = APIRouter(prefix="/api/leads", tags=["leads"])
logger = get_logger(__name__)


def _server_error(db: Session, message: str) -> HTTPException:
    db.rollback()
    logger.exception(message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


def _get_visible_lead(db: Session, lead_id: int, user: User) -> Lead:
    criteria = policy_for(user).lead_scope(user)
    lead = db.query(Lead).filter(Lead.id == lead_id, *criteria).first()
    if not lead:
        raise HTTPException(status_code=404, detail="Lead not found")
    return lead


def _check_assignee(db: Session, assignee_id: Optional[int], dealership_id: Optional[int]) -> None:
    if assignee_id is None:
        return
    assignee = db.query(User).filter(User.id == assignee_id).first()
    if not assignee or assignee.dealership_id != dealership_id:
        raise HTTPException(status_code=400, detail="Assigned user must belong to the lead's dealership")


@router.get("", response_model=list[LeadRead])
def list_leads(
    status: Optional[str] = None,
    dealership_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    criteria = policy_for(current_user).lead_scope(current_user, requested_dealership_id=dealership_id)
    try:
        query = db.query(Lead).filter(*criteria)
        if status:
            query = query.filter(Lead.status == status)
        return query.order_by(Lead.created_at.desc(), Lead.id.desc()).all()
    except SQLAlchemyError:
        raise _server_error(db, "Failed to get leads")


@router.post("", response_model=LeadRead, status_code=status.HTTP_201_CREATED)
def create_lead(lead_in: LeadCreate, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    assignee_id = lead_in.assigned_to if lead_in.assigned_to is not None else current_user.id
    try:
        _check_assignee(db, assignee_id, current_user.dealership_id)
        lead = Lead(
            customer_name=lead_in.customer_name,
            customer_email=lead_in.customer_email,
            customer_phone=lead_in.customer_phone,
            vehicle_interest=lead_in.vehicle_interest,
            source=lead_in.source,
            notes=lead_in.notes,
            priority=lead_in.priority or "medium",
            status="new",
            assigned_to=assignee_id,
            dealership_id=current_user.dealership_id,
        )
        db.add(lead)
        db.commit()
        db.refresh(lead)
        log_activity(db, lead.id, current_user.id, "lead_created", "Lead created")
    except SQLAlchemyError:
        raise _server_error(db, "Failed to create lead")
    return lead


@router.get("/{lead_id}", response_model=LeadRead)
def get_lead(lead_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return _get_visible_lead(db, lead_id, current_user)


@router.put("/{lead_id}", response_model=LeadRead)
def update_lead(
    lead_id: int,
    lead_in: LeadUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    criteria = policy_for(current_user).dealership_scope(current_user)
    try:
        lead = db.query(Lead).filter(Lead.id == lead_id, *criteria).first()
        if not lead:
            raise HTTPException(status_code=404, detail="Lead not found")

        if lead_in.assigned_to is not None and lead_in.assigned_to != lead.assigned_to:
            _check_assignee(db, lead_in.assigned_to, lead.dealership_id)

        old_status = lead.status
        update_fields = {
            "customer_name": lead_in.customer_name,
            "customer_email": lead_in.customer_email,
            "customer_phone": lead_in.customer_phone,
            "vehicle_interest": lead_in.vehicle_interest,
            "status": lead_in.status,
            "notes": lead_in.notes,
            "priority": lead_in.priority,
            "assigned_to": lead_in.assigned_to,
        }
        changed_fields: list[str] = []
        for field, value in update_fields.items():
            if value is not None:  # Only update provided fields
                if getattr(lead, field) != value:
                    setattr(lead, field, value)
                    changed_fields.append(field)
        lead.updated_at = utc_now()
        db.commit()
        db.refresh(lead)

        if "status" in changed_fields:
            log_activity(db, lead.id, current_user.id, "status_changed", f"Status changed from {old_status} to {lead.status}")
        other_changes = [f for f in changed_fields if f != "status"]
        if other_changes:
            description = "Lead updated: " + "; ".join(f"{f} changed" for f in other_changes)
            log_activity(db, lead.id, current_user.id, "lead_updated", description)
    except SQLAlchemyError:
        raise _server_error(db, "Failed to update lead")
    return lead


@router.get("/{lead_id}/activities", response_model=list[ActivityRead])
def list_lead_activities(lead_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    _get_visible_lead(db, lead_id, current_user)
    return (
        db.query(Activity)
        .filter(Activity.lead_id == lead_id)
        .order_by(Activity.created_at.asc(), Activity.id.asc())
        .all()
    )
