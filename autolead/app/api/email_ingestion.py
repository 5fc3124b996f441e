"""Inbound email endpoint: turns forwarded customer emails into leads."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from autolead.app.core.logger import get_logger
from autolead.app.core.settings import get_settings
from autolead.app.core.time import as_utc, utc_now
from autolead.app.db.session import get_db
from autolead.app.models.email_log import EmailLog
from autolead.app.models.lead import Lead
from autolead.app.schemas.email import InboundEmail, ProcessedEmailResponse
from autolead.app.schemas.lead import LeadRead
from autolead.app.services.activity import log_activity
from autolead.app.services.email_extraction import extract_lead_from_email

router = APIRouter(prefix="/api", tags=["email"])
logger = get_logger(__name__)


def _as_text(value):
    # The log keeps whatever arrived, even when it is not usable as text
    return None if value is None else str(value)


@router.post("/process-email", response_model=ProcessedEmailResponse, status_code=status.HTTP_201_CREATED)
def process_email(email_in: InboundEmail, db: Session = Depends(get_db)):
    settings = get_settings()
    try:
        email_log = EmailLog(
            from_email=_as_text(email_in.sender), subject=_as_text(email_in.subject), body=_as_text(email_in.body)
        )
        db.add(email_log)
        db.commit()

        lead_data = extract_lead_from_email(email_in.sender, email_in.subject, email_in.body)
        if lead_data is None:
            logger.info("No lead extracted from email log %s", email_log.id)
            raise HTTPException(status_code=400, detail="Could not extract lead information from email")

        lead = Lead(
            customer_name=lead_data.name,
            customer_email=lead_data.email,
            customer_phone=lead_data.phone,
            vehicle_interest=lead_data.vehicle_interest,
            source="email",
            notes=lead_data.notes,
            priority="medium",
            status="new",
            dealership_id=settings.default_dealership_id,
            created_at=as_utc(email_in.received_date) if email_in.received_date else utc_now(),
        )
        db.add(lead)
        db.flush()
        email_log.lead_id = lead.id
        email_log.processed = True
        db.commit()
        db.refresh(lead)
        log_activity(db, lead.id, None, "email_received", f"Lead created from email: {email_in.subject}")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Email processing error")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to process email")

    logger.info("Created lead %s from email log %s", lead.id, email_log.id)
    return {"success": True, "lead": LeadRead.model_validate(lead)}
