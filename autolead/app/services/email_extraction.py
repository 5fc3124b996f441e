"""Best-effort extraction of lead details from an inbound email.

Every field of the result is optional: a partial lead (a phone number without
a vehicle, say) is still worth handing to the sales team, so missing pieces
degrade to None instead of rejecting the message.
"""

import re
from dataclasses import dataclass
from typing import Optional

from autolead.app.core.logger import get_logger

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b", re.IGNORECASE)
PHONE_PATTERN = re.compile(r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b")

# Checked in order; the first brand found wins.
VEHICLE_BRANDS = ("toyota", "honda", "ford", "chevrolet", "nissan", "bmw", "mercedes", "audi")
VEHICLE_NOT_SPECIFIED = "Not specified"

NOTES_BODY_LIMIT = 500
TRUNCATION_MARKER = "..."


@dataclass(frozen=True)
class ExtractedLead:
    name: str
    email: Optional[str]
    phone: Optional[str]
    vehicle_interest: str
    notes: str


def find_email(sender: str) -> Optional[str]:
    match = EMAIL_PATTERN.search(sender)
    return match.group(0) if match else None


def find_phone(body: str) -> Optional[str]:
    match = PHONE_PATTERN.search(body)
    return match.group(0) if match else None


def name_from_sender(sender: str) -> str:
    return re.sub(r"[._]", " ", sender.split("@", 1)[0])


def detect_vehicle(subject: str, body: str) -> str:
    text = f"{subject}\n{body}".lower()
    for brand in VEHICLE_BRANDS:
        if brand in text:
            return brand
    return VEHICLE_NOT_SPECIFIED


def compose_notes(subject: str, body: str) -> str:
    # The marker is appended even when the body fits within the limit.
    return f"Email Subject: {subject}\n\nEmail Body: {body[:NOTES_BODY_LIMIT]}{TRUNCATION_MARKER}"


def extract_lead_from_email(sender, subject, body) -> Optional[ExtractedLead]:
    """Map a raw email to a candidate lead, or None when nothing usable can be read from it."""
    if not all(isinstance(value, str) for value in (sender, subject, body)):
        logger.warning("Skipping email with missing sender, subject or body")
        return None
    try:
        return ExtractedLead(
            name=name_from_sender(sender),
            email=find_email(sender),
            phone=find_phone(body),
            vehicle_interest=detect_vehicle(subject, body),
            notes=compose_notes(subject, body),
        )
    except Exception:
        logger.exception("Error extracting lead data")
        return None
