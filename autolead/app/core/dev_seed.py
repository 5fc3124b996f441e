from sqlalchemy.orm import Session

from autolead.app.core.logger import get_logger
from autolead.app.core.security import get_password_hash
from autolead.app.db.base import Base
from autolead.app.db.session import Database
from autolead.app.models.dealership import Dealership
from autolead.app.models.lead import Lead
from autolead.app.models.user import User

logger = get_logger(__name__)

DEFAULT_DEALERSHIP = {
    "name": "AutoClick Motors",
    "address": "123 Main Street, Anytown, USA",
    "phone": "(555) 123-4567",
    "email": "info@autoclick.com",
}
DEFAULT_DEV_PASSWORD = "password123"
DEFAULT_DEV_USERS = [
    {"email": "admin@autoclick.com", "name": "Admin User", "role": "admin"},
    {"email": "rep@autoclick.com", "name": "Sales Representative", "role": "sales_rep"},
]
SAMPLE_LEADS = [
    {
        "customer_name": "John Smith",
        "customer_email": "john.smith@email.com",
        "customer_phone": "(555) 123-4567",
        "vehicle_interest": "Toyota Camry",
        "source": "website",
        "notes": "Interested in 2024 model, financing needed",
        "priority": "high",
    },
    {
        "customer_name": "Sarah Johnson",
        "customer_email": "sarah.j@email.com",
        "customer_phone": "(555) 987-6543",
        "vehicle_interest": "Honda Accord",
        "source": "email",
        "notes": "Looking for reliable family car",
        "priority": "medium",
    },
    {
        "customer_name": "Mike Wilson",
        "customer_email": "mike.wilson@email.com",
        "customer_phone": "(555) 456-7890",
        "vehicle_interest": "Ford F-150",
        "source": "phone",
        "notes": "Needs truck for work, cash buyer",
        "priority": "high",
    },
]


def ensure_default_dealership(db: Session) -> Dealership:
    dealership = db.query(Dealership).filter(Dealership.name == DEFAULT_DEALERSHIP["name"]).first()
    if dealership:
        logger.info("Using existing dealership ID: %s", dealership.id)
        return dealership
    dealership = Dealership(**DEFAULT_DEALERSHIP)
    db.add(dealership)
    db.commit()
    db.refresh(dealership)
    logger.info("Default dealership created with ID: %s", dealership.id)
    return dealership


def upsert_default_dev_users(db: Session, dealership: Dealership) -> dict[str, User]:
    """
    Create the demo users, or reset them when they already exist, so the demo
    credentials are always the documented ones after a seed run.
    """
    users = {}
    for demo_user in DEFAULT_DEV_USERS:
        user = db.query(User).filter(User.email == demo_user["email"]).first()
        if user is None:
            user = User(email=demo_user["email"])
            db.add(user)
        user.hashed_password = get_password_hash(DEFAULT_DEV_PASSWORD)
        user.name = demo_user["name"]
        user.role = demo_user["role"]
        user.dealership_id = dealership.id
        users[demo_user["role"]] = user
    db.commit()
    return users


def ensure_sample_leads(db: Session, dealership: Dealership, assignee: User) -> int:
    created = 0
    for sample in SAMPLE_LEADS:
        existing = (
            db.query(Lead)
            .filter(Lead.dealership_id == dealership.id, Lead.customer_email == sample["customer_email"])
            .first()
        )
        if existing:
            continue
        db.add(Lead(status="new", assigned_to=assignee.id, dealership_id=dealership.id, **sample))
        created += 1
    if created:
        db.commit()
    return created


def seed_database(db: Session) -> None:
    dealership = ensure_default_dealership(db)
    users = upsert_default_dev_users(db, dealership)
    logger.info("Default users created successfully")
    created = ensure_sample_leads(db, dealership, users["admin"])
    logger.info("Sample leads created: %s", created)


def init_db(database: Database) -> None:
    """Create missing tables and seed the demo dealership, users and leads."""
    logger.info("Setting up database...")
    Base.metadata.create_all(bind=database.engine)
    db = database.session()
    try:
        seed_database(db)
    finally:
        db.close()
    logger.info("Database setup complete. Default login credentials:")
    for demo_user in DEFAULT_DEV_USERS:
        logger.info("%s: %s / %s", demo_user["role"], demo_user["email"], DEFAULT_DEV_PASSWORD)
