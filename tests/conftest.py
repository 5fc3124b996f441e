import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_autolead.db")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest

from autolead.app.db.base import Base
from autolead.app.db.session import get_database
from autolead.app.middlewares.rate_limit import reset_rate_limits


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=get_database().engine)
    Base.metadata.create_all(bind=get_database().engine)
    reset_rate_limits()
    yield
    Base.metadata.drop_all(bind=get_database().engine)
