from autolead.app.db.base_class import Base

# Import models to register metadata for Base.metadata.create_all
from autolead.app.models.dealership import Dealership  # noqa: F401
from autolead.app.models.user import User  # noqa: F401
from autolead.app.models.lead import Lead  # noqa: F401
from autolead.app.models.activity import Activity  # noqa: F401
from autolead.app.models.email_log import EmailLog  # noqa: F401
