"""Role-based lead visibility.

Each role maps to a policy that turns the current user into SQLAlchemy filter
criteria, so handlers never repeat the "admins see everything" check.
"""

from abc import ABC, abstractmethod
from typing import Optional

from autolead.app.models.lead import Lead
from autolead.app.models.user import User


class AccessPolicy(ABC):
    @abstractmethod
    def lead_scope(self, user: User, requested_dealership_id: Optional[int] = None) -> list:
        """Criteria limiting which leads the user may read."""
        raise NotImplementedError

    def dealership_scope(self, user: User) -> list:
        """Criteria limiting which leads the user may modify: always their own dealership."""
        return [Lead.dealership_id == user.dealership_id]


class AdminPolicy(AccessPolicy):
    def lead_scope(self, user: User, requested_dealership_id: Optional[int] = None) -> list:
        if requested_dealership_id is not None:
            return [Lead.dealership_id == requested_dealership_id]
        return []


class DealershipPolicy(AccessPolicy):
    def lead_scope(self, user: User, requested_dealership_id: Optional[int] = None) -> list:
        # The requested dealership is ignored for non-admins.
        return [Lead.dealership_id == user.dealership_id]


POLICIES = {
    "admin": AdminPolicy(),
    "manager": DealershipPolicy(),
    "sales_rep": DealershipPolicy(),
}


def policy_for(user: User) -> AccessPolicy:
    return POLICIES.get(user.role, POLICIES["sales_rep"])
