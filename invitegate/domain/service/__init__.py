"""Domain services."""

from .base import Service
from .eligibility import CanCreateInvite, EligibilityEvaluator
from .invite_service import InviteService
from .invite_validator import InviteValidator, OutcomeKind, ValidationOutcome
from .jwt_service import JWTService
from .policy import InvitePolicy, compute_expiry, generate_code, utc_now
from .role_transition import RoleTransitionService
from .user_service import UserService

__all__ = [
    "CanCreateInvite",
    "EligibilityEvaluator",
    "InvitePolicy",
    "InviteService",
    "InviteValidator",
    "JWTService",
    "OutcomeKind",
    "RoleTransitionService",
    "Service",
    "UserService",
    "ValidationOutcome",
    "compute_expiry",
    "generate_code",
    "utc_now",
]
