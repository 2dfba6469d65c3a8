"""Entity models for the PASS data model."""

from .base_model import PassBaseModel, PassEntity
from .funder_model import Funder, Journal
from .grant_model import AwardStatus, Grant
from .registry import EntityRegistry, EntityType, default_registry
from .repository_model import IntegrationType, Repository
from .submission_model import Submission, SubmissionSource
from .support import Identifier
from .user_model import User, UserRole

__all__ = [
    "PassBaseModel",
    "PassEntity",
    "Grant",
    "AwardStatus",
    "User",
    "UserRole",
    "Submission",
    "SubmissionSource",
    "Repository",
    "IntegrationType",
    "Funder",
    "Journal",
    "Identifier",
    "EntityRegistry",
    "EntityType",
    "default_registry",
]
