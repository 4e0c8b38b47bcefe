"""Domain layer: exceptions shared by the scheduler use cases.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.exceptions import (
    AuthenticationException,
    InvalidActionConfigException,
    RenoTimelineException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    UnsupportedActionException,
    ValidationException,
)

__all__ = [
    "AuthenticationException",
    "InvalidActionConfigException",
    "RenoTimelineException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "UnsupportedActionException",
    "ValidationException",
]
