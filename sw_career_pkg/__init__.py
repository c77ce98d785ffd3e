"""Session controller and scraping helpers for the SW career portal.

The package is split into small modules (browser launch, navigation,
extraction, models) so the controller stays a thin sequence of steps.
"""

from .controller import CareerAccountController, PagePropertyReader, PropertyReader
from .errors import LoginFailedError, RowParseError, SessionClosedError, SwCareerError
from .models import (
    AccountType,
    CertificateIssueRequest,
    CertificatePrintStatus,
    CertificateTakeoutMethod,
    ExpertiseSection,
    QueryPagination,
)

__all__ = [
    "AccountType",
    "CareerAccountController",
    "CertificateIssueRequest",
    "CertificatePrintStatus",
    "CertificateTakeoutMethod",
    "ExpertiseSection",
    "LoginFailedError",
    "PagePropertyReader",
    "PropertyReader",
    "QueryPagination",
    "RowParseError",
    "SessionClosedError",
    "SwCareerError",
]
