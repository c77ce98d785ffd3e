from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AccountType(str, Enum):
    """Value of the `memberDiv` radio control on the login form."""
    PERSONAL = "1"
    BUSINESS = "2"


class ExpertiseSection(str, Enum):
    """Page-global variable names holding each expertise section."""
    EMPLOYMENT = "workCareer"
    SKILL = "skillCareer"
    DEGREE = "scholar"
    CERTIFICATION = "skillCert"
    EDUCATION = "education"
    AWARD = "prize"


class VerificationStatus(str, Enum):
    NOTHING = ""
    NOT_STARTED = "1"
    PROCESSING = "2"
    VERIFIED = "3"
    REJECTED = "4"


class ProofingMethod(str, Enum):
    SIGNED_BY_COMPANY = "1"
    OFFLINE_PAPER_DOCUMENT = "2"
    UPLOAD_DOCUMENT_FILE = "4"


class RegistrationRequestProcess(str, Enum):
    NOT_REQUESTED = ""
    REQUESTED = "1"
    RECEIVING = "2"
    RECEIVED = "3"
    REVIEWING = "4"
    CHANGES_REQUESTED = "5"
    # The portal uses this code both for re-review and for cancelled requests.
    CHANGED_TO_REREVIEW_OR_REQUEST_CANCELED = "6"
    FULLY_PROCESSED_EVEN_IF_REJECTED = "7"


class CertificateTakeoutMethod(str, Enum):
    SELF_PRINT = "1"
    DELIVERY_POSTPAID = "2"
    EXPRESS_DELIVERY_POSTPAID = "3"
    OFFLINE_DIRECT = "4"
    UNRECOGNIZED = "unrecognized"


class CertificatePrintStatus(str, Enum):
    """Known print status labels.

    Not applied to scraped rows: `CertificateIssueRequest.print_status`
    keeps the raw label text.
    """
    ISSUE_CANCELLED = "발급취소"
    ALREADY_PRINTED = "출력완료"


class QueryPagination(BaseModel):
    """Zero-based page number and page size for list pages."""
    page: int = Field(default=0, ge=0)
    page_size: int = Field(default=10, ge=1)


class CertificateIssueRequest(BaseModel):
    """One row of the certificate issue request list."""
    index: int
    request_id: Optional[str] = None
    request_date: date
    copies: int
    verifiable_id: Optional[str] = None
    print_date: Optional[date] = None
    takeout_method: Optional[CertificateTakeoutMethod] = None
    print_status: Optional[str] = None


class SessionRequest(BaseModel):
    """Payload for one scripted run: sign in, fetch, finalize.

    Shared by the CLI and the HTTP endpoint.
    """
    user_id: str
    password: str
    account_type: AccountType = AccountType.PERSONAL
    expertises: bool = True
    issue_requests: bool = True
    page: int = Field(default=0, ge=0)
    page_size: int = Field(default=10, ge=1)
    headless: Optional[bool] = None
    use_cdp: bool = False
    cdp_url: Optional[str] = None
    debug: bool = False

    def pagination(self) -> QueryPagination:
        return QueryPagination(page=self.page, page_size=self.page_size)
