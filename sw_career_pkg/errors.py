from typing import Optional


class SwCareerError(Exception):
    """Base class for failures raised by this package."""


class LoginFailedError(SwCareerError):
    """The portal kept us on the login page after submitting credentials.

    Wrong credentials, locked accounts and other rejections all end up here;
    the page gives no reliable signal to tell them apart.
    """

    def __init__(self, message: str = "Failed to sign in", debug_files: Optional[dict] = None):
        super().__init__(message)
        self.debug_files = debug_files


class SessionClosedError(SwCareerError):
    """The controller was already finalized."""


class RowParseError(SwCareerError, ValueError):
    """A required cell of a scraped table row could not be parsed."""

    def __init__(self, field: str, text: Optional[str]):
        super().__init__(f"Cannot parse {field!r} from cell text {text!r}")
        self.field = field
        self.text = text
