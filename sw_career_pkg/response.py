from typing import Any, Dict, List, Optional

from .models import CertificateIssueRequest, SessionRequest


def build_response(
    req: SessionRequest,
    expertises: Optional[Dict[str, Any]],
    requests: Optional[List[CertificateIssueRequest]],
    debug_msgs: List[str],
    debug_files: Optional[dict] = None,
) -> Dict[str, Any]:
    """Compose the public response for a finished run.

    Fetches that were not requested are reported as None rather than empty,
    so callers can tell "skipped" from "nothing found".
    """
    resp = {
        "user_id": req.user_id,
        "account_type": req.account_type.name.lower(),
        "signed_in": True,
        "expertises": expertises,
        "certificate_issue_requests": (
            [r.model_dump(mode="json") for r in requests] if requests is not None else None
        ),
        "total_requests": len(requests) if requests else 0,
        "debug": " | ".join(debug_msgs),
    }
    if debug_files:
        resp["debug_files"] = debug_files
    return resp


def build_error(
    req: SessionRequest,
    error: str,
    debug_msgs: List[str],
    debug_files: Optional[dict] = None,
    signed_in: bool = False,
) -> Dict[str, Any]:
    """Build the error response; the password never leaves the request."""
    resp = {
        "user_id": req.user_id,
        "signed_in": signed_in,
        "error": error,
        "debug": " | ".join(debug_msgs),
    }
    if debug_files:
        resp["debug_files"] = debug_files
    return resp
