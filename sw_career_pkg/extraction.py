import re
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from .errors import RowParseError
from .models import CertificateIssueRequest, CertificateTakeoutMethod


ISSUE_REQUEST_ROWS_SELECTOR = ".list_tbl_01 tbody tr"
ISSUE_REQUEST_COLUMNS = 7

# Runs inside the page over every matched <tr>; cell text is trimmed on our side.
ISSUE_REQUEST_ROWS_JS = """
(rows) => rows.map((row) => {
    const link = row.querySelector('a');
    return {
        cells: Array.from(row.children, (cell) => cell.textContent),
        href: link ? link.getAttribute('href') : null,
    };
})
"""

TAKEOUT_METHOD_LABELS = {
    "프린터": CertificateTakeoutMethod.SELF_PRINT,
    "택배(착불)": CertificateTakeoutMethod.DELIVERY_POSTPAID,
    "퀵서비스(착불)": CertificateTakeoutMethod.EXPRESS_DELIVERY_POSTPAID,
    "방문수령": CertificateTakeoutMethod.OFFLINE_DIRECT,
}

_LEADING_INT = re.compile(r"[+-]?\d+")
_DATE = re.compile(r"(\d{4})[-./](\d{1,2})[-./](\d{1,2})")


def normalize_cell(text: Optional[str]) -> Optional[str]:
    """Trim cell text; empty text becomes None."""
    if text is None:
        return None
    text = text.strip()
    return text or None


def extract_link_id(href: Optional[str]) -> Optional[str]:
    """Return the first quoted argument of a `javascript:fn('id')` style href."""
    if not href:
        return None
    parts = href.split("'")
    if len(parts) < 2:
        return None
    return parts[1] or None


def takeout_method_from_label(label: Optional[str]) -> Optional[CertificateTakeoutMethod]:
    """Map the localized takeout label onto CertificateTakeoutMethod.

    Empty cells give None. Text matching none of the four labels gives
    UNRECOGNIZED instead of None, so a relabelled option on the site shows up
    as an unknown value rather than looking like an empty cell.
    """
    label = normalize_cell(label)
    if label is None:
        return None
    return TAKEOUT_METHOD_LABELS.get(label, CertificateTakeoutMethod.UNRECOGNIZED)


def parse_int(text: Optional[str], field: str) -> int:
    match = _LEADING_INT.match(text or "")
    if not match:
        raise RowParseError(field, text)
    return int(match.group(0), 10)


def parse_date(text: Optional[str], field: str) -> date:
    match = _DATE.search(text or "")
    if not match:
        raise RowParseError(field, text)
    try:
        return date(*(int(part) for part in match.groups()))
    except ValueError:
        raise RowParseError(field, text)


def parse_issue_request_row(cells: Sequence[Optional[str]], href: Optional[str] = None) -> CertificateIssueRequest:
    """Turn the raw cell texts of one list row into a CertificateIssueRequest.

    Column order: index, request date, copies, verifiable id, print date,
    takeout method, print status. Missing trailing cells count as empty.
    Raises RowParseError when index, request date or copies are unusable.
    """
    texts: List[Optional[str]] = [normalize_cell(c) for c in cells[:ISSUE_REQUEST_COLUMNS]]
    texts += [None] * (ISSUE_REQUEST_COLUMNS - len(texts))

    return CertificateIssueRequest(
        index=parse_int(texts[0], "index"),
        request_id=extract_link_id(href),
        request_date=parse_date(texts[1], "request_date"),
        copies=parse_int(texts[2], "copies"),
        verifiable_id=texts[3],
        print_date=None if texts[4] is None else parse_date(texts[4], "print_date"),
        takeout_method=takeout_method_from_label(texts[5]),
        print_status=texts[6],
    )


def parse_issue_request_rows(raw_rows: Sequence[Dict[str, Any]]) -> List[CertificateIssueRequest]:
    """Normalize rows returned by ISSUE_REQUEST_ROWS_JS, keeping table order.

    Single-cell rows are the table's "no results" placeholder and are skipped.
    """
    results: List[CertificateIssueRequest] = []
    for raw in raw_rows:
        cells = raw.get("cells") or []
        if len(cells) <= 1:
            continue
        results.append(parse_issue_request_row(cells, raw.get("href")))
    return results
