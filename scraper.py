#!/usr/bin/env python3
"""
SW Career Portal Scraper - CLI Standalone Version

Signs in to career.sw.or.kr, fetches the expertise sections and one page of
certificate issue requests, signs out and prints the result as JSON.

Usage:
    python scraper.py --user-id <ID> [OPTIONS]

Example:
    SWCAREER_PASSWORD=... python scraper.py --user-id hong --page 1 --page-size 20
    python scraper.py --user-id acme --account-type business --use-cdp --cdp-url http://localhost:9222
"""

import argparse
import asyncio
import getpass
import json
import os
import sys
from typing import List

from playwright.async_api import Error as PlaywrightError

from sw_career_pkg.browser import connect_over_cdp, shutdown_browser
from sw_career_pkg.config import CDP_URL, USE_CDP
from sw_career_pkg.controller import CareerAccountController
from sw_career_pkg.errors import LoginFailedError, RowParseError
from sw_career_pkg.models import AccountType, SessionRequest
from sw_career_pkg.response import build_error, build_response
from sw_career_pkg.scraper_logging import add_debug


async def run_session(data: SessionRequest) -> dict:
    """
    Run one full session: sign in, fetch what was asked for, finalize.

    Args:
        data: SessionRequest with credentials and fetch options

    Returns:
        Dictionary built by `build_response` or `build_error`
    """
    debug_msg: List[str] = []
    browser = None

    # Decide whether to borrow a running Chrome (CDP) or let the session launch one
    use_cdp = USE_CDP or data.use_cdp
    cdp_url = data.cdp_url or CDP_URL

    if use_cdp:
        print(f"🚀 Connecting via CDP: {cdp_url}", file=sys.stderr)
        try:
            browser = await connect_over_cdp(cdp_url)
            add_debug(debug_msg, "CDP_MODE")
        except PlaywrightError as e:
            print(f"❌ CDP connection failed: {e}. Falling back to a launched browser", file=sys.stderr)
            add_debug(debug_msg, "CDP_FAIL_FALLBACK")

    try:
        try:
            controller = await CareerAccountController.start(
                data.user_id,
                data.password,
                account_type=data.account_type,
                browser=browser,
                headless=data.headless,
                debug_mode=data.debug,
            )
        except LoginFailedError as e:
            print("❌ Sign-in failed", file=sys.stderr)
            add_debug(debug_msg, "LOGIN_FAILED")
            return build_error(data, str(e), debug_msg, debug_files=e.debug_files)

        print(f"✅ Signed in as {data.user_id}", file=sys.stderr)
        try:
            expertises = await controller.fetch_expertises() if data.expertises else None
            requests = (
                await controller.fetch_certificate_issue_requests(data.pagination())
                if data.issue_requests
                else None
            )
        except (RowParseError, PlaywrightError) as e:
            print(f"❌ Fetch failed: {e}", file=sys.stderr)
            return build_error(data, f"Fetch failed: {e}", debug_msg + controller.debug_msgs, signed_in=True)
        finally:
            await controller.finalize()

        return build_response(data, expertises, requests, debug_msg + controller.debug_msgs)
    except PlaywrightError as e:
        print(f"❌ Browser automation failed: {e}", file=sys.stderr)
        return build_error(data, f"Browser automation failed: {e}", debug_msg)
    finally:
        # Sessions never close a borrowed browser; drop our CDP connection here
        if browser is not None:
            await shutdown_browser(browser)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fetch expertise sections and certificate issue requests from career.sw.or.kr",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --user-id hong
  %(prog)s --user-id hong --no-expertises --page 2 --page-size 25
  %(prog)s --user-id acme --account-type business --headless false
  %(prog)s --user-id hong --use-cdp --cdp-url http://localhost:9222

The password is read from SWCAREER_PASSWORD or prompted for.
        """
    )

    parser.add_argument(
        "--user-id",
        default=os.environ.get("SWCAREER_USER_ID"),
        help="Portal login id (default: $SWCAREER_USER_ID)"
    )
    parser.add_argument(
        "--account-type",
        choices=[t.name.lower() for t in AccountType],
        default="personal",
        help="Account type selected on the login form (default: personal)"
    )
    parser.add_argument(
        "--no-expertises",
        action="store_true",
        help="Skip fetching the expertise sections"
    )
    parser.add_argument(
        "--no-requests",
        action="store_true",
        help="Skip fetching certificate issue requests"
    )
    parser.add_argument(
        "--page",
        type=int,
        default=0,
        help="Zero-based page of the issue request list (default: 0)"
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=10,
        help="Rows per page of the issue request list (default: 10)"
    )
    parser.add_argument(
        "--headless",
        type=lambda x: x.lower() in ("true", "1", "yes"),
        default=None,
        help="Run browser in headless mode (default: $SWCAREER_HEADLESS or true)"
    )
    parser.add_argument(
        "--use-cdp",
        action="store_true",
        help="Borrow a running Chrome over the DevTools Protocol instead of launching one"
    )
    parser.add_argument(
        "--cdp-url",
        default=None,
        help="CDP endpoint URL (default: $SCRAPER_CDP_URL or http://127.0.0.1:9222)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Save a screenshot and HTML of the login page when sign-in fails"
    )
    parser.add_argument(
        "--output",
        "-o",
        help="Output file path (JSON format). If not specified, prints to stdout"
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main CLI entry point"""
    args = parse_args(argv)

    if not args.user_id:
        print("❌ Error: --user-id or SWCAREER_USER_ID is required", file=sys.stderr)
        sys.exit(2)

    password = os.environ.get("SWCAREER_PASSWORD") or getpass.getpass("Password: ")

    request_data = SessionRequest(
        user_id=args.user_id,
        password=password,
        account_type=AccountType[args.account_type.upper()],
        expertises=not args.no_expertises,
        issue_requests=not args.no_requests,
        page=args.page,
        page_size=args.page_size,
        headless=args.headless,
        use_cdp=args.use_cdp,
        cdp_url=args.cdp_url,
        debug=args.debug,
    )

    try:
        result = asyncio.run(run_session(request_data))

        if args.output:
            with open(args.output, "w", encoding="utf-8") as f:
                json.dump(result, f, indent=2, ensure_ascii=False)
            print(f"\n📁 Results saved to: {args.output}", file=sys.stderr)
        else:
            print(json.dumps(result, indent=2, ensure_ascii=False))

        sys.exit(0 if result.get("signed_in") and "error" not in result else 1)

    except KeyboardInterrupt:
        print("\n⚠️ Interrupted by user", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
