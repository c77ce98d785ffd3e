import os
import random


BASE_URL = os.environ.get("SWCAREER_BASE_URL", "https://career.sw.or.kr").rstrip("/")
LOGIN_URL = f"{BASE_URL}/join/login.jsp"
LOGOUT_URL = f"{BASE_URL}/join/logout.jsp"
EXPERTISE_URL = f"{BASE_URL}/personal/reg/swc_write01.jsp"
ISSUE_LIST_URL = f"{BASE_URL}/personal/reg/swo_list.jsp"

HEADLESS = os.environ.get("SWCAREER_HEADLESS", "true").lower() != "false"
SLOW_MO_MS = int(os.environ.get("SCRAPER_SLOW_MO_MS", "0"))
USE_CDP = os.environ.get("SCRAPER_USE_CDP", "false").lower() in ["1", "true", "yes"]
CDP_URL = os.environ.get("SCRAPER_CDP_URL", "http://127.0.0.1:9222")
DEBUG = os.environ.get("SWCAREER_DEBUG", "false").lower() in ["1", "true", "yes"]

VIEWPORT = {"width": 1920, "height": 1080}


def user_agents():
    """Return a small pool of desktop Chrome user agents."""
    return [
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/130.0.0.0 Safari/537.36",
    ]


def random_user_agent():
    """Pick a random user agent from the pool.

    Callers can seed `random` externally when they need reproducibility.
    """
    return random.choice(user_agents())
