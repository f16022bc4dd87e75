"""Mobile device heuristic based on user-agent substrings."""
import re


MOBILE_PATTERNS = (
    re.compile(r"Android", re.IGNORECASE),
    re.compile(r"BlackBerry", re.IGNORECASE),
    re.compile(r"IEMobile", re.IGNORECASE),
    re.compile(r"Opera Mini", re.IGNORECASE),
    re.compile(r"iPad", re.IGNORECASE),
    re.compile(r"iPhone|iPod", re.IGNORECASE),
)

MOBILE_SESSION_TRAITS = {"Mobile Session": "Yes"}


def is_mobile(user_agent: str | None) -> bool:
    """Return True when the user agent looks like a mobile browser."""
    if not user_agent:
        return False
    return any(pattern.search(user_agent) for pattern in MOBILE_PATTERNS)
