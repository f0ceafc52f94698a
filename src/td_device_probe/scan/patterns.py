import re
from typing import Any

from td_device_probe.schemas.matches import Confidence

COMPUTER_NAME_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r".*\.local\Z", re.IGNORECASE),                      # "Macbooks-MacBook-Air.local"
    re.compile(r".*\.domain\.(com|net|org)\Z", re.IGNORECASE),
    re.compile(r"DESKTOP-[A-Z0-9]{6,}", re.IGNORECASE),            # Windows default names
    re.compile(r"^[A-Z][a-z]+-[A-Z][a-z]+"),                       # "Johns-MacBook", "Maries-iMac"
    re.compile(r"MacBook|iMac|iPad|iPhone", re.IGNORECASE),
    re.compile(r"LAPTOP-[A-Z0-9]+", re.IGNORECASE),
    re.compile(r"^[A-Z]{2,}[0-9]{2,}"),                            # corporate codes like "WS001"
    re.compile(r"^[A-Za-z]+-[A-Za-z0-9-]+\.(local|home|corp)\Z", re.IGNORECASE),
)

# Evaluated top to bottom, the first hit wins.
CONFIDENCE_LADDER: tuple[tuple[re.Pattern, Confidence], ...] = (
    (re.compile(r".*\.local\Z", re.IGNORECASE), Confidence.VERY_HIGH),
    (re.compile(r"MacBook|iMac", re.IGNORECASE), Confidence.VERY_HIGH),
    (re.compile(r"DESKTOP-[A-Z0-9]{6,}", re.IGNORECASE), Confidence.HIGH),
    (re.compile(r"^[A-Za-z]+-[A-Za-z0-9-]+\.", re.IGNORECASE), Confidence.HIGH),
    (re.compile(r"Computer-|LAPTOP-", re.IGNORECASE), Confidence.MEDIUM),
)

def is_likely_computer_name(value: Any) -> bool:
    """
    True when a non-empty string looks like a device hostname.
    """
    if not isinstance(value, str) or not value:
        return False
    return any(p.search(value) for p in COMPUTER_NAME_PATTERNS)

def get_computer_name_confidence(value: str) -> Confidence:
    for pattern, confidence in CONFIDENCE_LADDER:
        if pattern.search(value):
            return confidence
    return Confidence.LOW
