from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Optional
from urllib.parse import quote

API_PREFIX = "/api/1.0"

@dataclass(frozen=True)
class CandidateEndpoint:
    key: str
    endpoint: str
    description: str = ""

def _date_range(days: int, today: Optional[date] = None) -> str:
    today = today or datetime.now(timezone.utc).date()
    start = today - timedelta(days=days)
    return f"from={start.isoformat()}&to={today.isoformat()}"

def exploration_endpoints(
    user_id: str,
    company_id: str,
    today: Optional[date] = None,
) -> list[CandidateEndpoint]:
    """
    Every user, device and activity path that might carry a device name.
    """
    uid = quote(user_id, safe="")
    who = f"user={uid}&company={company_id}"
    users = f"{API_PREFIX}/users/{uid}"

    return [
        # User endpoints
        CandidateEndpoint("user", users, "User record"),
        CandidateEndpoint("user_profile", f"{users}/profile", "User profile"),
        CandidateEndpoint("user_details", f"{users}/details", "User details"),
        CandidateEndpoint("user_info", f"{users}/info", "User info"),
        CandidateEndpoint("user_device", f"{users}/device", "User device"),
        CandidateEndpoint("user_devices", f"{users}/devices", "User devices"),
        CandidateEndpoint("user_sessions", f"{users}/sessions", "User sessions"),
        CandidateEndpoint("user_connections", f"{users}/connections", "User connections"),
        CandidateEndpoint("user_settings", f"{users}/settings", "User settings"),

        # Device specific endpoints
        CandidateEndpoint("devices", f"{API_PREFIX}/devices?{who}", "Devices"),
        CandidateEndpoint("user_devices_list", f"{API_PREFIX}/user-devices?{who}", "User devices list"),
        CandidateEndpoint("computer_info", f"{API_PREFIX}/computer-info?{who}", "Computer info"),
        CandidateEndpoint("device_info", f"{API_PREFIX}/device-info?{who}", "Device info"),
        CandidateEndpoint("client_info", f"{API_PREFIX}/client-info?{who}", "Client info"),
        CandidateEndpoint("workstation", f"{API_PREFIX}/workstation?{who}", "Workstation"),

        # Activity endpoints
        CandidateEndpoint(
            "activity_sessions",
            f"{API_PREFIX}/activity/sessions?{who}&{_date_range(7, today)}",
            "Activity sessions, last 7 days",
        ),
        CandidateEndpoint("activity_devices", f"{API_PREFIX}/activity/devices?{who}", "Activity devices"),
        CandidateEndpoint("activity_computers", f"{API_PREFIX}/activity/computers?{who}", "Activity computers"),

        # Screenshot and worklog metadata
        CandidateEndpoint(
            "screenshots",
            f"{API_PREFIX}/screenshots?{who}&{_date_range(3, today)}&limit=5",
            "Screenshots, last 3 days",
        ),
        CandidateEndpoint(
            "worklog",
            f"{API_PREFIX}/activity/worklog?{who}&{_date_range(7, today)}&limit=10",
            "Activity worklog, last 7 days",
        ),
    ]

def priority_endpoints(
    user_id: str,
    company_id: str,
    today: Optional[date] = None,
) -> list[CandidateEndpoint]:
    uid = quote(user_id, safe="")
    who = f"user={uid}&company={company_id}"

    return [
        CandidateEndpoint("user", f"{API_PREFIX}/users/{uid}", "Basic user info"),
        CandidateEndpoint(
            "screenshots",
            f"{API_PREFIX}/screenshots?{who}&{_date_range(7, today)}&limit=20",
            "Recent screenshots (often contain device metadata)",
        ),
        CandidateEndpoint(
            "worklog",
            f"{API_PREFIX}/activity/worklog?{who}&{_date_range(7, today)}&limit=50",
            "Activity worklog (may contain device info in metadata)",
        ),
        CandidateEndpoint(
            "timeuse",
            f"{API_PREFIX}/activity/timeuse?{who}&{_date_range(3, today)}&limit=20",
            "Time usage data (may include device context)",
        ),
    ]
