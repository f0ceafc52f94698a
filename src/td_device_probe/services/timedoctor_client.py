import threading
import requests
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from td_device_probe.core.config import settings
from td_device_probe.core.logging import get_logger

logger = get_logger(__name__)

# A token this close to expiry is treated as already expired.
EXPIRY_MARGIN = timedelta(minutes=5)
DEFAULT_TOKEN_LIFETIME = timedelta(hours=24)

class TimeDoctorError(Exception):
    """Any failure talking to the TimeDoctor API."""

class TimeDoctorAuthError(TimeDoctorError):
    pass

class TimeDoctorConfigError(TimeDoctorError):
    pass

def _parse_expiry(raw: Optional[str]) -> datetime:
    if not raw:
        return datetime.now(timezone.utc) + DEFAULT_TOKEN_LIFETIME
    expires_at = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return expires_at

class TimeDoctorClient:
    def __init__(
        self,
        email: str,
        password: str,
        company_name: str,
        totp_code: Optional[str] = None,
        base_url: str = "https://api2.timedoctor.com",
        api_version: str = "1.0",
        timeout: int = 30,
    ):
        self.email = email
        self.password = password
        self.company_name = company_name
        self.totp_code = totp_code
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version
        self.timeout = timeout

        self.token: Optional[str] = None
        self.company_id: Optional[str] = None
        self.token_expiry: Optional[datetime] = None
        self._refresh_lock = threading.Lock()

        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "Content-Type": "application/json",
        })

    @classmethod
    def from_settings(cls) -> "TimeDoctorClient":
        return cls(
            email=settings.td_email,
            password=settings.td_password,
            company_name=settings.td_company_name,
            totp_code=settings.td_totp_code,
            base_url=settings.td_api_base_url,
            api_version=settings.td_api_version,
            timeout=settings.request_timeout,
        )

    def _check_credentials(self) -> None:
        missing = [
            name for name, value in (
                ("TD_EMAIL", self.email),
                ("TD_PASSWORD", self.password),
                ("TD_COMPANY_NAME", self.company_name),
            )
            if not value
        ]
        if missing:
            raise TimeDoctorConfigError(f"Missing required configuration: {', '.join(missing)}")

    def is_token_expired(self) -> bool:
        if not self.token or not self.token_expiry:
            return True
        return self.token_expiry - datetime.now(timezone.utc) < EXPIRY_MARGIN

    def _find_company_id(self, companies: Any) -> str:
        """
        The login payload lists companies either as a list or as a mapping;
        match on the 'name' property first, then on the mapping key.
        """
        if isinstance(companies, dict):
            entries = list(companies.items())
        elif isinstance(companies, list):
            entries = [(str(i), c) for i, c in enumerate(companies)]
        else:
            raise TimeDoctorAuthError("No companies found in authentication response")

        for _, company in entries:
            if isinstance(company, dict) and company.get("name") == self.company_name:
                return str(company.get("id"))

        for key, company in entries:
            if key == self.company_name and isinstance(company, dict):
                return str(company.get("id"))

        available = [
            f"{(c.get('name') if isinstance(c, dict) else None) or key}"
            for key, c in entries
        ]
        logger.error(f"Company '{self.company_name}' not found. Available: {', '.join(available)}")
        raise TimeDoctorAuthError(f"Company '{self.company_name}' not found in account")

    def _raise_for_login_status(self, status: int, body: dict) -> None:
        message = body.get("message") or body.get("error") or "Unknown error"
        if status == 401:
            if "totp" in str(message).lower() or "2fa" in str(message).lower():
                logger.error("Two-factor authentication is required, set TD_TOTP_CODE")
            raise TimeDoctorAuthError("Invalid credentials")
        if status == 403:
            raise TimeDoctorAuthError(f"Authentication denied: {message}")
        if status == 404:
            raise TimeDoctorAuthError("Authentication endpoint not found")
        raise TimeDoctorAuthError(f"Authentication failed ({status}): {message}")

    def login(self) -> None:
        """
        Obtains a JWT and resolves the configured company name to its id.
        """
        self._check_credentials()
        url = f"{self.base_url}/api/{self.api_version}/authorization/login"
        payload = {
            "email": self.email,
            "password": self.password,
            "permissions": "write",
        }
        if self.totp_code:
            payload["totpCode"] = self.totp_code

        logger.info(f"Authenticating with TimeDoctor as {self.email}")
        try:
            r = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise TimeDoctorError(f"Authentication request failed: {e}") from e

        try:
            body = r.json()
        except ValueError:
            raise TimeDoctorError(f"Invalid response from API: {r.text[:300]}")

        if not isinstance(body, dict):
            raise TimeDoctorError(f"Invalid response from API: {r.text[:300]}")
        if r.status_code >= 400:
            self._raise_for_login_status(r.status_code, body)

        data = body.get("data") or {}
        if not data.get("token"):
            raise TimeDoctorAuthError("No token received in authentication response")

        company_id = self._find_company_id(data.get("companies"))
        self.token = data["token"]
        self.company_id = company_id
        self.token_expiry = _parse_expiry(data.get("expiresAt"))
        logger.info(f"Authenticated, company id {self.company_id}, token expires {self.token_expiry.isoformat()}")

    def get_credentials(self) -> tuple[str, str]:
        # Threadpool workers share one client; only one of them logs in.
        with self._refresh_lock:
            if self.is_token_expired():
                logger.info("Token expired or missing, refreshing")
                self.login()
            return self.token, self.company_id

    def get_company_id(self) -> str:
        _, company_id = self.get_credentials()
        return company_id

    def request(self, endpoint: str, method: str = "GET", **kwargs: Any) -> Any:
        """
        Calls an API path (or absolute URL) and returns the decoded JSON body.
        A literal '{companyId}' in the endpoint is replaced with the resolved id.
        """
        token, company_id = self.get_credentials()
        endpoint = endpoint.replace("{companyId}", company_id)
        url = endpoint if endpoint.startswith("http") else f"{self.base_url}{endpoint}"

        headers = {"Authorization": f"JWT {token}"}
        headers.update(kwargs.pop("headers", {}) or {})

        logger.debug(f"API Request: {method} {url}")
        try:
            r = self.session.request(method, url, headers=headers, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise TimeDoctorError(f"Request failed: {e}") from e

        if r.status_code >= 400:
            raise TimeDoctorError(f"API Error {r.status_code}: {r.text[:300]}")

        try:
            return r.json()
        except ValueError:
            raise TimeDoctorError(f"Malformed JSON from {endpoint.split('?')[0]}: {r.text[:200]}")
