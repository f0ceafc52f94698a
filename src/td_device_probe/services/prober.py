import json
import time
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from td_device_probe.core.logging import get_logger
from td_device_probe.services.candidates import CandidateEndpoint

logger = get_logger(__name__)

class UpstreamClient(Protocol):
    def get_company_id(self) -> str: ...
    def request(self, endpoint: str, method: str = "GET") -> Any: ...

@dataclass
class ProbeOutcome:
    candidate: CandidateEndpoint
    ok: bool
    data: Any = None
    error: Optional[str] = None

    @property
    def key(self) -> str:
        return self.candidate.key

    @property
    def endpoint(self) -> str:
        return self.candidate.endpoint

def _payload_size(data: Any) -> str:
    try:
        return f"{len(json.dumps(data, default=str))} bytes"
    except (TypeError, ValueError):
        return "size unknown"

def probe_endpoints(
    client: UpstreamClient,
    candidates: list[CandidateEndpoint],
    delay: float = 0.1,
) -> list[ProbeOutcome]:
    """
    GETs each candidate in order, one at a time, sleeping `delay` seconds after
    every call. A failing endpoint is recorded and the loop moves on, so the
    result always has one outcome per candidate.
    """
    outcomes: list[ProbeOutcome] = []

    for candidate in candidates:
        path = candidate.endpoint.split("?")[0]
        logger.info(f"Trying: {path}")
        try:
            data = client.request(candidate.endpoint, method="GET")
        except Exception as e:
            outcomes.append(ProbeOutcome(candidate=candidate, ok=False, error=str(e)))
            logger.warning(f"  FAILED {path}: {e}")
        else:
            outcomes.append(ProbeOutcome(candidate=candidate, ok=True, data=data))
            logger.info(f"  OK {path} ({_payload_size(data)})")

        if delay > 0:
            time.sleep(delay)

    return outcomes
