from functools import lru_cache

from td_device_probe.services.timedoctor_client import TimeDoctorClient

@lru_cache
def get_client() -> TimeDoctorClient:
    """
    Dependency returning the process-wide TimeDoctor client.
    """
    return TimeDoctorClient.from_settings()
