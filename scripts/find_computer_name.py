import argparse
import json

from td_device_probe.core.config import settings
from td_device_probe.core.logging import setup_logging
from td_device_probe.services.exploration import explore_user_data, find_computer_name_endpoint
from td_device_probe.services.timedoctor_client import TimeDoctorClient

if __name__ == "__main__":
    setup_logging(settings.log_level)

    parser = argparse.ArgumentParser(description="Search TimeDoctor data for a user's computer name")
    parser.add_argument("user_id")
    parser.add_argument("--explore", action="store_true", help="probe every candidate endpoint instead of the priority ones")
    parser.add_argument("--max-depth", type=int, default=settings.search_max_depth)
    args = parser.parse_args()

    client = TimeDoctorClient.from_settings()
    if args.explore:
        result = explore_user_data(client, args.user_id, delay=settings.explore_delay_seconds)
    else:
        result = find_computer_name_endpoint(
            client,
            args.user_id,
            delay=settings.search_delay_seconds,
            max_depth=args.max_depth,
        )

    print(json.dumps(result.model_dump(mode="json", by_alias=True, exclude_unset=True), indent=2, ensure_ascii=False))
