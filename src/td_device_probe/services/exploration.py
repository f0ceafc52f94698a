from datetime import datetime, timezone

from td_device_probe.core.logging import get_logger
from td_device_probe.scan import find_computer_name_fields, deep_search_for_computer_names
from td_device_probe.schemas.exploration import (
    EndpointFields,
    ExplorationResult,
    ExplorationSummary,
    ExploreResponse,
    Finding,
    SearchResponse,
    SearchResult,
)
from td_device_probe.services.candidates import exploration_endpoints, priority_endpoints
from td_device_probe.services.prober import UpstreamClient, probe_endpoints

logger = get_logger(__name__)

TARGET_PATTERN = "Looking for patterns like: Macbooks-MacBook-Air.local, DESKTOP-ABC123, etc."

def explore_user_data(client: UpstreamClient, user_id: str, delay: float = 0.1) -> ExploreResponse:
    """
    Probes every candidate endpoint for a user and scans each response for
    fields that may hold the computer name.
    """
    company_id = client.get_company_id()
    candidates = exploration_endpoints(user_id, company_id)
    logger.info(f"Exploring {len(candidates)} endpoints for user {user_id}")

    data_found = {}
    errors = {}
    potential_fields: list[EndpointFields] = []

    for outcome in probe_endpoints(client, candidates, delay=delay):
        if not outcome.ok:
            errors[outcome.key] = outcome.error
            continue

        data_found[outcome.key] = outcome.data
        fields = find_computer_name_fields(outcome.data)
        if fields:
            potential_fields.append(EndpointFields(endpoint=outcome.endpoint, fields=fields))

    recommendations = []
    if potential_fields:
        recommendations.append("Found potential computer name fields, check the potentialComputerNameFields array.")
        logger.info(f"Found potential computer name fields in {len(potential_fields)} endpoints")
    else:
        recommendations.append("No obvious computer name fields found. The data might be in a nested object or a different field name.")
        recommendations.append("Check the dataFound object manually for hostname, computerName, deviceName, etc.")

    summary = ExplorationSummary(
        endpoints_worked=len(data_found),
        endpoints_failed=len(errors),
        potential_computer_name_fields=len(potential_fields),
        recommendations=recommendations,
    )
    logger.info(f"Exploration complete: {summary.endpoints_worked} endpoints worked, {summary.endpoints_failed} failed")

    return ExploreResponse(
        success=True,
        message=f"Deep exploration completed for user {user_id}",
        summary=summary,
        data=ExplorationResult(
            user_id=user_id,
            company_id=company_id,
            timestamp=datetime.now(timezone.utc),
            data_found=data_found,
            errors=errors,
            potential_computer_name_fields=potential_fields,
        ),
    )

def _recommend(findings: list[Finding]) -> list[str]:
    hits = [f for f in findings if f.success and f.computer_names]
    if not hits:
        return [
            "No computer names found in the checked endpoints",
            "The computer name might be in a different API endpoint not yet checked",
            "Check whether the TimeDoctor client sends device info during login or session creation",
            "Check the TimeDoctor API documentation for device/computer endpoints",
        ]

    unique_names = {n.value for f in hits for n in f.computer_names}
    return [
        "Found computer names in TimeDoctor data",
        f"Found computer names in {len(hits)} different endpoints",
        f"Total unique computer names found: {len(unique_names)}",
        "Point the device lookup at these endpoints and field paths",
    ]

def find_computer_name_endpoint(
    client: UpstreamClient,
    user_id: str,
    delay: float = 0.2,
    max_depth: int = 10,
) -> SearchResponse:
    """
    Deep-searches the few endpoints most likely to carry device metadata.
    """
    company_id = client.get_company_id()
    logger.info(f"Targeted computer name search for user {user_id}")

    findings: list[Finding] = []
    for outcome in probe_endpoints(client, priority_endpoints(user_id, company_id), delay=delay):
        description = outcome.candidate.description
        if not outcome.ok:
            findings.append(Finding(
                endpoint=outcome.endpoint,
                description=description,
                error=outcome.error,
                success=False,
            ))
            continue

        names = deep_search_for_computer_names(outcome.data, max_depth=max_depth)
        if names:
            findings.append(Finding(
                endpoint=outcome.endpoint,
                description=description,
                computer_names=names,
                success=True,
            ))
            logger.info(f"  {len(names)} potential computer names in {description}")
            for name in names:
                logger.info(f"    {name.value} (found in: {name.path})")
        else:
            findings.append(Finding(
                endpoint=outcome.endpoint,
                description=description,
                computer_names=[],
                success=False,
                note="No computer name patterns found",
            ))

    hits = sum(1 for f in findings if f.success)
    logger.info(f"Computer name search complete for user {user_id}: {hits} of {len(findings)} endpoints had matches")

    return SearchResponse(
        success=True,
        message=f"Computer name search completed for user {user_id}",
        data=SearchResult(
            user_id=user_id,
            target_pattern=TARGET_PATTERN,
            findings=findings,
            recommendations=_recommend(findings),
        ),
    )
