from typing import Any

from td_device_probe.scan.patterns import is_likely_computer_name, get_computer_name_confidence
from td_device_probe.schemas.matches import NameMatch

def deep_search_for_computer_names(
    obj: Any,
    path: str = "",
    max_depth: int = 10,
    current_depth: int = 0,
) -> list[NameMatch]:
    """
    Collects every string in a JSON structure that looks like a computer name.

    Containers at current_depth >= max_depth are not searched.
    """
    results: list[NameMatch] = []
    if current_depth >= max_depth:
        return results

    if isinstance(obj, (list, tuple)):
        entries = [(str(i), f"{path}[{i}]", item) for i, item in enumerate(obj)]
    elif isinstance(obj, dict):
        entries = [(str(k), f"{path}.{k}" if path else str(k), v) for k, v in obj.items()]
    else:
        return results

    for key, current_path, value in entries:
        if isinstance(value, str) and is_likely_computer_name(value):
            results.append(NameMatch(
                path=current_path,
                key=key,
                value=value,
                confidence=get_computer_name_confidence(value),
            ))
        elif isinstance(value, (dict, list, tuple)):
            results.extend(
                deep_search_for_computer_names(value, current_path, max_depth, current_depth + 1)
            )

    return results
