from typing import Any

from td_device_probe.scan.patterns import is_likely_computer_name
from td_device_probe.schemas.matches import FieldMatch

COMPUTER_NAME_KEYS: frozenset[str] = frozenset({
    "computername", "computer_name",
    "hostname", "host_name",
    "devicename", "device_name",
    "machinename", "machine_name",
    "workstation", "workstationname", "workstation_name",
    "clientname", "client_name",
    "systemname", "system_name",
    "pcname", "pc_name",
})

def json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    return "object"

def _children(obj: Any, path: str):
    if isinstance(obj, dict):
        for key, value in obj.items():
            key = str(key)
            yield key, f"{path}.{key}" if path else key, value
    elif isinstance(obj, (list, tuple)):
        for i, value in enumerate(obj):
            yield str(i), f"{path}[{i}]", value

def find_computer_name_fields(
    obj: Any,
    path: str = "",
    _active: frozenset[int] = frozenset(),
) -> list[FieldMatch]:
    """
    Walks a decoded JSON value and reports fields that may hold a computer name.

    A key from COMPUTER_NAME_KEYS is reported whatever its value; a string value
    that matches a hostname pattern is reported as well, under any key. Both
    can fire for the same field. There is no depth limit, but a container that
    is already being walked further up is not entered again.
    """
    matches: list[FieldMatch] = []
    if not isinstance(obj, (dict, list, tuple)) or id(obj) in _active:
        return matches

    active = _active | {id(obj)}
    for key, current_path, value in _children(obj, path):
        if key.lower() in COMPUTER_NAME_KEYS:
            matches.append(FieldMatch(
                path=current_path,
                key=key,
                value=value,
                type=json_type(value),
                looks_like_computer_name=is_likely_computer_name(value),
            ))

        if isinstance(value, str) and is_likely_computer_name(value):
            matches.append(FieldMatch(
                path=current_path,
                key=key,
                value=value,
                type="string",
                looks_like_computer_name=True,
                reason="Value matches computer name pattern",
            ))

        matches.extend(find_computer_name_fields(value, current_path, active))

    return matches
