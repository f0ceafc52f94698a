from .patterns import Confidence, is_likely_computer_name, get_computer_name_confidence
from .fields import find_computer_name_fields
from .deep_search import deep_search_for_computer_names

__all__ = [
    "Confidence",
    "is_likely_computer_name",
    "get_computer_name_confidence",
    "find_computer_name_fields",
    "deep_search_for_computer_names",
]
