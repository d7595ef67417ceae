# paige_api/utils/sanitizer.py
"""
Null stripping for loosely-typed payloads coming back from the generation
service and the places directory, applied before anything reaches MongoDB.

Values are treated as a tree of four cases: null, scalar, sequence, mapping.
Payloads are assumed to be trees (JSON-decoded), never graphs.
"""
from typing import Any, Dict, List, Mapping, Optional

_SCALAR_SEQUENCES = (str, bytes, bytearray)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple, set, frozenset))


def clean_payload(value: Any) -> Any:
    """
    Return a copy of `value` with every None removed at any depth.

    None maps to None; sequences drop elements that clean to None; mappings
    keep only entries whose cleaned value is not None. Idempotent.
    """
    if value is None:
        return None
    if isinstance(value, Mapping):
        cleaned: Dict[Any, Any] = {}
        for key, item in value.items():
            cleaned_item = clean_payload(item)
            if cleaned_item is not None:
                cleaned[key] = cleaned_item
        return cleaned
    if _is_sequence(value) and not isinstance(value, _SCALAR_SEQUENCES):
        return [cleaned_item for cleaned_item in (clean_payload(item) for item in value) if cleaned_item is not None]
    return value


def clean_vendor_map(vendors: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Per-record variant for vendor recommendations: every vendor record is cleaned
    on its own so a bad field on one vendor never affects its siblings.
    Non-mapping records are dropped; nested category maps are walked recursively.
    """
    if not isinstance(vendors, Mapping):
        return {}

    cleaned: Dict[str, Any] = {}
    for category, vendor_list in vendors.items():
        if _is_sequence(vendor_list):
            records: List[Dict[str, Any]] = []
            for vendor in vendor_list:
                if isinstance(vendor, Mapping):
                    records.append(clean_payload(vendor))
            cleaned[category] = records
        elif isinstance(vendor_list, Mapping):
            cleaned[category] = clean_vendor_map(vendor_list)
    return cleaned
