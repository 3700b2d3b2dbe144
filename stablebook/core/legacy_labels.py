"""
Normalization of enum labels found in legacy documents.

The legacy client stored Hebrew display labels as enum values. Imported
records are mapped to the canonical English values; values that are
already canonical pass through.

Dependencies: None
System role: Legacy data normalization for migration
"""

from typing import Any

GENDER_LABELS = {
    "זכר": "male",
    "נקבה": "female",
}

VISIT_TYPE_LABELS = {
    "בדיקה שגרתית": "routine",
    "טיפול": "treatment",
    "חירום": "emergency",
    "ניתוח": "surgery",
}

PREGNANCY_STATUS_LABELS = {
    "מאושר": "confirmed",
    "בהמתנה לאישור": "pending",
    "הסתיים": "ended",
}


def normalize_label(value: Any, labels: dict[str, str], default: str) -> str:
    """
    Map a legacy label to its canonical value.

    Args:
        value: Stored label (legacy or canonical)
        labels: Legacy label mapping for the field
        default: Value used when the label is empty, unknown or not a string

    Returns:
        str: Canonical enum value
    """
    if not isinstance(value, str) or not value.strip():
        return default
    value = value.strip()
    if value in labels:
        return labels[value]
    lowered = value.lower()
    if lowered in labels.values():
        return lowered
    return default
