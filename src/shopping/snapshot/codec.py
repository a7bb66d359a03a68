"""JSON codec for snapshot arrays.

Engines persist their collections as a JSON array of flat objects. Each
engine declares a field table of ``(attribute name, wire key)`` pairs; unset
(None) attributes are omitted on write and unknown keys are ignored on read.
"""

import json

from protean.exceptions import ValidationError


def encode_records(records, wire_fields) -> str:
    """Serialize objects (or dicts) to a JSON array using ``wire_fields``."""
    payload = []
    for record in records:
        data = {}
        for attr, key in wire_fields:
            value = record.get(attr) if isinstance(record, dict) else getattr(record, attr, None)
            if value is not None:
                data[key] = value
        payload.append(data)
    return json.dumps(payload, allow_nan=False)


def decode_records(raw, wire_fields, legacy_keys=None) -> list[dict]:
    """Parse a JSON array into attribute-keyed dicts.

    ``legacy_keys`` maps older wire keys to attributes; when both an old and a
    current key are present, the current one wins. Raises ValidationError when
    the payload is not a JSON array of objects.
    """
    legacy_keys = legacy_keys or {}
    try:
        payload = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise ValidationError({"snapshot": [f"Snapshot is not valid JSON: {exc}"]}) from exc

    if not isinstance(payload, list):
        raise ValidationError({"snapshot": ["Snapshot must be a JSON array"]})

    wire_to_attr = {key: attr for attr, key in wire_fields}
    records = []
    for position, obj in enumerate(payload):
        if not isinstance(obj, dict):
            raise ValidationError({"snapshot": [f"Entry {position} is not a JSON object"]})

        record = {}
        legacy = {}
        for key, value in obj.items():
            if key in wire_to_attr:
                record[wire_to_attr[key]] = value
            elif key in legacy_keys:
                legacy[legacy_keys[key]] = value
        for attr, value in legacy.items():
            record.setdefault(attr, value)
        records.append(record)
    return records
