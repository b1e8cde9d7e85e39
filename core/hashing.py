"""
Hashing Module - SHA256 Audit Logic

Canonical JSON serialization and SHA256 hashing for tax reports. Two reports
computed from the same inputs serialize to the same bytes and therefore carry
the same hash.

Copyright (c) 2026 Andreas Wagner. All rights reserved.
"""

import hashlib
import json
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict


def canonical_json_dumps(obj: Any) -> str:
    """
    Serialize object to canonical JSON string.

    Ensures deterministic serialization for hashing:
    - Keys sorted alphabetically
    - No whitespace
    - Decimals as exact normalized strings (1.50 and 1.5 hash alike)
    - Dates as ISO strings

    Args:
        obj: Object to serialize (dict, list, or primitive)

    Returns:
        Canonical JSON string

    Example:
        >>> canonical_json_dumps({"tax_payable": Decimal("711600"), "rate": Decimal("0.15")})
        '{"rate":"0.15","tax_payable":"711600"}'
    """
    def default_handler(o):
        if isinstance(o, Decimal):
            return format(o.normalize(), 'f')
        elif isinstance(o, (date, datetime)):
            return o.isoformat()
        elif hasattr(o, 'to_dict'):
            return o.to_dict()
        else:
            raise TypeError(f"Object of type {type(o).__name__} is not JSON serializable")

    return json.dumps(
        obj,
        sort_keys=True,
        separators=(',', ':'),
        default=default_handler,
        ensure_ascii=True
    )


def calculate_sha256(data: Any) -> str:
    """
    Calculate SHA256 hash of data.

    Args:
        data: Data to hash (will be serialized to JSON)

    Returns:
        SHA256 hex digest prefixed with 'sha256:'
    """
    json_str = canonical_json_dumps(data)
    hash_obj = hashlib.sha256(json_str.encode('utf-8'))
    return f"sha256:{hash_obj.hexdigest()}"


def verify_hash(data: Any, expected_hash: str) -> bool:
    """
    Verify that data matches expected hash.

    Args:
        data: Data to verify
        expected_hash: Expected hash (with 'sha256:' prefix)

    Returns:
        True if hash matches, False otherwise
    """
    return calculate_sha256(data) == expected_hash


def create_audit_entry(event_id: str, inputs: Dict[str, Any], outputs: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create an audit entry sealing a calculation's inputs and outputs.

    The seal covers inputs and outputs only, so recomputing the same report
    later yields the same ``calculation_hash``; the timestamp is informational.

    Args:
        event_id: Identifier for this calculation
        inputs: Input data for the calculation
        outputs: Output/results of the calculation

    Returns:
        Audit entry dict with event_id, timestamp, calculation_hash, inputs, outputs
    """
    timestamp = datetime.now(timezone.utc)

    calculation_hash = calculate_sha256({
        "event_id": event_id,
        "inputs": inputs,
        "outputs": outputs
    })

    return {
        "event_id": event_id,
        "timestamp": timestamp.isoformat(),
        "calculation_hash": calculation_hash,
        "inputs": inputs,
        "outputs": outputs
    }
