"""
Circuit Filters

Narrow a circuit list by vendor, region, status, bandwidth tier and search text.
"""

import re
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

from schemas.circuit import BreachEvent, CircuitFilters, CircuitRow


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_bandwidth_tier(tier: str) -> Optional[int]:
    """Leading integer of a tier label ("100", "100 Mbps"), None if absent."""
    match = _LEADING_INT.match(tier)
    return int(match.group(1)) if match else None


def filter_circuits(
    circuits: Sequence[CircuitRow],
    vendor_id: Optional[str] = None,
    filters: Optional[CircuitFilters] = None,
) -> List[CircuitRow]:
    """
    Apply filters in order; unset filters are skipped.

    ``search_term`` matches the circuit id or any site, case-insensitively.
    ``time_window`` does not narrow snapshots.
    """
    result = list(circuits)

    if vendor_id:
        result = [c for c in result if c.vendor_id == vendor_id]

    if filters is None:
        return result

    if filters.region:
        result = [c for c in result if c.region == filters.region]

    if filters.status:
        result = [c for c in result if c.status == filters.status]

    if filters.bandwidth_tier:
        bandwidth = parse_bandwidth_tier(filters.bandwidth_tier)
        result = [c for c in result if bandwidth is not None and c.bandwidth_mbps == bandwidth]

    if filters.search_term:
        term = filters.search_term.lower()
        result = [
            c for c in result
            if term in c.circuit_id.lower() or any(term in site.lower() for site in c.sites)
        ]

    return result


def group_events_by_circuit(events: Iterable[BreachEvent]) -> Dict[str, List[BreachEvent]]:
    grouped: Dict[str, List[BreachEvent]] = defaultdict(list)
    for event in events:
        grouped[event.circuit_id].append(event)
    return dict(grouped)
