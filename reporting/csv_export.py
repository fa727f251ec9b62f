"""
CSV Export

Delimited text export of circuit and cost data, byte-compatible with the
dashboard's download format:

- header row from the first row's keys, in order
- values comma-joined; a value containing a comma is wrapped in double
  quotes and nothing else is escaped
- rows joined with "\\n", no trailing newline
- values stringified like a JavaScript runtime (120 not 120.0, true not True)
"""

import math
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

from penalty.engine import compute_costs_for_circuit
from schemas.circuit import BreachEvent, CircuitRow
from schemas.vendor import VendorConfig


def format_number(value: float) -> str:
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    # Beyond 1e16 repr switches to shortest round-trip digits with an exponent
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))

    text = repr(value)
    if 1e-6 <= abs(value) < 1e21:
        if "e" in text:
            text = format(Decimal(text), "f")
        return text

    mantissa, _, exponent = text.partition("e")
    sign = "-" if exponent.startswith("-") else "+"
    digits = exponent.lstrip("+-").lstrip("0") or "0"
    return f"{mantissa}e{sign}{digits}"


def format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return format_value(value.value)
    if isinstance(value, (int, float)):
        return format_number(value)
    if isinstance(value, (list, tuple)):
        return ",".join(format_value(item) for item in value)
    if isinstance(value, Mapping):
        return "[object Object]"
    return str(value)


def export_to_csv(rows: Sequence[Mapping[str, Any]]) -> str:
    """
    Serialize rows to CSV text.

    Args:
        rows: Row mappings; the first row's keys define the columns

    Returns:
        CSV text, empty string for no rows
    """
    if not rows:
        return ""

    headers = list(rows[0].keys())
    lines = [",".join(headers)]

    for row in rows:
        cells = []
        for header in headers:
            text = format_value(row.get(header))
            cells.append(f'"{text}"' if "," in text else text)
        lines.append(",".join(cells))

    return "\n".join(lines)


def circuit_export_rows(
    circuits: Sequence[CircuitRow],
    vendor: Optional[VendorConfig] = None,
    events_by_circuit: Optional[Mapping[str, Sequence[BreachEvent]]] = None,
) -> List[Dict[str, Any]]:
    """
    Circuit rows keyed by wire field names.

    With a vendor, ``costUSD`` of that vendor's circuits is replaced by the
    engine's fresh total.
    """
    events_by_circuit = events_by_circuit or {}
    rows = []

    for circuit in circuits:
        # Absent optional fields are left out, not exported as empty columns
        row = circuit.model_dump(by_alias=True, exclude_none=True)
        if vendor is not None and circuit.vendor_id == vendor.vendor_id:
            breakdown = compute_costs_for_circuit(
                circuit, vendor, events_by_circuit.get(circuit.circuit_id, ())
            )
            row["costUSD"] = breakdown.total
        rows.append(row)

    return rows
