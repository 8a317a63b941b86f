"""
Keyguard Keystroke Log Parser

Tolerant field extraction for raw keystroke logs.
The log is a JSON-ish blob posted by the login form. It is never trusted to be
well formed, so every known field is located by its own pattern over the whole
blob instead of decoding individual records. A field that cannot be found
contributes zero occurrences.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple, Union


Number = Union[int, float]


# =============================================================================
# Field Patterns
# =============================================================================

# Key may be quoted or bare but must not be the tail of a longer key
_KEY = r'(?<![\w"])"?{name}"?\s*:\s*'

_INTEGER = r'"?(\d+)'
_DECIMAL = r'"?(\d+(?:\.\d+)?)'


def _type_pattern(value: str) -> re.Pattern:
    """Pattern for a `type` field holding exactly `value`."""
    return re.compile(_KEY.format(name="type") + r'"?' + value + r'(?!\w)')


def _value_pattern(name: str, number: str) -> re.Pattern:
    """Pattern for a numeric field; the number is captured in group 1."""
    return re.compile(_KEY.format(name=re.escape(name)) + number)


# =============================================================================
# Converters
# =============================================================================

# Longest digit run converted exactly; anything longer is clamped
MAX_LEN_DIGITS = 9
OVERSIZE_LEN = 10 ** MAX_LEN_DIGITS


def _to_length(digits: str) -> int:
    """Insert length, clamped to OVERSIZE_LEN for absurdly long digit runs."""
    digits = digits.lstrip("0") or "0"
    if len(digits) > MAX_LEN_DIGITS:
        return OVERSIZE_LEN
    return int(digits)


def _to_millis(text: str) -> Optional[float]:
    """Timing value in ms, or None when it does not fit a finite float."""
    value = float(text)
    return value if math.isfinite(value) else None


# =============================================================================
# Data Structures
# =============================================================================

@dataclass(frozen=True)
class FieldSpec:
    """A typed, optional field located independently in the log."""
    name: str
    pattern: re.Pattern
    convert: Optional[Callable[[str], Optional[Number]]] = None  # None -> count only


@dataclass(frozen=True)
class ParsedCounts:
    """Event counts and raw timing values extracted from one keystroke log."""
    down_count: int = 0
    up_count: int = 0
    insert_count: int = 0
    insert_lengths: Tuple[int, ...] = field(default_factory=tuple)
    down_down: Tuple[float, ...] = field(default_factory=tuple)
    dwell_times: Tuple[float, ...] = field(default_factory=tuple)

    @property
    def has_key_events(self) -> bool:
        """True if the device reported discrete key-down or key-up events."""
        return self.down_count > 0 or self.up_count > 0


# =============================================================================
# Parser
# =============================================================================

class KeystrokeLogParser:
    """
    Extracts ParsedCounts from a raw keystroke log.

    Recognised fields:
        - type: down | up | insert  (counted)
        - len: N                    (integer, insert records)
        - down_down: X              (decimal ms, key-down records)
        - dwellTime: X              (decimal ms, key-up records)

    Numeric patterns only accept unsigned digits, so negative, null or
    non-numeric values are never collected. Timing values too large for a
    finite float are dropped; oversized insert lengths are clamped, which
    still marks them as multi-character. parse() never raises.
    """

    FIELDS: Tuple[FieldSpec, ...] = (
        FieldSpec("down", _type_pattern("down")),
        FieldSpec("up", _type_pattern("up")),
        FieldSpec("insert", _type_pattern("insert")),
        FieldSpec("len", _value_pattern("len", _INTEGER), _to_length),
        FieldSpec("down_down", _value_pattern("down_down", _DECIMAL), _to_millis),
        FieldSpec("dwellTime", _value_pattern("dwellTime", _DECIMAL), _to_millis),
    )

    def extract(self, raw: Optional[str]) -> Dict[str, List[Number]]:
        """
        Scan the log once per field.

        Returns:
            Mapping of field name to collected values. Count-only fields
            collect a 1 per occurrence.
        """
        found: Dict[str, List[Number]] = {spec.name: [] for spec in self.FIELDS}
        if not raw:
            return found

        for spec in self.FIELDS:
            values = found[spec.name]
            for match in spec.pattern.finditer(raw):
                if spec.convert is None:
                    values.append(1)
                    continue
                value = spec.convert(match.group(1))
                if value is not None:
                    values.append(value)
        return found

    def parse(self, raw: Optional[str]) -> ParsedCounts:
        """Parse a raw keystroke log into counts and timing streams."""
        found = self.extract(raw)

        return ParsedCounts(
            down_count=len(found["down"]),
            up_count=len(found["up"]),
            insert_count=len(found["insert"]),
            insert_lengths=tuple(int(v) for v in found["len"]),
            down_down=tuple(float(v) for v in found["down_down"]),
            dwell_times=tuple(float(v) for v in found["dwellTime"]),
        )
