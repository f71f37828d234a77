"""
Simulator orchestration.

This module wires address validation to the decision engine and the
explanation composer and returns a stable, structured response for the API
layer. It also keeps a short in-memory history of recent tests.
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from .. import settings
from ..schemas import BatchItemOut, HistoryItemOut, SimulateOut
from .decision import InvalidAddress, RuleSet, Verdict, evaluate, extract_domain, validate_address
from .explain import explain, short_summary
from .rules_input import is_valid_email_format

logger = logging.getLogger(__name__)


# ============================================================================
# History
# ============================================================================


@dataclass(frozen=True)
class HistoryEntry:
    address: str
    allowed: bool
    reason_code: str
    timestamp: datetime


def format_relative_time(timestamp: datetime, now: Optional[datetime] = None) -> str:
    """Human-friendly age of a history entry."""
    now = now or datetime.now(timezone.utc)
    minutes = int((now - timestamp).total_seconds() // 60)
    if minutes < 1:
        return "just now"
    if minutes == 1:
        return "1 minute ago"
    if minutes < 60:
        return f"{minutes} minutes ago"
    hours = minutes // 60
    if hours == 1:
        return "1 hour ago"
    if hours < 24:
        return f"{hours} hours ago"
    return timestamp.strftime("%d/%m %H:%M")


class SimulationHistory:
    """Most recent simulations first, bounded to `limit` entries."""

    def __init__(self, limit: int = settings.HISTORY_LIMIT):
        self._entries: deque = deque(maxlen=limit)
        self._lock = threading.Lock()

    def add(self, address: str, verdict: Verdict, timestamp: Optional[datetime] = None) -> HistoryEntry:
        entry = HistoryEntry(
            address=address,
            allowed=verdict.allowed,
            reason_code=verdict.reason_code.value,
            timestamp=timestamp or datetime.now(timezone.utc),
        )
        with self._lock:
            self._entries.appendleft(entry)
        return entry

    def entries(self) -> List[HistoryEntry]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def history_out(history: SimulationHistory, now: Optional[datetime] = None) -> List[HistoryItemOut]:
    return [
        HistoryItemOut(
            address=e.address,
            allowed=e.allowed,
            reason_code=e.reason_code,
            timestamp=e.timestamp.isoformat(),
            relative_time=format_relative_time(e.timestamp, now),
        )
        for e in history.entries()
    ]


# ============================================================================
# Public API
# ============================================================================


def check_address(address: str, strict: bool = settings.STRICT_ADDRESSES) -> str:
    """
    Validate an address before evaluation.

    Strict mode also requires the `local@host.tld` shape accepted by the
    forms; otherwise only `local@domain` is required.
    """
    normalized = validate_address(address)
    if strict and not is_valid_email_format(normalized):
        raise InvalidAddress(f"Invalid email format: {address!r}")
    return normalized


def simulate(address: str, rules: RuleSet, history: Optional[SimulationHistory] = None,
             strict: bool = settings.STRICT_ADDRESSES) -> SimulateOut:
    """
    Orchestrate validation -> decision -> explanation for one address.

    Raises:
        InvalidAddress: if the address is rejected at the boundary
    """
    normalized = check_address(address, strict=strict)
    verdict = evaluate(normalized, rules)

    logger.info(f"Simulated address at {extract_domain(normalized)}: {verdict.reason_code.value}")
    if history is not None:
        history.add(normalized, verdict)

    return SimulateOut(
        address=normalized,
        allowed=verdict.allowed,
        reason_code=verdict.reason_code.value,
        matched_rule=verdict.matched_rule.describe() if verdict.matched_rule else None,
        explanation=explain(normalized, verdict, rules),
        summary=short_summary(verdict),
    )


def simulate_batch(addresses: Iterable[str], rules: RuleSet,
                   strict: bool = settings.STRICT_ADDRESSES) -> List[BatchItemOut]:
    """Simulate each address; invalid ones are reported without stopping the batch."""
    results: List[BatchItemOut] = []
    for address in addresses:
        try:
            results.append(BatchItemOut(address=address, result=simulate(address, rules, strict=strict)))
        except InvalidAddress as e:
            logger.warning(f"Skipped invalid address in batch: {e}")
            results.append(BatchItemOut(address=address, error=str(e)))
    return results
