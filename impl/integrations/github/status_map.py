"""Mapping of GitHub status codes to gateway outcomes.

Each endpoint owns a ``StatusTable`` (upstream status -> ``StatusRule``).
``resolve`` turns a table plus the upstream status and headers into an
``Outcome`` without touching the network, so the per-endpoint mappings can be
tested on their own.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Mapping, Optional


RATELIMIT_REMAINING_HEADER = "x-ratelimit-remaining"
RATELIMIT_RESET_HEADER = "x-ratelimit-reset"

UNEXPECTED_STATUS = "Unexpected status code"
NOT_AUTHORIZED = "Not authorized"


class OutcomeKind(str, Enum):
    DATA = "data"                    # body carries the record(s) to return
    OK = "ok"                        # success reported as an envelope
    FAILURE = "failure"              # error reported as an envelope
    RATE_LIMITED = "rate_limited"
    FORBIDDEN_OR_RATE_LIMITED = "forbidden_or_rate_limited"


@dataclass(frozen=True)
class StatusRule:
    kind: OutcomeKind
    message: str = ""
    status: Optional[int] = None  # local status; defaults to the upstream one


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    status: int
    message: str = ""

    @property
    def is_success(self) -> bool:
        return self.kind in (OutcomeKind.DATA, OutcomeKind.OK)


StatusTable = Dict[int, StatusRule]


def data(status: Optional[int] = None) -> StatusRule:
    return StatusRule(OutcomeKind.DATA, status=status)


def ok(message: str, status: Optional[int] = None) -> StatusRule:
    return StatusRule(OutcomeKind.OK, message, status)


def failure(message: str, status: Optional[int] = None) -> StatusRule:
    return StatusRule(OutcomeKind.FAILURE, message, status)


RATE_LIMITED = StatusRule(OutcomeKind.RATE_LIMITED)
FORBIDDEN_OR_RATE_LIMITED = StatusRule(OutcomeKind.FORBIDDEN_OR_RATE_LIMITED)


def format_duration(seconds: int) -> str:
    """Render whole seconds as ``45s``, ``1m30s`` or ``2h0m5s``."""
    if seconds <= 0:
        return "0s"
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    if hours:
        return f"{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{minutes}m{secs}s"
    return f"{secs}s"


def rate_limit_message(headers: Mapping[str, str], now: Optional[datetime] = None) -> str:
    raw = headers.get(RATELIMIT_RESET_HEADER)
    try:
        reset_at = int(str(raw).strip())
    except (TypeError, ValueError):
        return "Exceeded rate limit. Try again later"

    now = now or datetime.now(timezone.utc)
    remaining = reset_at - now.timestamp()
    # round half away from zero
    seconds = int(math.floor(remaining + 0.5)) if remaining > 0 else 0
    return f"Exceeded rate limit. Try again in {format_duration(seconds)}"


def quota_remaining(headers: Mapping[str, str]) -> Optional[int]:
    raw = headers.get(RATELIMIT_REMAINING_HEADER)
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return None


def resolve(
    table: StatusTable,
    status_code: int,
    headers: Mapping[str, str],
    now: Optional[datetime] = None,
) -> Outcome:
    rule = table.get(status_code)
    if rule is None:
        if status_code == 429:
            rule = RATE_LIMITED
        else:
            return Outcome(OutcomeKind.FAILURE, status_code, UNEXPECTED_STATUS)

    local_status = rule.status or status_code

    if rule.kind is OutcomeKind.FORBIDDEN_OR_RATE_LIMITED:
        remaining = quota_remaining(headers)
        # a missing quota header is never a rate-limit signal
        if remaining is None or remaining > 0:
            return Outcome(OutcomeKind.FAILURE, local_status, NOT_AUTHORIZED)
        return Outcome(OutcomeKind.RATE_LIMITED, local_status, rate_limit_message(headers, now))

    if rule.kind is OutcomeKind.RATE_LIMITED:
        return Outcome(OutcomeKind.RATE_LIMITED, local_status, rate_limit_message(headers, now))

    return Outcome(rule.kind, local_status, rule.message)
