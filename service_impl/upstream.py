from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Tuple, TypeVar

import requests
from fastapi import HTTPException, status

from impl.integrations.github.client import UpstreamUnavailable
from impl.integrations.github.status_map import Outcome, OutcomeKind, StatusTable, resolve


logger = logging.getLogger("ghgateway.upstream")

T = TypeVar("T")

UNEXPECTED_ERROR = "Unexpected error"


def invoke(
    call: Callable[[], requests.Response],
    table: StatusTable,
    project: Optional[Callable[[Any], T]] = None,
) -> Tuple[Outcome, Optional[T]]:
    """Run one upstream call, map its status through ``table`` and decode the body.

    Returns the outcome together with the projected payload for ``DATA``
    outcomes (``None`` otherwise). Every non-success outcome is raised as an
    ``HTTPException`` carrying the mapped status and message.
    """
    try:
        resp = call()
    except UpstreamUnavailable as e:
        logger.error("github request failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=UNEXPECTED_ERROR)

    with resp:
        outcome = resolve(table, resp.status_code, resp.headers)
        if outcome.kind is OutcomeKind.RATE_LIMITED:
            logger.warning("github rate limit hit url=%s status=%s", resp.url, resp.status_code)
        if not outcome.is_success:
            raise HTTPException(status_code=outcome.status, detail=outcome.message)

        if outcome.kind is not OutcomeKind.DATA or project is None:
            return outcome, None

        try:
            payload = project(resp.json())
        except (ValueError, TypeError) as e:
            # json decode errors and pydantic ValidationError are both ValueErrors
            logger.warning("undecodable github response url=%s: %s", resp.url, e)
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=UNEXPECTED_ERROR)
        return outcome, payload
