"""Risk API HTTP client - remote implementation of the RiskScorer contract"""

import asyncio
import logging
from decimal import Decimal

import httpx
from pydantic import BaseModel, Field

from autoloan_gateway.config import settings
from autoloan_gateway.domain.exceptions import RiskTimeoutError, RiskUnavailableError
from autoloan_gateway.domain.models import Features, LoanTerms, RiskScore
from autoloan_gateway.infrastructure.observability.metrics import risk_api_failures_counter, risk_api_latency_histogram


class RiskScorePayload(BaseModel):
    """Expected response body; anything else is treated as unavailable"""

    pd: float = Field(..., ge=0.0, le=1.0)
    confidence: float = Field(..., ge=0.0, le=1.0)
    modelVersion: str = Field(..., min_length=1)


def _error_message(response: httpx.Response) -> str:
    """Server-provided error text: JSON `error`/`detail`, else raw body"""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        message = data.get("error") or data.get("detail")
        if message:
            return str(message)
    return response.text or response.reason_phrase


class RemoteRiskScorer:
    """Client for an external risk scoring API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_attempts: int | None = None,
        backoff: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.risk_api_base).rstrip("/")
        self.timeout = timeout or settings.risk_timeout_seconds
        self.max_attempts = max_attempts or settings.risk_max_attempts
        self.backoff = settings.risk_backoff_seconds if backoff is None else backoff
        self.transport = transport

    async def score(self, features: Features, terms: LoanTerms, income: Decimal) -> RiskScore:
        """
        POST features to {base_url}/v1/score.

        Retry strategy:
        - Timeouts, network failures and 5xx are retried up to max_attempts total
        - 4xx and malformed payloads fail immediately

        Raises:
            RiskTimeoutError: the final attempt timed out
            RiskUnavailableError: HTTP error, network failure, or invalid payload
        """
        body = {
            "ltv": features.ltv,
            "dti": features.dti,
            "apr": float(terms.apr) / 100,  # percent -> decimal
            "termMonths": terms.term_months,
            "income": float(income),
        }

        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            while True:
                attempt += 1
                try:
                    with risk_api_latency_histogram.time():
                        response = await client.post(f"{self.base_url}/v1/score", json=body)
                    response.raise_for_status()
                except httpx.TimeoutException as e:
                    failure, cause = RiskTimeoutError(f"Risk API timeout after {self.timeout}s"), e
                except httpx.HTTPStatusError as e:
                    status = e.response.status_code
                    failure = RiskUnavailableError(
                        f"Risk API error {status}: {_error_message(e.response)}", status_code=status
                    )
                    cause = e
                except httpx.RequestError as e:
                    failure, cause = RiskUnavailableError(f"Risk API unreachable: {e}"), e
                else:
                    return self._parse(response)

                risk_api_failures_counter.inc()
                retryable = failure.status_code is None or failure.status_code >= 500
                if not retryable or attempt >= self.max_attempts:
                    logging.error(f"Risk API failed after {attempt} attempt(s): {failure}")
                    raise failure from cause

                logging.warning(f"Risk API attempt {attempt} failed, retrying: {failure}")
                await asyncio.sleep(self.backoff * (2 ** (attempt - 1)))

    @staticmethod
    def _parse(response: httpx.Response) -> RiskScore:
        try:
            payload = RiskScorePayload.model_validate(response.json())
        except ValueError as e:
            risk_api_failures_counter.inc()
            raise RiskUnavailableError(f"Invalid risk payload: {e}", status_code=response.status_code) from e

        return RiskScore(pd=payload.pd, confidence=payload.confidence, model_version=payload.modelVersion)
