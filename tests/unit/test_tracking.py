"""Unit tests for last-input-wins evaluation tracking"""

import asyncio
import logging
from dataclasses import replace

import pytest

from autoloan_gateway.domain.exceptions import RiskUnavailableError
from autoloan_gateway.domain.models import BorrowerProfile, LoanConfig, RiskScore
from autoloan_gateway.domain.tracking import EvaluationTracker


class GatedRiskScorer:
    """Blocks evaluations for one term length until released"""

    def __init__(self, blocked_term: int):
        self.blocked_term = blocked_term
        self.gate = asyncio.Event()
        self.fail = False

    async def score(self, features, terms, income) -> RiskScore:
        if terms.term_months == self.blocked_term:
            await self.gate.wait()
        if self.fail:
            raise RiskUnavailableError("scorer down")
        return RiskScore(pd=0.1, confidence=0.8, model_version="test-gated")


async def test_newer_submission_supersedes_in_flight(approved_config: LoanConfig, prime_borrower: BorrowerProfile):
    scorer = GatedRiskScorer(blocked_term=60)
    tracker = EvaluationTracker(scorer=scorer)

    stale = asyncio.create_task(tracker.submit(approved_config, prime_borrower))
    await asyncio.sleep(0)

    fresh_cfg = replace(approved_config, term_months=48)
    fresh = await tracker.submit(fresh_cfg, prime_borrower)

    assert await stale is None
    assert fresh is not None
    assert fresh.features.term_months == 48
    assert tracker.latest is fresh
    assert tracker.active_id == 2


async def test_superseded_evaluation_logs_request_id(
    approved_config: LoanConfig, prime_borrower: BorrowerProfile, caplog: pytest.LogCaptureFixture
):
    caplog.set_level(logging.DEBUG)
    tracker = EvaluationTracker(scorer=GatedRiskScorer(blocked_term=60))

    stale = asyncio.create_task(tracker.submit(approved_config, prime_borrower))
    await asyncio.sleep(0)
    await tracker.submit(replace(approved_config, term_months=48), prime_borrower)
    await stale

    superseded = [r for r in caplog.records if r.getMessage() == "Evaluation superseded"]
    assert len(superseded) == 1
    assert superseded[0].request_id == 1


async def test_sequential_submissions_update_latest(approved_config: LoanConfig, prime_borrower: BorrowerProfile):
    tracker = EvaluationTracker()

    first = await tracker.submit(approved_config, prime_borrower)
    second = await tracker.submit(replace(approved_config, down=5000), prime_borrower)

    assert first is not None and second is not None
    assert tracker.latest is second


async def test_failure_keeps_last_known_good(approved_config: LoanConfig, prime_borrower: BorrowerProfile):
    scorer = GatedRiskScorer(blocked_term=-1)
    tracker = EvaluationTracker(scorer=scorer)

    good = await tracker.submit(approved_config, prime_borrower)
    scorer.fail = True

    with pytest.raises(RiskUnavailableError):
        await tracker.submit(replace(approved_config, down=5000), prime_borrower)

    assert tracker.latest is good


async def test_caller_cancellation_propagates(approved_config: LoanConfig, prime_borrower: BorrowerProfile):
    scorer = GatedRiskScorer(blocked_term=60)
    tracker = EvaluationTracker(scorer=scorer)

    pending = asyncio.create_task(tracker.submit(approved_config, prime_borrower))
    await asyncio.sleep(0)
    pending.cancel()

    with pytest.raises(asyncio.CancelledError):
        await pending
    assert tracker.latest is None
