"""Last-input-wins coordination for callers that re-evaluate on every input change"""

import asyncio
import itertools
import logging
from typing import Optional, Sequence

from autoloan_gateway.domain.models import BorrowerProfile, EvaluationResult, Lender, LoanConfig, RuleConfig
from autoloan_gateway.domain.offers import DEFAULT_LENDERS
from autoloan_gateway.domain.pipeline import evaluate_application
from autoloan_gateway.domain.rules import DEFAULT_RULES
from autoloan_gateway.domain.scoring import LocalRiskScorer, RiskScorer


class EvaluationTracker:
    """
    Runs evaluations so that only the newest submission's result is applied.

    - Each submit() gets a fresh request id and cancels the in-flight one
    - A superseded submission returns None and never touches `latest`
    - A failed submission raises; `latest` stays the last-known-good result
    """

    def __init__(
        self,
        scorer: Optional[RiskScorer] = None,
        lenders: Sequence[Lender] = DEFAULT_LENDERS,
        rules: RuleConfig = DEFAULT_RULES,
    ):
        self.scorer = scorer or LocalRiskScorer()
        self.lenders = lenders
        self.rules = rules
        self.latest: Optional[EvaluationResult] = None
        self._ids = itertools.count(1)
        self._active_id = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def active_id(self) -> int:
        return self._active_id

    async def submit(self, cfg: LoanConfig, borrower: BorrowerProfile) -> Optional[EvaluationResult]:
        request_id = next(self._ids)
        self._active_id = request_id

        if self._task is not None and not self._task.done():
            self._task.cancel()

        task = asyncio.ensure_future(
            evaluate_application(cfg, borrower, self.lenders, self.scorer, self.rules)
        )
        self._task = task

        try:
            result = await task
        except asyncio.CancelledError:
            if request_id != self._active_id:
                logging.debug("Evaluation superseded", extra={"request_id": request_id})
                return None
            raise
        except Exception:
            # Failures of a superseded request are as stale as its results
            if request_id != self._active_id:
                logging.debug("Discarding stale evaluation failure", extra={"request_id": request_id})
                return None
            raise

        if request_id != self._active_id:
            logging.debug("Discarding stale evaluation", extra={"request_id": request_id})
            return None

        self.latest = result
        return result
