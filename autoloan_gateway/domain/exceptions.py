"""Domain-specific exceptions"""

from typing import List, Optional


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ValidationError(DomainException):
    """Loan config or borrower profile is malformed"""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class RiskUnavailableError(DomainException):
    """Risk scorer is unreachable, failed, or returned an unusable payload"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class RiskTimeoutError(RiskUnavailableError):
    """Risk scorer did not answer within the configured timeout"""

    pass
