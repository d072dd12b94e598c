"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class AllocationError(DomainException):
    """Allocation or override could not produce a plan"""

    pass


class InvalidAmountError(AllocationError):
    """Monetary amount is non-finite, negative or not representable in cents"""

    pass


class InvalidFundsError(InvalidAmountError):
    """Available funds are non-finite or negative"""

    pass


class InsufficientFundsError(AllocationError):
    """Available funds do not cover the minimum payments of eligible accounts"""

    def __init__(self, required_cents: int, available_cents: int):
        self.required_cents = required_cents
        self.available_cents = available_cents
        super().__init__(
            f"Available funds ({available_cents} cents) are below the "
            f"total minimum payment ({required_cents} cents)"
        )


class UnknownAccountError(AllocationError):
    """Override references an account that is not in the plan"""

    def __init__(self, account_id: str):
        self.account_id = account_id
        super().__init__(f"Account {account_id!r} is not part of the plan")


class NoEligibleAccountsError(AllocationError):
    """No account carries a positive balance"""

    pass


class InvalidAccountError(AllocationError):
    """Account snapshot violates its invariants"""

    def __init__(self, account_id: str, reason: str):
        self.account_id = account_id
        self.reason = reason
        super().__init__(f"Account {account_id!r} is invalid: {reason}")


class UnknownStrategyError(AllocationError):
    """Requested strategy is not one of the known strategies"""

    def __init__(self, strategy: object):
        self.strategy = strategy
        super().__init__(f"Unknown allocation strategy: {strategy!r}")
