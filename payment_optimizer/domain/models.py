"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class Strategy(str, Enum):
    """How funds beyond the minimum payments are distributed"""

    UTILIZATION_MINIMIZING = "utilization_minimizing"
    INTEREST_MINIMIZING = "interest_minimizing"
    BALANCE_SNOWBALL = "balance_snowball"


@dataclass(frozen=True)
class AccountSnapshot:
    """Revolving credit account as supplied by the account data provider"""

    account_id: str
    current_balance_cents: int
    credit_limit_cents: int
    minimum_payment_cents: int
    interest_rate_annual_percent: float = 0.0
    nickname: Optional[str] = None


@dataclass(frozen=True)
class AllocationInput:
    """Accounts, funds and strategy for one allocation run"""

    accounts: Tuple[AccountSnapshot, ...]
    available_funds_cents: int
    strategy: Strategy = Strategy.UTILIZATION_MINIMIZING


@dataclass(frozen=True)
class AccountState:
    """Running payment state of one account while a strategy distributes funds"""

    snapshot: AccountSnapshot
    suggested_payment_cents: int
    new_balance_cents: int


@dataclass(frozen=True)
class ScoreFactors:
    """Contributions to the projected score change"""

    utilization_impact: float
    payment_history_impact: float
    credit_mix_impact: float


@dataclass(frozen=True)
class ScoreImpact:
    """Heuristic credit score projection"""

    baseline_score: int
    projected_score: float
    change_points: float
    factors: ScoreFactors


@dataclass(frozen=True)
class AccountPlan:
    """Suggested payment and its utilization effect for one account"""

    account_id: str
    current_balance_cents: int
    credit_limit_cents: int
    minimum_payment_cents: int
    suggested_payment_cents: int
    new_balance_cents: int
    old_utilization: float
    new_utilization: float
    utilization_change_percentage_points: float
    utilization_status: str
    score_impact_points: float
    estimated_interest_saved_cents: int
    is_manual: bool = False
    nickname: Optional[str] = None


@dataclass(frozen=True)
class AllocationPlan:
    """Output of an allocation run or a reconciled override"""

    strategy: Strategy
    available_funds_cents: int
    accounts: Tuple[AccountPlan, ...]
    total_old_utilization: float
    total_new_utilization: float
    score_impact: ScoreImpact
    total_payment_cents: int
    unallocated_cents: int
    estimated_interest_saved_cents: int
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def get_account(self, account_id: str) -> Optional[AccountPlan]:
        for account in self.accounts:
            if account.account_id == account_id:
                return account
        return None
