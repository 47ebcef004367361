"""
Rollover incentive schedule.

A prospective client who rolls retirement funds over earns a one-time cash
incentive based on the amount moved:

    < $50,000                 $0
    $50,000 - $99,999         $500
    $100,000 - $249,999       $1,000
    $250,000 - $499,999       $2,000
    $500,000 - $999,999       $3,000
    $1,000,000 and above      $4,000

Each tier includes its lower bound and excludes its upper bound; the top
tier is unbounded. The incentive is paid subject to a holding period.
"""
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

from core.config_loader import IncentiveTier, RetirementConfig


@dataclass(frozen=True)
class RolloverIncentive:
    """Published incentive schedule (five tiers plus holding period)."""
    tier1_amount: int  # $50,000 - $99,999
    tier2_amount: int  # $100,000 - $249,999
    tier3_amount: int  # $250,000 - $499,999
    tier4_amount: int  # $500,000 - $999,999
    tier5_amount: int  # $1,000,000 and above
    holding_period_months: int


class IncentiveCalculator:
    """Tiered lookup of rollover incentives."""

    def __init__(self, config: Optional[RetirementConfig] = None):
        config = config or RetirementConfig()
        # RetirementConfig validation guarantees ascending, non-decreasing tiers
        self.tiers: List[IncentiveTier] = list(config.incentive_tiers)
        self.holding_period_months = config.holding_period_months

    def calculate(self, rollover_amount: float) -> int:
        """Return the incentive for a rollover amount.

        Amounts below the lowest threshold (including negatives) earn nothing.

        Raises:
            ValueError: the amount is NaN or infinite.
        """
        if not math.isfinite(rollover_amount):
            raise ValueError(f"Rollover amount must be finite: {rollover_amount}")
        incentive = 0
        for tier in self.tiers:
            if rollover_amount >= tier.min_amount:
                incentive = tier.incentive
            else:
                break
        return incentive

    def schedule(self) -> RolloverIncentive:
        amounts = [tier.incentive for tier in self.tiers]
        # Published schedule always has five slots; pad with the top tier if fewer are configured
        while len(amounts) < 5:
            amounts.append(amounts[-1])
        return RolloverIncentive(
            tier1_amount=amounts[0],
            tier2_amount=amounts[1],
            tier3_amount=amounts[2],
            tier4_amount=amounts[3],
            tier5_amount=amounts[4],
            holding_period_months=self.holding_period_months,
        )

    def describe_tiers(self) -> List[dict]:
        """Tier rows with inclusive lower / exclusive upper bounds."""
        rows = []
        for idx, tier in enumerate(self.tiers):
            upper = self.tiers[idx + 1].min_amount if idx + 1 < len(self.tiers) else None
            rows.append({
                "min_amount": tier.min_amount,
                "max_amount": upper,
                "incentive": tier.incentive,
            })
        return rows


_default_calculator = IncentiveCalculator()


def calculate_incentive_amount(rollover_amount: float,
                               tiers: Optional[Sequence[IncentiveTier]] = None) -> int:
    """Calculate the incentive for `rollover_amount` using the default schedule."""
    if tiers is None:
        return _default_calculator.calculate(rollover_amount)
    return IncentiveCalculator(RetirementConfig(incentive_tiers=list(tiers))).calculate(rollover_amount)


def get_rollover_incentives() -> RolloverIncentive:
    return _default_calculator.schedule()
