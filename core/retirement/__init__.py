"""Retirement rollover lead funnel: incentive schedule and advisor calendar."""
from core.retirement.incentives import (
    IncentiveCalculator,
    RolloverIncentive,
    calculate_incentive_amount,
    get_rollover_incentives,
)
from core.retirement.scheduling import AdvisorCalendar, TimeSlot

__all__ = [
    'IncentiveCalculator',
    'RolloverIncentive',
    'calculate_incentive_amount',
    'get_rollover_incentives',
    'AdvisorCalendar',
    'TimeSlot',
]
