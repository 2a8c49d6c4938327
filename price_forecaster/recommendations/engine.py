"""
Buy-or-wait recommendation engine.

Signals
-------
price position   (current − min) / (max − min); 0.5 for a flat history.
                 low < 0.3, high > 0.7.
trend            mean of the last k prices vs the first k, k = min(7, n // 3);
                 > +3% rising, < −3% falling.  Needs at least 5 points.
volatility       coefficient of variation of all prices:
                 < 0.05 low, < 0.15 medium, else high.
festival impact  ``upcoming_festival_impact(category, as_of)``.
best predicted   lowest forecast price and its 1-based day index.
accuracy         mean forecast confidence.
discounted       festival within 30 days AND
                 current < average · (1 − festival_discount / 200).
savings %        (current − best_predicted) / current · 100.

Decision order
--------------
``RULES`` is evaluated top to bottom and the first match wins.  The order is
a behavioural contract: moving a rule changes recommendations.

    1. no history                              → set_alert 0.00
    2. near low (< 0.25), no festival ≤ 30d    → buy_now   0.85
    3. festival ≤ 30d, not yet discounted      → wait      festival confidence
    4. festival ≤ 30d, discounted, near low    → buy_now   0.90
    5. falling by more than 5%                 → wait      0.70
    6. rising by more than 5%                  → buy_now   0.75
    7. predicted savings > 10%                 → wait      mean forecast confidence
    8. position high                           → set_alert 0.65
    9. volatility high                         → set_alert 0.60
   10. otherwise                               → set_alert 0.50
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional, Sequence

from price_forecaster.models.festival import FestivalImpact
from price_forecaster.models.price import PricePoint, PricePrediction
from price_forecaster.models.recommendation import BuyRecommendation, RecommendationFactors
from price_forecaster.seasonality.calendar import (
    CATCH_ALL_CATEGORY,
    DEFAULT_LOOKAHEAD_DAYS,
    upcoming_festival_impact,
)
from price_forecaster.taxonomy.signals import (
    PricePosition,
    RecommendationAction,
    TrendDirection,
    VolatilityLevel,
)
from price_forecaster.utils.time_utils import resolve_as_of

logger = logging.getLogger(__name__)

FESTIVAL_IMMINENT_DAYS = 30
NEAR_LOW_POSITION = 0.25
STRONG_TREND = 0.05
WORTH_WAITING_SAVINGS_PCT = 10.0


# ── Signal extraction ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class PriceStats:
    """Summary statistics of a price history.

    Attributes:
        minimum, maximum, average, median: Usual statistics over all prices.
        volatility:       Coefficient of variation (stdev / mean).
        current_position: Where the current price sits in [min, max], 0..1.
    """

    minimum: float = 0.0
    maximum: float = 0.0
    average: float = 0.0
    median: float = 0.0
    volatility: float = 0.0
    current_position: float = 0.5


@dataclass(frozen=True)
class TrendSignal:
    direction: TrendDirection = TrendDirection.STABLE
    strength: float = 0.0


@dataclass(frozen=True)
class BestPrediction:
    price: float
    target_date: date
    days_ahead: int


def calculate_price_stats(prices: Sequence[float], current_price: float) -> PriceStats:
    """Compute range, centre, CV and current position of ``prices``."""
    if not prices:
        return PriceStats()

    ordered = sorted(prices)
    minimum = ordered[0]
    maximum = ordered[-1]
    average = sum(ordered) / len(ordered)
    median = ordered[len(ordered) // 2]

    variance = sum((p - average) ** 2 for p in ordered) / len(ordered)
    volatility = math.sqrt(variance) / average if average > 0 else 0.0
    position = (current_price - minimum) / (maximum - minimum) if maximum > minimum else 0.5

    return PriceStats(
        minimum=minimum,
        maximum=maximum,
        average=average,
        median=median,
        volatility=volatility,
        current_position=position,
    )


def analyze_trend(prices: Sequence[float]) -> TrendSignal:
    """Compare the mean of the most recent prices with the earliest ones.

    ``prices`` must be in date order.  Fewer than 5 points → stable.
    """
    if len(prices) < 5:
        return TrendSignal()

    window = min(7, len(prices) // 3)
    recent_avg = sum(prices[-window:]) / window
    earlier_avg = sum(prices[:window]) / window

    change = (recent_avg - earlier_avg) / earlier_avg if earlier_avg != 0 else 0.0

    if change > 0.03:
        direction = TrendDirection.RISING
    elif change < -0.03:
        direction = TrendDirection.FALLING
    else:
        direction = TrendDirection.STABLE
    return TrendSignal(direction=direction, strength=abs(change))


def find_best_predicted_price(
    predictions: Sequence[PricePrediction],
    fallback_price: float,
    fallback_date: date,
) -> BestPrediction:
    """Lowest forecast price; earliest day wins ties.

    Without predictions the current price and reference date stand in, so
    the engine never claims savings it cannot support.
    """
    if not predictions:
        return BestPrediction(price=fallback_price, target_date=fallback_date, days_ahead=0)

    best_index = min(range(len(predictions)), key=lambda i: predictions[i].predicted_price)
    best = predictions[best_index]
    return BestPrediction(
        price=best.predicted_price,
        target_date=best.target_date,
        days_ahead=best_index + 1,
    )


def _position_bucket(position: float) -> PricePosition:
    if position < 0.3:
        return PricePosition.LOW
    if position > 0.7:
        return PricePosition.HIGH
    return PricePosition.AVERAGE


def _volatility_bucket(cv: float) -> VolatilityLevel:
    if cv < 0.05:
        return VolatilityLevel.LOW
    if cv < 0.15:
        return VolatilityLevel.MEDIUM
    return VolatilityLevel.HIGH


@dataclass(frozen=True)
class Signals:
    """Everything the decision rules look at, computed once per call."""

    current_price: float
    stats: PriceStats
    trend: TrendSignal
    impact: Optional[FestivalImpact]
    best: BestPrediction
    position: PricePosition
    volatility: VolatilityLevel
    prediction_accuracy: float

    @property
    def is_near_low(self) -> bool:
        return self.stats.current_position < NEAR_LOW_POSITION

    @property
    def festival_soon(self) -> bool:
        return self.impact is not None and self.impact.days_until <= FESTIVAL_IMMINENT_DAYS

    @property
    def already_discounted(self) -> bool:
        if not self.festival_soon:
            return False
        threshold = self.stats.average * (1 - self.impact.expected_discount / 200)
        return self.current_price < threshold

    @property
    def potential_savings(self) -> float:
        return self.current_price - self.best.price

    @property
    def savings_pct(self) -> float:
        if self.current_price <= 0:
            return 0.0
        return self.potential_savings / self.current_price * 100


# ── Decision rules ────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Rule:
    """One guarded outcome of the decision chain."""

    name: str
    applies: Callable[[Signals], bool]
    action: RecommendationAction
    confidence: Callable[[Signals], float]
    reasoning: Callable[[Signals], str]


RULES: tuple[Rule, ...] = (
    Rule(
        name="near_low_no_festival",
        applies=lambda s: s.is_near_low and not s.festival_soon,
        action=RecommendationAction.BUY_NOW,
        confidence=lambda s: 0.85,
        reasoning=lambda s: (
            f"Current price is near its historical low "
            f"({s.stats.current_position * 100:.0f}th percentile). "
            f"No major festivals in the next {FESTIVAL_IMMINENT_DAYS} days. "
            "This is a good time to buy."
        ),
    ),
    Rule(
        name="festival_not_discounted",
        applies=lambda s: s.festival_soon and not s.already_discounted,
        action=RecommendationAction.WAIT,
        confidence=lambda s: s.impact.confidence,
        reasoning=lambda s: (
            f"{s.impact.festival} is {s.impact.days_until} days away with expected "
            f"{s.impact.expected_discount:.0f}% discount. Current price hasn't dropped "
            "yet. Wait for festival sale."
        ),
    ),
    Rule(
        name="festival_discounted_near_low",
        applies=lambda s: s.festival_soon and s.already_discounted and s.is_near_low,
        action=RecommendationAction.BUY_NOW,
        confidence=lambda s: 0.9,
        reasoning=lambda s: (
            "Price has already dropped for the upcoming festival and is near "
            "historical low. Buy now before stock runs out."
        ),
    ),
    Rule(
        name="falling_trend",
        applies=lambda s: s.trend.direction == TrendDirection.FALLING
        and s.trend.strength > STRONG_TREND,
        action=RecommendationAction.WAIT,
        confidence=lambda s: 0.7,
        reasoning=lambda s: (
            f"Price is on a downward trend ({s.trend.strength * 100:.0f}% decline). "
            f"Expected to drop further. Consider waiting {s.best.days_ahead} days."
        ),
    ),
    Rule(
        name="rising_trend",
        applies=lambda s: s.trend.direction == TrendDirection.RISING
        and s.trend.strength > STRONG_TREND,
        action=RecommendationAction.BUY_NOW,
        confidence=lambda s: 0.75,
        reasoning=lambda s: (
            f"Price is rising ({s.trend.strength * 100:.0f}% increase). "
            "Buy now before it goes higher."
        ),
    ),
    Rule(
        name="predicted_savings",
        applies=lambda s: s.savings_pct > WORTH_WAITING_SAVINGS_PCT,
        action=RecommendationAction.WAIT,
        confidence=lambda s: s.prediction_accuracy,
        reasoning=lambda s: (
            f"Price is predicted to drop by {s.savings_pct:.0f}% in the next "
            f"{s.best.days_ahead} days. Worth waiting."
        ),
    ),
    Rule(
        name="high_position",
        applies=lambda s: s.position == PricePosition.HIGH,
        action=RecommendationAction.SET_ALERT,
        confidence=lambda s: 0.65,
        reasoning=lambda s: (
            f"Current price is higher than usual "
            f"({s.stats.current_position * 100:.0f}th percentile). "
            f"Set an alert for price drops below ₹{s.stats.average:.0f}."
        ),
    ),
    Rule(
        name="high_volatility",
        applies=lambda s: s.volatility == VolatilityLevel.HIGH,
        action=RecommendationAction.SET_ALERT,
        confidence=lambda s: 0.6,
        reasoning=lambda s: (
            "Price is highly volatile. Set an alert and wait for a stable low price."
        ),
    ),
    Rule(
        name="default",
        applies=lambda s: True,
        action=RecommendationAction.SET_ALERT,
        confidence=lambda s: 0.5,
        reasoning=lambda s: (
            "Price is around average. Set an alert for better deals. You can also "
            "buy now if you need the product urgently."
        ),
    ),
)


# ── Entry points ──────────────────────────────────────────────────────────────


def generate_buy_recommendation(
    price_history: Sequence[PricePoint],
    predictions: Sequence[PricePrediction],
    category: str = CATCH_ALL_CATEGORY,
    as_of: Optional[date] = None,
    lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS,
) -> BuyRecommendation:
    """Recommend buy_now / wait / set_alert for one product.

    Args:
        price_history:  Daily observations in any order; the latest is the
                        current price.
        predictions:    Output of ``predict_prices`` for the same history.
        category:       Product category for festival relevance.
        as_of:          Reference date for festival lookups; today when ``None``.
        lookahead_days: Festival lookahead window.

    Returns:
        BuyRecommendation with the full factor breakdown.
    """
    today = resolve_as_of(as_of)

    if not price_history:
        return BuyRecommendation(
            action=RecommendationAction.SET_ALERT,
            confidence=0.0,
            reasoning="Insufficient price history to make a recommendation.",
            predicted_best_price=0.0,
            predicted_best_date=today,
            savings_if_wait=0.0,
            factors=RecommendationFactors(
                current_price_position=PricePosition.AVERAGE,
                trend=TrendDirection.STABLE,
                festival_impact=None,
                volatility=VolatilityLevel.MEDIUM,
                prediction_accuracy=0.0,
            ),
        )

    ordered = sorted(price_history, key=lambda p: p.obs_date)
    prices = [p.price for p in ordered]
    current_price = prices[-1]
    stats = calculate_price_stats(prices, current_price)

    accuracy = (
        sum(p.confidence for p in predictions) / len(predictions) if predictions else 0.0
    )

    signals = Signals(
        current_price=current_price,
        stats=stats,
        trend=analyze_trend(prices),
        impact=upcoming_festival_impact(category, today, lookahead_days),
        best=find_best_predicted_price(predictions, current_price, today),
        position=_position_bucket(stats.current_position),
        volatility=_volatility_bucket(stats.volatility),
        prediction_accuracy=accuracy,
    )

    rule = next(r for r in RULES if r.applies(signals))
    logger.debug("generate_buy_recommendation: rule=%s category=%s", rule.name, category)

    confidence = max(0.0, min(1.0, rule.confidence(signals)))
    return BuyRecommendation(
        action=rule.action,
        confidence=round(confidence, 2),
        reasoning=rule.reasoning(signals),
        predicted_best_price=round(signals.best.price, 2),
        predicted_best_date=signals.best.target_date,
        savings_if_wait=max(0.0, round(signals.potential_savings, 2)),
        factors=RecommendationFactors(
            current_price_position=signals.position,
            trend=signals.trend.direction,
            festival_impact=signals.impact,
            volatility=signals.volatility,
            prediction_accuracy=round(accuracy, 2),
        ),
    )


_ACTION_LABELS: dict[RecommendationAction, str] = {
    RecommendationAction.BUY_NOW: "BUY NOW",
    RecommendationAction.WAIT: "WAIT",
    RecommendationAction.SET_ALERT: "SET ALERT",
}


def recommendation_text(recommendation: BuyRecommendation) -> str:
    """Render a recommendation as a short headline plus its reasoning."""
    label = _ACTION_LABELS[recommendation.action]
    return (
        f"[{label}] ({recommendation.confidence * 100:.0f}% confidence)\n\n"
        f"{recommendation.reasoning}"
    )
