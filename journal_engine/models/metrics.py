"""Data models for metrics calculations"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .simulation import CapitalSimulation, MonteCarloResult


@dataclass(frozen=True)
class StreakReport:
    """Win/loss streaks and the two recovery statistics."""
    max_win_streak: int = 0
    max_loss_streak: int = 0
    # Streak-based recovery: result of the day that ended a run of >= 2 days
    after_win_streak_results: tuple[float, ...] = ()
    after_loss_streak_results: tuple[float, ...] = ()
    avg_after_win_streak: float = 0.0
    avg_after_loss_streak: float = 0.0
    # Single-day recovery: result of the day following any losing day
    avg_recovery_after_loss: float = 0.0
    recovery_rate: float = 0.0               # % of post-loss days that were positive
    recovery_events: int = 0

    @property
    def after_win_streak_count(self) -> int:
        return len(self.after_win_streak_results)

    @property
    def after_loss_streak_count(self) -> int:
        return len(self.after_loss_streak_results)

    def to_dict(self) -> dict[str, Any]:
        return {
            "maxWinStreak": self.max_win_streak,
            "maxLossStreak": self.max_loss_streak,
            "avgAfterWinStreak": self.avg_after_win_streak,
            "avgAfterLossStreak": self.avg_after_loss_streak,
            "afterWinStreakCount": self.after_win_streak_count,
            "afterLossStreakCount": self.after_loss_streak_count,
            "avgRecoveryAfterLoss": self.avg_recovery_after_loss,
            "recoveryRate": self.recovery_rate,
            "recoveryEvents": self.recovery_events,
        }


@dataclass(frozen=True)
class RiskMetrics:
    """Risk-adjusted performance figures over daily results."""
    sharpe_ratio: float = 0.0
    max_drawdown: float = 0.0                # Currency, from the cumulative curve
    profit_factor: float = 0.0
    expectancy: float = 0.0
    recovery_factor: float = 0.0
    avg_drawdown_duration: float = 0.0       # Days

    def to_dict(self) -> dict[str, Any]:
        return {
            "sharpeRatio": self.sharpe_ratio,
            "maxDrawdown": self.max_drawdown,
            "profitFactor": self.profit_factor,
            "expectancy": self.expectancy,
            "recoveryFactor": self.recovery_factor,
            "avgDrawdownDuration": self.avg_drawdown_duration,
        }


@dataclass(frozen=True)
class PerformanceSummary:
    """Headline statistics of the operations dashboard."""
    total_operations: int = 0
    positive_days: int = 0
    negative_days: int = 0
    win_rate: float = 0.0                    # % of trading days that were positive
    total_result: float = 0.0
    best_result: float = 0.0
    worst_result: float = 0.0
    positive_streak: int = 0
    negative_streak: int = 0
    payoff: float = 0.0
    average_win: float = 0.0
    average_loss: float = 0.0
    positive_months: int = 0
    negative_months: int = 0
    monthly_consistency: float = 0.0
    average_monthly_result: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalOperations": self.total_operations,
            "positiveDays": self.positive_days,
            "negativeDays": self.negative_days,
            "winRate": self.win_rate,
            "totalResult": self.total_result,
            "bestResult": self.best_result,
            "worstResult": self.worst_result,
            "positiveStreak": self.positive_streak,
            "negativeStreak": self.negative_streak,
            "payoff": self.payoff,
            "averageWin": self.average_win,
            "averageLoss": self.average_loss,
            "positiveMonths": self.positive_months,
            "negativeMonths": self.negative_months,
            "monthlyConsistency": self.monthly_consistency,
            "averageMonthlyResult": self.average_monthly_result,
        }


@dataclass(frozen=True)
class BucketPerformance:
    """Win rate and average result of one hour, weekday or strategy."""
    label: str
    win_rate: float
    avg_result: float
    operations: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "winRate": self.win_rate,
            "avgResult": self.avg_result,
            "operations": self.operations,
        }


@dataclass(frozen=True)
class SessionPerformance:
    """Performance of a part of the trading day."""
    win_rate: float = 0.0
    avg_result: float = 0.0
    operations: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "winRate": self.win_rate,
            "avgResult": self.avg_result,
            "operations": self.operations,
        }


@dataclass(frozen=True)
class PatternReport:
    """Where and when the trader performs best and worst."""
    total_operations: int
    win_rate: float
    total_result: float
    best_hour: Optional[BucketPerformance]
    worst_hour: Optional[BucketPerformance]
    best_day: Optional[BucketPerformance]
    worst_day: Optional[BucketPerformance]
    best_strategy: Optional[BucketPerformance]
    worst_strategy: Optional[BucketPerformance]
    morning: SessionPerformance
    afternoon: SessionPerformance

    def to_dict(self) -> dict[str, Any]:
        def _bucket(bucket: Optional[BucketPerformance]) -> Optional[dict[str, Any]]:
            return bucket.to_dict() if bucket else None

        return {
            "totalOperations": self.total_operations,
            "winRate": self.win_rate,
            "totalResult": self.total_result,
            "bestHour": _bucket(self.best_hour),
            "worstHour": _bucket(self.worst_hour),
            "bestDay": _bucket(self.best_day),
            "worstDay": _bucket(self.worst_day),
            "bestStrategy": _bucket(self.best_strategy),
            "worstStrategy": _bucket(self.worst_strategy),
            "morningPerformance": self.morning.to_dict(),
            "afternoonPerformance": self.afternoon.to_dict(),
        }


@dataclass(frozen=True)
class AnalyticsSnapshot:
    """Every analysis computed over one set of records"""
    days: int
    streaks: StreakReport
    risk: RiskMetrics
    summary: PerformanceSummary
    patterns: Optional[PatternReport] = None
    capital: Optional[CapitalSimulation] = None
    monte_carlo: Optional[MonteCarloResult] = None
    not_computable: tuple[str, ...] = field(default_factory=tuple)

    def has_simulations(self) -> bool:
        """Check whether both simulations produced a result"""
        return self.capital is not None and self.monte_carlo is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "days": self.days,
            "streaks": self.streaks.to_dict(),
            "risk": self.risk.to_dict(),
            "summary": self.summary.to_dict(),
            "patterns": self.patterns.to_dict() if self.patterns else None,
            "capital": self.capital.to_dict() if self.capital else None,
            "monteCarlo": self.monte_carlo.to_dict() if self.monte_carlo else None,
            "notComputable": list(self.not_computable),
        }
