#!/usr/bin/env python3
"""
Basic Usage Example - Trading Journal Analytics Engine

This script demonstrates the basic usage of the analytics engine with a
generated journal. It shows how to:
- Initialize the engine with a profile
- Replay the journal against a starting capital
- Resample daily results with Monte Carlo
- Classify weekday × hour slots for the current month

Run: python examples/basic_usage.py
"""

import random
from datetime import date, timedelta
from typing import Any, Dict, List

from journal_engine.engine import AnalyticsEngine
from journal_engine.logging import configure_logging


def create_sample_journal(start: date, days: int, seed: int = 7) -> List[Dict[str, Any]]:
    """Create weekday operations in the journal's storage format."""
    rng = random.Random(seed)
    rows = []
    for offset in range(days):
        day = start + timedelta(days=offset)
        if day.isoweekday() > 5:
            continue
        for _ in range(rng.randint(1, 4)):
            rows.append({
                "operation_date": day.isoformat(),
                "operation_time": f"{rng.randint(9, 17):02d}:{rng.randint(0, 59):02d}:00",
                "result": round(rng.gauss(15, 120), 2),
                "contracts": rng.choice([1, 1, 2]),
                "strategy": rng.choice(["Apollo", "Zeus", "Hermes"]),
            })
    return rows


def print_capital(payload: Dict[str, Any]) -> None:
    """Print the capital replay."""
    print(f"  Final balance: {payload['finalBalance']:.2f}")
    print(f"  Yield: {payload['yieldPercent']:.2f}%")
    print(f"  Max drawdown: {payload['maxDrawdownPercent']:.2f}%")
    ruin = payload['ruinDayIndex']
    print(f"  Ruin: {'day ' + str(ruin) if ruin else 'never'}")
    print(f"  Chart points: {len(payload['trajectory'])}")


def print_monte_carlo(payload: Dict[str, Any]) -> None:
    """Print the Monte Carlo summary."""
    print(f"  Simulations: {payload['simulations']}")
    print(f"  Profit probability: {payload['profitProbability']:.1f}%")
    print(f"  VaR95: {payload['var95']:.2f}")
    print(f"  Median: {payload['medianResult']:.2f}")
    print(f"  Best 95%: {payload['bestScenario95']:.2f}")


def print_grid(payload: Dict[str, Any]) -> None:
    """Print the slot grid, one row per hour."""
    cells = payload["cells"]
    weekdays = list(dict.fromkeys(cell["weekday"] for cell in cells))
    print("       " + " ".join(f"{w:>10}" for w in weekdays))
    for hour in sorted({cell["hour"] for cell in cells}):
        row = [cell["signal"] for cell in cells if cell["hour"] == hour]
        print(f"  {hour:>2}h  " + " ".join(f"{s:>10}" for s in row))
    summary = payload["summary"]
    print(f"  Score: {summary['score']:.1f} "
          f"(LIGAR {summary['ligar']}, ALERTA {summary['alerta']}, NAO_LIGAR {summary['naoLigar']})")


def main():
    """Main demonstration function."""
    configure_logging(level="WARNING")

    print("🚀 Trading Journal Analytics Engine - Basic Usage Demo")
    print("=" * 60)

    print("1. Initializing the analytics engine...")
    engine = AnalyticsEngine(profile="quick", clock=lambda: date(2024, 6, 14))
    print(f"   Monte Carlo runs per call: {engine.config.monte_carlo.simulations}")
    print()

    journal = create_sample_journal(date(2024, 1, 1), 166)
    print(f"2. Generated {len(journal)} operations")
    print()

    print("3. Capital replay on 10,000:")
    print_capital(engine.simulate_capital(journal, initial_capital=10000))
    print()

    print("4. Monte Carlo resampling:")
    print_monte_carlo(engine.run_monte_carlo(journal))
    print()

    print("5. Streaks:")
    streaks = engine.analyze_streaks(journal)
    print(f"  Longest winning run: {streaks['maxWinStreak']} days")
    print(f"  Longest losing run: {streaks['maxLossStreak']} days")
    print(f"  Recovery rate: {streaks['recoveryRate']:.1f}%")
    print()

    print("6. Slot grid for June 2024:")
    print_grid(engine.classify_slots(journal))
    print()

    print("✅ Demo completed")


if __name__ == "__main__":
    main()
