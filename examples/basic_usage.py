#!/usr/bin/env python3
"""
Basic Usage Example - RateChart Engine

This script demonstrates the basic usage of the rate chart engine with a
simulated backend response whose schema drifts between records. It shows how to:
- Initialize the engine
- Prepare chart input for each currency channel
- Compare fit and day display modes
- Summarize the latest change

Run: python examples/basic_usage.py
"""

from datetime import date, timedelta
from typing import Dict, Any, List

from ratechart_app.data.models import Channel
from ratechart_app.engine import RateChartEngine
from ratechart_app.logging import configure_logging


def create_history_payload(days: int) -> Dict[str, Any]:
    """Create a history response mixing the spellings seen in production."""
    start = date(2024, 3, 1)
    records: List[Dict[str, Any]] = []

    for i in range(days):
        day = start + timedelta(days=i)
        usd = 1330 + (i % 5) * 2.5 - (i % 3)
        if i % 3 == 0:
            records.append({
                "date": day.isoformat(),
                "usdRate": usd,
                "eurRate": round(usd * 1.085, 2),
                "jpyRate": f"{round(usd * 0.667, 2)}",
                "cnyRate": round(usd / 7.2, 2),
            })
        elif i % 3 == 1:
            records.append({
                "baseDate": [day.year, day.month, day.day],
                "usd": f"₩{usd:,.2f}",
                "eur_rate": {"value": round(usd * 1.085, 2)},
                "JPY(100)": round(usd * 0.667, 2),
                "cnh": f"{usd / 7.2:.2f}",
            })
        else:
            records.append({
                "tradeDate": day.strftime("%Y/%m/%d"),
                "USD_KRW": f"{usd:,.2f}원",
            })

    return {"success": True, "data": {"history": records}}


def print_chart(chart) -> None:
    """Print the widget input in a readable form."""
    print(f"   Strategy: {chart.strategy.value}, mode: {chart.display_mode.value}")
    print(f"   Axis: {chart.axis.min:g} .. {chart.axis.max:g} step {chart.axis.step:g}")
    print(f"   Labels: {', '.join(chart.axis.labels)}")
    print(f"   Spacing: {chart.spacing.spacing:.1f} "
          f"(initial {chart.spacing.initial_spacing:.1f}, end {chart.spacing.end_spacing:.1f})")
    for point in chart.points[:3]:
        print(f"   {point.label:>8}  {point.data_point_text}")
    if len(chart.points) > 3:
        print(f"   ... {len(chart.points) - 3} more points")


def main():
    """Run basic usage demonstration."""
    configure_logging(level="INFO")

    print("=== RateChart Engine - Basic Usage Demo ===")
    print()

    # Initialize engine
    print("1. Initializing engine...")
    engine = RateChartEngine()
    print("   Engine initialized successfully")
    print()

    payload = create_history_payload(days=12)

    print("2. Preparing charts for every channel...")
    for channel in Channel:
        chart = engine.prepare_chart(payload, channel)
        print(f" {channel.value}:")
        if chart.has_data:
            print_chart(chart)
        else:
            print("   No data for this channel")
        print()

    print("3. Scrollable day mode with 1.5x zoom...")
    chart = engine.prepare_chart(payload, Channel.USD, display_mode="day", spacing_multiplier=1.5)
    print_chart(chart)
    print()

    print("4. Latest change summary...")
    summary = engine.summarize(payload, Channel.USD)
    if summary:
        print(f"   {summary.latest_date}: {summary.format_latest()} "
              f"{summary.format_amount()} ({summary.format_percent()})")
    print()

    print("✅ Demo completed successfully!")


if __name__ == "__main__":
    main()
