"""
Console walkthrough of the evaluation pipeline.

Runs a handful of scenarios through scoring, alert and recommendation
generation and prints the resulting reports.

Run with: uv run python run_demo.py
"""

from datetime import UTC, datetime, timedelta

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from adapters.iot.readings import parse_iot_readings
from vitalcore.config import get_config, print_config_summary, validate_config
from vitalcore.domain.models import (
    HealthReport,
    VitalsSnapshot,
    sort_alerts,
    sort_recommendations,
)
from vitalcore.observability import configure_logging
from vitalcore.services.alerts import concern_message
from vitalcore.services.evaluation import evaluate
from vitalcore.services.trends import percent_change, summarize_history, trend_direction

console = Console()

SEVERITY_STYLES = {
    "info": "blue",
    "warning": "yellow",
    "critical": "red",
    "emergency": "bold red",
}


def build_scenarios() -> dict[str, list[VitalsSnapshot]]:
    """Chronological reading batches for each demo scenario."""
    now = datetime.now(UTC)
    earlier = now - timedelta(minutes=15)

    return {
        "normal": [
            VitalsSnapshot(
                id="normal-1",
                timestamp=now,
                heart_rate=75,
                oxygen_saturation=98,
                temperature=36.8,
                glucose=95,
            )
        ],
        "low_oxygen": [
            VitalsSnapshot(
                id="low-oxygen-1",
                timestamp=earlier,
                heart_rate=88,
                oxygen_saturation=96,
                temperature=36.9,
            ),
            VitalsSnapshot(
                id="low-oxygen-2",
                timestamp=now,
                heart_rate=110,
                oxygen_saturation=88,
                temperature=36.9,
                glucose=92,
            ),
        ],
        "high_heart_rate": [
            VitalsSnapshot(id="hr-1", timestamp=earlier, heart_rate=100),
            VitalsSnapshot(
                id="hr-2",
                timestamp=now,
                heart_rate=145,
                oxygen_saturation=96,
                temperature=37.8,
                glucose=95,
            ),
        ],
        "fever": [
            VitalsSnapshot(
                id="fever-1",
                timestamp=now,
                heart_rate=105,
                oxygen_saturation=97,
                temperature=39.2,
                systolic_bp=128,
                diastolic_bp=84,
                glucose=98,
            )
        ],
    }


def show_report(name: str, readings: list[VitalsSnapshot], report: HealthReport) -> None:
    console.print(Panel(f"Scenario: {name}", style="blue"))
    console.print(
        f"Score: {report.score.value:.1f} "
        f"({report.score.tier.display_name}: {report.score.tier.description})"
    )

    change = percent_change(readings, "heart_rate")
    console.print(f"Heart rate trend: {change:+.1f}% ({trend_direction(change)})")

    message = concern_message(report.snapshot)
    if message:
        console.print(message, style="yellow")

    alert_table = Table(title="Alerts")
    alert_table.add_column("Severity", style="white")
    alert_table.add_column("Title", style="cyan")
    alert_table.add_column("Message", style="white")
    for alert in sort_alerts(report.alerts):
        alert_table.add_row(
            f"[{SEVERITY_STYLES[alert.severity.value]}]{alert.severity.value.upper()}[/]",
            alert.title,
            alert.message,
        )
    console.print(alert_table)

    rec_table = Table(title="Recommendations")
    rec_table.add_column("Priority", style="magenta")
    rec_table.add_column("Category", style="green")
    rec_table.add_column("Title", style="cyan")
    for rec in sort_recommendations(report.recommendations):
        rec_table.add_row(rec.priority.value, rec.category.value, rec.title)
    console.print(rec_table)


def show_iot_batch() -> None:
    console.print(Panel("Scenario: IoT sensor batch", style="blue"))
    documents = [
        ("doc-1", {"heartRate": 72, "spo2": 98, "temperature": 36.6, "timestamp": 1718000000}),
        ("doc-2", {"heartRate": "n/a", "spo2": 97, "timestamp": 1718000060}),
        ("doc-3", {"heartRate": 96, "spo2": 97, "temperature": 37.1, "timestamp": "1718000120"}),
    ]
    readings = parse_iot_readings(documents)
    console.print(f"Parsed {len(readings)} of {len(documents)} sensor documents", style="green")

    stats_table = Table(title="History statistics")
    for column in ("Metric", "Avg", "Min", "Max", "Readings"):
        stats_table.add_column(column)
    for metric, stats in summarize_history(readings).items():
        stats_table.add_row(
            metric, f"{stats.avg:.1f}", f"{stats.min:.1f}", f"{stats.max:.1f}", str(stats.count)
        )
    console.print(stats_table)

    show_report("iot", readings, evaluate(readings))


def main() -> None:
    configure_logging()
    validate_config()
    if get_config().debug:
        print_config_summary()

    for name, readings in build_scenarios().items():
        console.print(f"\n{'=' * 60}")
        show_report(name, readings, evaluate(readings))

    console.print(f"\n{'=' * 60}")
    show_iot_batch()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        console.print("\nDemo stopped by user", style="yellow")
