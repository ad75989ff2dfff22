"""Logging and reporting module."""

import json
import logging
import logging.handlers
from datetime import datetime
from pathlib import Path
from typing import Dict, List
import pandas as pd

from .notifications import Notification
from .utils import format_currency


def configure_logging(level: str = "INFO", log_file: str = "airport_tycoon.log") -> None:
    """
    Configure structured logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Path to log file
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Create formatter
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    # File handler
    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=10 * 1024 * 1024, backupCount=5
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(formatter)

    # Root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)


class EventJournal:
    """Appends every notification as one JSON line, for replay and reporting."""

    def __init__(self, log_file: str = "airport_tycoon_events.jsonl"):
        """
        Initialize event journal.

        Args:
            log_file: Path to JSON lines file
        """
        self.log_file = Path(log_file)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        self.file_handle = open(self.log_file, "a", encoding="utf-8")

    def __call__(self, notification: Notification) -> None:
        self.log_notification(notification)

    def log_notification(self, notification: Notification) -> None:
        log_entry = {
            "timestamp": datetime.now().isoformat(),
            "kind": notification.kind.value,
            "time": notification.time,
            "day": notification.day,
            "data": notification.data,
        }

        json.dump(log_entry, self.file_handle)
        self.file_handle.write("\n")
        self.file_handle.flush()

    def close(self) -> None:
        """Close log file."""
        self.file_handle.close()


def read_journal(log_file: str) -> List[Dict]:
    entries = []
    with open(log_file, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                entries.append(json.loads(line))
    return entries


def summarize_journal(entries: List[Dict]) -> Dict:
    """
    Aggregate journal entries into per-kind counts and per-day economy figures.

    Args:
        entries: Journal entries as written by EventJournal

    Returns:
        Summary dictionary
    """
    if not entries:
        return {
            "total_events": 0,
            "event_counts": {},
            "total_revenue": 0,
            "total_operating_cost": 0,
            "flights_completed": 0,
            "per_day": [],
            "final_score": None,
        }

    df = pd.DataFrame(entries)
    data = pd.json_normalize(df["data"].tolist())
    df = pd.concat([df.drop(columns=["data"]), data], axis=1)

    if "revenue" not in df.columns:
        df["revenue"] = 0
    if "amount" not in df.columns:
        df["amount"] = 0
    if "warning" not in df.columns:
        df["warning"] = None

    completed = df[df["kind"] == "flightComplete"]
    costs = df[(df["kind"] == "warningRaised") & (df["warning"] == "operating_cost")]

    per_day = (
        completed.groupby("day")
        .agg(flights=("kind", "size"), revenue=("revenue", "sum"))
        .join(costs.groupby("day").agg(operating_cost=("amount", "sum")), how="outer")
        .fillna(0)
        .reset_index()
    )

    final_score = None
    if "score" in df.columns:
        scores = df.loc[df["kind"] == "gameOver", "score"].dropna()
        if not scores.empty:
            final_score = int(scores.iloc[-1])

    return {
        "total_events": int(len(df)),
        "event_counts": {k: int(v) for k, v in df["kind"].value_counts().items()},
        "total_revenue": int(completed["revenue"].fillna(0).sum()),
        "total_operating_cost": int(costs["amount"].fillna(0).sum()),
        "flights_completed": int(len(completed)),
        "per_day": [
            {
                "day": int(row["day"]),
                "flights": int(row["flights"]),
                "revenue": int(row["revenue"]),
                "operating_cost": int(row["operating_cost"]),
            }
            for _, row in per_day.iterrows()
        ],
        "final_score": final_score,
    }


def generate_final_report(entries: List[Dict], output_path: str) -> Dict:
    """
    Generate final report from journal entries.

    Args:
        entries: List of journal entries
        output_path: Path to output file (suffix is replaced by .json and .txt)

    Returns:
        The summary written to the report
    """
    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    summary = summarize_journal(entries)
    report = {"summary": summary, "events": entries}

    # Write JSON report
    json_path = output_file.with_suffix(".json")
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)

    # Write text summary
    text_path = output_file.with_suffix(".txt")
    with open(text_path, "w", encoding="utf-8") as f:
        f.write("=" * 80 + "\n")
        f.write("AIRPORT TYCOON SESSION REPORT\n")
        f.write("=" * 80 + "\n\n")
        f.write(f"Flights Completed: {summary['flights_completed']}\n")
        f.write(f"Total Revenue: {format_currency(summary['total_revenue'])}\n")
        f.write(f"Operating Costs: {format_currency(summary['total_operating_cost'])}\n")
        if summary["final_score"] is not None:
            f.write(f"Final Score: {summary['final_score']}\n")
        f.write("\nEvent Breakdown:\n")
        for kind, count in summary["event_counts"].items():
            f.write(f"  {kind}: {count}\n")
        f.write("\nPer Day:\n")
        for day in summary["per_day"]:
            f.write(
                f"  Day {day['day']}: {day['flights']} flights, "
                f"{format_currency(day['revenue'])} revenue, "
                f"{format_currency(day['operating_cost'])} costs\n"
            )
        f.write("\n" + "=" * 80 + "\n")

    logging.info(f"Final report generated: {json_path} and {text_path}")
    return summary
