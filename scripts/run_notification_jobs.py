#!/usr/bin/env python3
"""
Run the notification generators once. Meant to be scheduled by cron, e.g.

    0 7 * * *  cd /srv/gadget-inventory && python scripts/run_notification_jobs.py

Usage:
    python scripts/run_notification_jobs.py                   # warranty + repair
    python scripts/run_notification_jobs.py --only warranty
    python scripts/run_notification_jobs.py --only repair
"""
import sys
import os
import argparse

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from gadget_tracker.db import SessionLocal
from gadget_tracker.logging import setup_logging
from gadget_tracker.services.notifications import (
    generate_repair_reminders,
    generate_warranty_notifications,
)


def run(only=None) -> dict:
    counts = {}
    db = SessionLocal()
    try:
        if only in (None, "warranty"):
            counts["warranty"] = generate_warranty_notifications(db)
        if only in (None, "repair"):
            counts["repair"] = generate_repair_reminders(db)
    finally:
        db.close()
    return counts


def main():
    parser = argparse.ArgumentParser(description="Generate warranty and repair notifications")
    parser.add_argument("--only", choices=["warranty", "repair"], help="Run a single generator")
    args = parser.parse_args()

    setup_logging()
    counts = run(only=args.only)
    for job, created in counts.items():
        print(f"{job}: {created} notification(s) created")
    return 0


if __name__ == '__main__':
    exit(main())
