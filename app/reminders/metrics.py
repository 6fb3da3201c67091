from prometheus_client import Counter


reminders_created_total = Counter(
    "reminders_created_total",
    "Total reminders created via API",
)

reminders_due_total = Counter(
    "reminders_due_total",
    "Total reminders surfaced as due by the poller",
)

reminders_acknowledged_total = Counter(
    "reminders_acknowledged_total",
    "Total reminders acknowledged by clients",
)

reminder_alerts_emitted_total = Counter(
    "reminder_alerts_emitted_total",
    "Total alert tones emitted while a reminder was due",
)

reminder_poll_scans_total = Counter(
    "reminder_poll_scans_total",
    "Total due-check scan cycles",
)

refill_decrements_total = Counter(
    "refill_decrements_total",
    "Total refill inventory decrements applied on acknowledgement",
)
