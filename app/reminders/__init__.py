"""Reminder due-check, alert and dismissal workflow.

A watcher polls the user's reminders against the local wall clock, surfaces at
most one due reminder, repeats an alert tone until it is acknowledged, and on
acknowledgement decrements matching refill inventory and deletes the reminder.
"""
