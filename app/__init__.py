"""
MedTrack Backend Application Package

Medication tracking API: dosages, daily reminders, refill inventory and
AI refill suggestions.
"""
