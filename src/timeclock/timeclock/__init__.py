"""Timeclock package.

Feature modules (shifts, punches, profiles, business_hours, reconciliation,
jobs) each carry their own model/repository/service layers, with a thin Flask
controller layer on top for the cron trigger and report endpoints.
"""
