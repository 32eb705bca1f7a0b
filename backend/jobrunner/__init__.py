"""Cron-triggered job dispatcher with run-once locking."""
