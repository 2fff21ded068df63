"""Compliance & readiness calculation engine for the workplace wellness tracker.

Derives per-day attendance, performance and team grades, streaks and readiness
anomalies from sparse check-in history. Read-only; see ``main.create_engine``.
"""
