"""Core domain logic for vital-sign health evaluation.

This package contains the scoring, alert and recommendation rules together
with the domain models they operate on, isolated from UI and storage so the
rules stay easy to test and reason about.
"""
