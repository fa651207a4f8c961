"""Coachboard - recurring tasks, events and client workouts for a trainer's dashboard."""

__version__ = "0.1.0"
