"""Event-sourced hypertrophy progression: prescriptions and plan progress from a workout log."""

__version__ = "0.3.0"
