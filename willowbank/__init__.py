"""
willowbank: landscape project planner API.

Requirements, phases with tasks, a plant catalogue and compliance rules,
served over a JSON REST API backed by SQLite.
"""

__version__ = "1.0.0"
