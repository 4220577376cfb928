"""File-based version control for CAD models and engineering data."""

__version__ = "0.3.1"