"""Pull request reviewer assignment services: teams, users, reviewer selection and statistics."""

__version__ = "0.1.0"