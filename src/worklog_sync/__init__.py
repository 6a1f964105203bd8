"""Export Clockify time entries to Tempo worklogs, exactly once."""

__version__ = "0.1.0"
