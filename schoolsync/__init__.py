"""SchoolSync - client for the school-management REST backend."""

__version__ = "0.1.0"
