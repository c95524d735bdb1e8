"""Find, filter and clean up old or oversized files."""

__version__ = "0.1.0"
__all__ = ["scanner", "rules", "actions", "app"]