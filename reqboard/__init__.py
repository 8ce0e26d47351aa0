"""reqboard - project board service (workspace -> board -> group -> request)."""

__version__ = "0.1.0"
