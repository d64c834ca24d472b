"""Resume builder: AI-rewritten resume sections rendered to PDF."""

__version__ = "0.1.0"
