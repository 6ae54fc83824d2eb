"""StudyHub backend: study-content generation with input security controls."""

__version__ = "0.1.0"
