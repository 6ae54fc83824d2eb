"""Core domain logic: security controls and AI content handling."""
