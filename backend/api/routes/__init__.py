"""API route modules: ``health`` and ``analysis``."""
