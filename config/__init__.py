"""Environment-driven settings, one module per concern.

Modules read the environment at import time; tests set variables in
``tests/conftest.py`` before anything under ``config`` is imported.
"""
