"""
MediBook

A FastAPI-based hospital appointment booking service with cookie-based,
role-gated sessions for admins, doctors and patients, plus a Python client
that mirrors the browser session layer.
"""

__version__ = "1.0.0"
