"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, errors and the JSON
product store), ``schemas`` (Pydantic models), ``services`` (business
logic) and ``api`` (versioned routers).
"""

from .main import app, create_app  # noqa: F401
