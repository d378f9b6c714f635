"""
Dependency Injection module for Consigne.

Provides the container that wires gateway, stores and services.
"""

from consigne.di.container import (
    DIContainer,
    get_container,
    initialize_container,
    shutdown_container,
)

__all__ = [
    "DIContainer",
    "get_container",
    "initialize_container",
    "shutdown_container",
]
