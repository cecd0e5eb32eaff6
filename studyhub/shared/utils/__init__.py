"""
Utilities Package

Common utility functions and helpers.

Contents:
=========
- security: Password hashing, JWT management and reset tokens

Usage:
======
    from studyhub.shared.utils.security import SecurityUtils
"""

from studyhub.shared.utils.security import SecurityUtils

__all__ = [
    "SecurityUtils",
]
