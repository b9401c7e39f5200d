"""
HTTP clients for the prisoner-admin console.

Modules:
- mockapi: generic MockAPI collection client and error types
- prisoners: Prisoner record and client
- users: User record and client (with credential lookup)
"""

__all__ = [
    "mockapi",
    "prisoners",
    "users",
]
