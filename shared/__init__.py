"""
Shared Package
==============

Contracts shared between the health check API and its clients.
"""
