"""
AgentChat client toolkit

Behavior rules normalization and an authenticated HTTP client for the
AgentChat backend.
"""

__version__ = "1.0.0"
