"""Video provider implementations.

Each provider module implements the async generation pattern:
  submit job → poll status → resolve result URL
"""
from __future__ import annotations
