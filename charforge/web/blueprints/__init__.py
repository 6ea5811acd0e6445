"""
Flask blueprints for the charforge JSON API.

- rules: read-only rule data (editions, classes, backgrounds)
- derive: build state derivation and spell slot rows
"""

from .rules import rules_bp
from .derive import derive_bp

__all__ = ['rules_bp', 'derive_bp']
