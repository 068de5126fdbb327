"""
Validation & optics
===================

Validation (накопление ошибок), Lens (оптика), Validator (набор правил).
"""

from .validation import Validation
from .lens import ROOT_PATH, Lens
from .validator import Rule, Validator, ensure

__all__ = (
    "Validation",
    "Lens",
    "ROOT_PATH",
    "Validator",
    "Rule",
    "ensure",
)
