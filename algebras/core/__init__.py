"""
Core algebras
=============

Unit, Option, Result, Try - чистые значения без эффектов.
"""

from .unit import UNIT, Unit
from .option import Option
from .result import Result
from .attempt import Try

__all__ = (
    "Unit",
    "UNIT",
    "Option",
    "Result",
    "Try",
)
