"""
Operations audited through the generic interceptor path
"""

from .update_process_progress import UpdateProcessProgressUseCase
from .reactivate_production_line import ReactivateProductionLineUseCase

__all__ = [
    "UpdateProcessProgressUseCase",
    "ReactivateProductionLineUseCase",
]
