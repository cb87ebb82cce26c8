"""
Production Line Use Cases
"""

from .create_production_line_use_case import CreateProductionLineUseCase
from .update_production_line_use_case import UpdateProductionLineUseCase
from .deactivate_production_line_use_case import DeactivateProductionLineUseCase
from .list_production_lines_use_case import ListProductionLinesUseCase
from .get_production_line_use_case import GetProductionLineUseCase

__all__ = [
    "CreateProductionLineUseCase",
    "UpdateProductionLineUseCase",
    "DeactivateProductionLineUseCase",
    "ListProductionLinesUseCase",
    "GetProductionLineUseCase",
]
