"""
Process Use Cases
"""

from .create_process_use_case import CreateProcessUseCase
from .update_process_use_case import UpdateProcessUseCase
from .deactivate_process_use_case import DeactivateProcessUseCase
from .list_processes_use_case import ListProcessesUseCase
from .get_process_use_case import GetProcessUseCase

__all__ = [
    "CreateProcessUseCase",
    "UpdateProcessUseCase",
    "DeactivateProcessUseCase",
    "ListProcessesUseCase",
    "GetProcessUseCase",
]
