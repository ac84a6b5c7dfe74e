"""
Solving strategies with a unified interface.
"""

from .base import SolverBase, SolverStatus
from .dfs_solver import DFSSolver
from .registry import SolverRegistry, register_solver

__all__ = [
    "SolverBase",
    "SolverStatus",
    "SolverRegistry",
    "register_solver",
    "DFSSolver",
]
