"""
Registry for solving strategies.
Implements a simple registry pattern for dynamically registering and accessing solvers.
"""

import importlib
import inspect
import logging
import os
import pkgutil
from collections.abc import Callable

from satenum.utils.exceptions import SolverNotFoundError

from .base import SolverBase

# Set up logging
logger = logging.getLogger(__name__)


class SolverRegistry:
    """
    Registry for solving strategies.
    Enables registering solvers by name and retrieving them later.
    """

    _registry: dict[str, type[SolverBase]] = {}
    _default_solver: str | None = None

    @classmethod
    def register(cls, name: str, solver_cls: type[SolverBase]) -> None:
        """
        Register a solver with the given name.

        Args:
            name: Name of the solver
            solver_cls: Solver class (must inherit from SolverBase)
        """
        if not inspect.isclass(solver_cls) or not issubclass(solver_cls, SolverBase):
            raise TypeError(f"Solver class {solver_cls!r} must inherit from SolverBase")

        existing = cls._registry.get(name)
        if existing is solver_cls:
            return
        if existing is not None:
            logger.warning(f"Overriding existing solver registration for '{name}'")

        cls._registry[name] = solver_cls

        # If this is the first solver registered, make it the default
        if cls._default_solver is None:
            cls._default_solver = name

    @classmethod
    def register_as(cls, name: str) -> Callable[[type[SolverBase]], type[SolverBase]]:
        """
        Decorator to register a solver with the given name.

        Args:
            name: Name of the solver

        Returns:
            Decorator function that registers the solver
        """

        def decorator(solver_cls: type[SolverBase]) -> type[SolverBase]:
            solver_cls.solver_name = name
            cls.register(name, solver_cls)
            return solver_cls

        return decorator

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove a solver registration."""
        if name not in cls._registry:
            raise SolverNotFoundError(name=name)
        del cls._registry[name]
        if cls._default_solver == name:
            cls._default_solver = next(iter(cls._registry), None)

    @classmethod
    def set_default(cls, name: str) -> None:
        """
        Set the default solver.

        Args:
            name: Name of the solver to use as default
        """
        if name not in cls._registry:
            raise SolverNotFoundError(name=name)
        cls._default_solver = name

    @classmethod
    def get_default_name(cls) -> str | None:
        return cls._default_solver

    @classmethod
    def get(cls, name: str | None = None) -> type[SolverBase]:
        """
        Get a solver by name.

        Args:
            name: Name of the solver, or None to get the default solver

        Returns:
            Solver class
        """
        if name is None:
            if cls._default_solver is None:
                raise SolverNotFoundError("No default solver set")
            return cls._registry[cls._default_solver]

        if name not in cls._registry:
            raise SolverNotFoundError(name=name)

        return cls._registry[name]

    @classmethod
    def list_solvers(cls) -> list[str]:
        """
        List all registered solvers.

        Returns:
            List of solver names
        """
        return list(cls._registry.keys())

    @classmethod
    def create(cls, name: str | None = None, **kwargs) -> SolverBase:
        """
        Create a new instance of the specified solver.

        Args:
            name: Name of the solver, or None to use the default solver
            **kwargs: Arguments to pass to the solver constructor

        Returns:
            Instance of the solver
        """
        solver_cls = cls.get(name)
        return solver_cls(**kwargs)

    @classmethod
    def auto_discover(cls, package: str = "satenum.solvers") -> None:
        """
        Auto-discover and register all solvers in a package.
        Looks for classes that inherit from SolverBase and registers them
        under their solver_name, or their lowercased class name.

        Args:
            package: Dotted name of the package to scan
        """
        package_module = importlib.import_module(package)
        package_dir = os.path.dirname(package_module.__file__)

        for _, module_name, is_pkg in pkgutil.iter_modules([package_dir]):
            if is_pkg or module_name in ("base", "registry"):
                continue

            module = importlib.import_module(f"{package}.{module_name}")

            for name, obj in inspect.getmembers(module, inspect.isclass):
                if (
                    issubclass(obj, SolverBase)
                    and obj is not SolverBase
                    and not inspect.isabstract(obj)
                ):
                    solver_name = obj.solver_name or name.lower()
                    cls.register(solver_name, obj)
                    logger.debug(f"Auto-discovered solver: {solver_name}")


# Register common decorator for more concise solver registration
register_solver = SolverRegistry.register_as
