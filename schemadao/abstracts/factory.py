##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
A name-keyed registry of pluggable classes.

`BaseFactory` maps lower-cased names and aliases to classes and builds
instances on request. Third-party distributions can add classes by advertising
them under the factory's entry point group; those are only looked up the first
time a caller asks for something the built-ins do not provide, or asks for the
full listing.
"""

import logging
from abc import ABC, abstractmethod
from importlib.metadata import entry_points
from typing import Any, Dict, List, Tuple, Type


LOG = logging.getLogger(__name__)


class BaseFactory(ABC):
    """
    Registry and constructor for one family of pluggable classes.

    Subclasses supply the built-ins, the class check, and the entry point group.
    Name lookup ignores case.

    Attributes:
        _registry (Dict[str, Any]): Canonical name to class.
        _aliases (Dict[str, str]): Alias to canonical name.
        _plugins_loaded (bool): Set once the entry point group has been scanned.
    """

    def __init__(self):
        self._registry: Dict[str, Any] = {}
        self._aliases: Dict[str, str] = {}
        self._plugins_loaded: bool = False

        self._register_builtins()

    @abstractmethod
    def _register_builtins(self):
        """Call `register` for every class that ships with schemadao."""
        raise NotImplementedError("Subclasses of `BaseFactory` must implement a `_register_builtins` method.")

    @abstractmethod
    def _validate_component(self, component_class: Any):
        """
        Reject classes that do not belong in this registry.

        Args:
            component_class: The class about to be registered.

        Raises:
            TypeError: If `component_class` is the wrong kind of object.
        """
        raise NotImplementedError("Subclasses of `BaseFactory` must implement a `_validate_component` method.")

    @abstractmethod
    def _entry_point_group(self) -> str:
        """Name of the entry point group scanned for plugins."""
        raise NotImplementedError("Subclasses of `BaseFactory` must implement an `_entry_point_group` method.")

    def _raise_component_error_class(self, msg: str) -> Type[Exception]:
        """
        Raise the error for a name nobody registered. Override for a narrower type.

        Args:
            msg: The error message.

        Raises:
            ValueError: By default.
        """
        raise ValueError(msg)

    def _load_plugins(self):
        # A plugin that cannot be imported is skipped; the rest still load.
        if self._plugins_loaded:
            return
        self._plugins_loaded = True

        for entry_point in entry_points(group=self._entry_point_group()):
            try:
                self.register(entry_point.name, entry_point.load())
            except Exception as e:  # pylint: disable=broad-exception-caught
                LOG.warning(f"Failed to load plugin '{entry_point.name}': {e}")
                continue
            LOG.info(f"Loaded plugin via entry point: {entry_point.name}")

    def register(self, name: str, component_class: Any, aliases: List[str] = None):
        """
        Add a class under `name` and any `aliases`. Re-registering a name replaces it.

        Args:
            name: Canonical name.
            component_class: The class to register.
            aliases: Extra names that resolve to `name`.

        Raises:
            TypeError: If `component_class` fails `_validate_component`.
        """
        self._validate_component(component_class)

        canonical = name.lower()
        self._registry[canonical] = component_class
        self._aliases.update({alias.lower(): canonical for alias in aliases or []})
        LOG.debug(f"Registered component '{canonical}' (aliases: {aliases or []})")

    def list_available(self) -> List[str]:
        """
        Canonical names of every registered class, plugins included.

        Returns:
            The registered names in registration order.
        """
        self._load_plugins()
        return list(self._registry)

    def _lookup(self, component_type: str) -> Tuple[str, Any]:
        """
        Resolve a user-supplied name or alias to its canonical name and class.

        Args:
            component_type: The name or alias as the user typed it.

        Returns:
            A tuple of the canonical name and the registered class.
        """
        lowered = component_type.lower()
        canonical = self._aliases.get(lowered, lowered)
        if canonical not in self._registry:
            self._load_plugins()
            canonical = self._aliases.get(lowered, lowered)

        if canonical not in self._registry:
            self._raise_component_error_class(
                f"Component '{component_type}' is not supported. "
                f"Available components: {', '.join(self.list_available())}"
            )
        return canonical, self._registry[canonical]

    def create(self, component_type: str, config: Dict = None) -> Any:
        """
        Build an instance of the class registered under `component_type`.

        Args:
            component_type: A name or alias.
            config: Keyword arguments for the constructor.

        Returns:
            The new instance.

        Raises:
            ValueError: If the constructor fails.
        """
        canonical, component_class = self._lookup(component_type)
        try:
            instance = component_class(**(config or {}))
        except Exception as e:
            raise ValueError(f"Failed to create component '{canonical}': {e}") from e

        LOG.debug(f"Created component '{canonical}'")
        return instance

    def get_component_info(self, component_type: str) -> Dict[str, str]:
        """
        Describe a registered class.

        Args:
            component_type: A name or alias.

        Returns:
            The canonical name, class name, module, and docstring of the class.
        """
        canonical, component_class = self._lookup(component_type)
        return {
            "name": canonical,
            "class": component_class.__name__,
            "module": component_class.__module__,
            "description": component_class.__doc__ or "No description available",
        }
