##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Dialect factory for selecting and instantiating SQL dialects.

This module defines the `DialectFactory` class, which maps dialect names and
aliases to `Dialect` implementations. Third-party dialects can be added at
runtime with `register` or advertised by an installed distribution under the
`schemadao.dialects` entry point group.
"""

from typing import Any, Type, Union

from schemadao.abstracts import BaseFactory
from schemadao.exceptions import DialectNotSupportedError
from schemadao.sqlgen.dialect import Dialect
from schemadao.sqlgen.dialects import MySQLDialect, OracleDialect, PostgreSQLDialect, SQLiteDialect


class DialectFactory(BaseFactory):
    """
    Factory class for managing and instantiating supported SQL dialects.

    Attributes:
        _registry (Dict[str, Dialect]): Maps canonical dialect names to dialect classes.
        _aliases (Dict[str, str]): Maps alternate names to canonical dialect names.

    Methods:
        register: Register a new dialect class and optional aliases.
        list_available: Return a list of supported dialect names.
        create: Instantiate a dialect by name or alias.
        get_component_info: Return metadata about a registered dialect.
        resolve: Accept either a dialect instance or a dialect name.
    """

    def _register_builtins(self):
        """
        Register built-in dialect implementations.
        """
        self.register("sqlite", SQLiteDialect, aliases=["sqlite3"])
        self.register("postgresql", PostgreSQLDialect, aliases=["postgres", "pg"])
        self.register("mysql", MySQLDialect, aliases=["mariadb"])
        self.register("oracle", OracleDialect)

    def _validate_component(self, component_class: Any):
        """
        Ensure a registered component is a subclass of Dialect.

        Args:
            component_class: The class to validate.

        Raises:
            TypeError: If the component does not subclass Dialect.
        """
        if not isinstance(component_class, type) or not issubclass(component_class, Dialect):
            raise TypeError(f"{component_class} must inherit from Dialect")

    def _entry_point_group(self) -> str:
        """
        Entry point group used for discovering dialect plugins.

        Returns:
            The entry point namespace for schemadao dialect plugins.
        """
        return "schemadao.dialects"

    def _raise_component_error_class(self, msg: str) -> Type[Exception]:
        """
        Raise an appropriate exception for unsupported dialects.

        Args:
            msg: The message to add to the error being raised.

        Raises:
            DialectNotSupportedError: Always.
        """
        raise DialectNotSupportedError(msg)

    def resolve(self, dialect: Union[str, Dialect]) -> Dialect:
        """
        Return `dialect` itself if it is already a `Dialect`, otherwise create one by name.

        Args:
            dialect: A dialect instance, name, or alias.

        Returns:
            A dialect instance.
        """
        if isinstance(dialect, Dialect):
            return dialect
        return self.create(dialect)


dialect_factory = DialectFactory()
