##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other schemadao
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to schemadao.
##############################################################################

"""
Settings read from the `schemadao.yaml` application file.

Modules:
    config_filepaths.py: Where the application file is looked for.
    configfile.py: Finding the file, reading it, and merging it over the defaults.
"""
from copy import copy
from types import SimpleNamespace
from typing import Dict, List, Optional

from schemadao.utils import nested_dict_to_namespaces


class Config:  # pylint: disable=R0903
    """
    The application settings, one `SimpleNamespace` per section.

    Sections missing from the source dict stay `None`; keys outside `SECTIONS`
    are ignored.

    Attributes:
        database (Optional[SimpleNamespace]): `dialect` and `path` of the target database.
        schema (Optional[SimpleNamespace]): `path` of the default schema file.
        logging (Optional[SimpleNamespace]): `level` and the `debug_sql` statement logging switch.
    """

    SECTIONS: List[str] = ["database", "schema", "logging"]

    def __init__(self, app_dict: Dict):
        """
        Args:
            app_dict: The merged application settings keyed by section name.
        """
        self.database: Optional[SimpleNamespace] = None
        self.schema: Optional[SimpleNamespace] = None
        self.logging: Optional[SimpleNamespace] = None
        for section in self.SECTIONS:
            if section in app_dict:
                setattr(self, section, nested_dict_to_namespaces(dict(app_dict[section])))

    def __copy__(self) -> "Config":
        duplicate = self.__class__.__new__(self.__class__)
        for section in self.SECTIONS:
            setattr(duplicate, section, copy(getattr(self, section)))
        return duplicate

    def __str__(self) -> str:
        lines = ["config:"]
        for section in self.SECTIONS:
            lines.append(f"  {section}:")
            values = getattr(self, section)
            if values is None:
                lines.append("    None")
            else:
                lines.extend(f"    {key}: {value!r}" for key, value in vars(values).items())
        return "\n".join(lines)
