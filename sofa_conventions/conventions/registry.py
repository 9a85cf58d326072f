"""Convention registry.

Provides lookup of convention schemas by the name stored in a file's
``SOFAConventions`` attribute. The set of conventions is closed: the
definition modules in this package register themselves when imported.
"""

from typing import Optional

from sofa_conventions.conventions.base import SOFA_BASE
from sofa_conventions.errors import UnknownConvention
from sofa_conventions.models import ConventionSchema, VariableSpec

_registry: dict[str, ConventionSchema] = {}


def register_convention(schema: ConventionSchema) -> None:
    """Register a convention schema under its name.

    Called by the definition modules of this package on import.

    Args:
        schema: Convention derived from the base SOFA schema
    """
    _registry[schema.name] = schema


def get_convention(name: str) -> ConventionSchema:
    """Look up a convention by name.

    ``"SOFA"`` returns the generic base schema.

    Raises:
        UnknownConvention: If the name is not registered
    """
    if name == SOFA_BASE.name:
        return SOFA_BASE
    if not _registry:
        _import_known_conventions()
    if name not in _registry:
        raise UnknownConvention(name, sorted(_registry.keys()))
    return _registry[name]


def list_supported_conventions() -> list[str]:
    """Names of all concrete conventions, sorted."""
    if not _registry:
        _import_known_conventions()
    return sorted(_registry.keys())


def find_variable_spec(name: str) -> Optional[VariableSpec]:
    """First spec named ``name`` in the base schema or any registered convention."""
    if not _registry:
        _import_known_conventions()
    for schema in (SOFA_BASE, *_registry.values()):
        spec = schema.variable(name)
        if spec is not None:
            return spec
    return None


def _import_known_conventions() -> None:
    """Import the definition modules to trigger registration."""
    import sofa_conventions.conventions.free_field  # noqa: F401
    import sofa_conventions.conventions.general  # noqa: F401
    import sofa_conventions.conventions.headphone  # noqa: F401
