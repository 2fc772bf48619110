"""Exceptions raised by trinav."""


class NavMeshError(Exception):
    """Base class for all trinav errors."""


class InputError(NavMeshError, ValueError):
    """Malformed geometry or query arguments."""


class NavMeshFrozenError(NavMeshError, RuntimeError):
    """Structural mutation of a mesh that has already been connected."""


class ConfigError(NavMeshError, ValueError):
    """Invalid configuration values or settings file."""


class PersistenceError(NavMeshError, ValueError):
    """Stored navmesh data is unsupported or inconsistent."""
