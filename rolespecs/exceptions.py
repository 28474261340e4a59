# rolespecs/exceptions.py

class RoleSpecsError(Exception):
    """Base exception for rolespecs errors."""
    pass

class ConfigError(RoleSpecsError):
    """Errors related to the build configuration (services, features, roles)."""
    pass

class DocumentLoadError(RoleSpecsError):
    """A service or master document could not be read, fetched or parsed."""
    pass

class VersionMergeError(RoleSpecsError, ValueError):
    """A service version has a non-numeric component."""
    pass
