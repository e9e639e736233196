"""Errors raised while turning operation parameters into a request descriptor.

All of them are fatal to the single build call that raised them; no partial
descriptor is ever returned.
"""


class RequestBuildError(Exception):
    """Base class for every request-building failure."""

    def __init__(self, message: str, name: str | None = None):
        super().__init__(message)
        self.name = name


class MissingRequiredParameter(RequestBuildError):
    """A required parameter has no value at invocation time."""

    def __init__(self, name: str, location: str = "path"):
        super().__init__(f"Missing required {location} parameter '{name}'", name=name)
        self.location = location


class UnsupportedStyle(RequestBuildError, ValueError):
    """A parameter declares a style/explode combination that cannot be serialized."""

    def __init__(self, name: str, style: str):
        super().__init__(f"Parameter '{name}' uses unsupported style '{style}'", name=name)
        self.style = style


class UnsupportedValue(RequestBuildError, ValueError):
    """A parameter value is neither a scalar nor an ordered sequence of scalars."""

    def __init__(self, name: str, value_type: str):
        super().__init__(
            f"Parameter '{name}' has a {value_type} value; expected a scalar or an ordered sequence of scalars",
            name=name,
        )
        self.value_type = value_type


class DuplicateTemplateVariable(RequestBuildError):
    """Two bindings of one request ended up with the same template variable name."""

    def __init__(self, name: str):
        super().__init__(f"Template variable '{name}' is bound more than once", name=name)


class UnknownParameter(RequestBuildError, ValueError):
    """An argument was supplied for a parameter the operation does not declare."""

    def __init__(self, name: str, operation_id: str = ""):
        target = f"operation '{operation_id}'" if operation_id else "the operation"
        super().__init__(f"{target} does not have parameter '{name}'", name=name)
        self.operation_id = operation_id
