class ServiceBindError(Exception):
    """Represent a base class for all servicebind failures.

    Catch this type when you want to handle any container error path without
    matching each concrete exception class individually.
    """


class BindingError(ServiceBindError):
    """Signal an invalid binding or an invalid invocation target.

    Raised by ``Container.call`` when a requested method does not exist on the
    resolved target or when the given value is not callable. Registration and
    resolution errors derive from this type as well.
    """


class InvalidBindingIdentifierError(BindingError):
    """Signal an identifier that cannot be used as a binding key.

    Raised by ``Container.bind``, ``Container.singleton``,
    ``Container.instance`` and ``Container.alias``. Identifiers must be
    hashable and must not be ``None``, booleans or numbers.

    Typical fixes include using a string, a ``Token``, or a class as key.
    """


class InvalidBindingValueError(BindingError):
    """Signal a binding value that is neither a class nor a factory callback.

    Raised by ``Container.bind`` and ``Container.singleton``. Pass
    ``Container.instance`` to register an already built object instead.
    """


class InvalidAliasError(BindingError, TypeError):
    """Signal an alias that points to itself."""


class BindingResolutionError(BindingError):
    """Signal that a binding could not be resolved.

    Raised by ``make``, ``get``, ``build`` and ``call`` when a factory fails,
    a declared dependency cannot be resolved, or the target is not buildable.
    The message names the offending identifier and, for dependency failures,
    the target that required it. The original error is chained as
    ``__cause__``.
    """


class NotFoundError(BindingResolutionError):
    """Signal that nothing is registered for an identifier.

    Raised by ``make`` when the identifier has no binding, no cached instance,
    no alias, and is not a buildable class.
    """


class CircularDependencyError(BindingResolutionError):
    """Signal a dependency graph that loops back on itself.

    Raised by ``make`` and ``build`` when an identifier is requested again while
    it is still being constructed. ``chain`` holds the identifiers from the
    first occurrence up to the repeated one.
    """

    def __init__(self, message: str, chain: tuple[object, ...] = ()) -> None:
        super().__init__(message)
        self.chain = chain


class ContainerNotSetError(BindingError):
    """Signal use of a container handle before one is bound.

    Raised by ``ContainerContext.get_current`` and by facades that resolve
    their root while no service container is configured.

    Typical fix is calling ``container_context.set_current(container)`` or
    ``Facade.set_service_container(container)`` during application startup.
    """
