from servicebind._internal.bindings import (
    CONTAINER,
    Binding,
    BindingIdentifier,
    BindingValue,
    ClassValue,
    FactoryCallback,
    FactoryValue,
    Token,
    identifier_to_string,
)

__all__ = [
    "CONTAINER",
    "Binding",
    "BindingIdentifier",
    "BindingValue",
    "ClassValue",
    "FactoryCallback",
    "FactoryValue",
    "Token",
    "identifier_to_string",
]
