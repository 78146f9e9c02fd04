"""Module tree and exception handling."""

from vs_bootstrapper.core.exceptions import (
    BootstrapError,
    NotFoundError,
    MalformedSolutionError,
    MalformedProjectError,
    MalformedXmlError,
    AmbiguousSolutionError,
    ConflictingConfigurationError,
    ConfigurationError,
    NoModulesFoundError,
)
from vs_bootstrapper.core.module_definition import ModuleDefinition

__all__ = [
    "BootstrapError",
    "NotFoundError",
    "MalformedSolutionError",
    "MalformedProjectError",
    "MalformedXmlError",
    "AmbiguousSolutionError",
    "ConflictingConfigurationError",
    "ConfigurationError",
    "NoModulesFoundError",
    "ModuleDefinition",
]
