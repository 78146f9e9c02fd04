"""Custom exceptions for the Visual Studio bootstrapper."""

from pathlib import Path


class BootstrapError(Exception):
    """Base exception for all bootstrapper errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class NotFoundError(BootstrapError):
    """A solution or project file could not be opened."""

    def __init__(self, path: Path | str, reason: str | None = None):
        message = f"File not found: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, details={"path": str(path)})
        self.path = Path(path)


class MalformedSolutionError(BootstrapError):
    """A project declaration line of a .sln file does not match the grammar."""

    def __init__(
        self,
        file_path: Path | str,
        line_number: int,
        expected: str,
    ):
        super().__init__(
            f"Expected the line {line_number} of {file_path} "
            f"to match the regular expression {expected}",
            details={"file_path": str(file_path), "line_number": line_number},
        )
        self.file_path = Path(file_path)
        self.line_number = line_number
        self.expected = expected


class MalformedProjectError(BootstrapError):
    """A project file element lacks a required attribute."""

    def __init__(
        self,
        file_path: Path | str,
        element: str,
        line_number: int | None,
        attribute: str = "Include",
    ):
        super().__init__(
            f'Missing attribute "{attribute}" in element <{element}> '
            f"at line {line_number} of {file_path}",
            details={
                "file_path": str(file_path),
                "element": element,
                "line_number": line_number,
            },
        )
        self.file_path = Path(file_path)
        self.element = element
        self.line_number = line_number
        self.attribute = attribute


class MalformedXmlError(BootstrapError):
    """A project file is not well-formed XML."""

    def __init__(
        self,
        file_path: Path | str,
        line_number: int | None = None,
        reason: str | None = None,
    ):
        super().__init__(
            f"Unable to parse the XML of {file_path}: {reason or 'not well-formed'}",
            details={"file_path": str(file_path), "line_number": line_number},
        )
        self.file_path = Path(file_path)
        self.line_number = line_number


class AmbiguousSolutionError(BootstrapError):
    """Several solution files are present and none was chosen explicitly."""

    def __init__(self, directory: Path | str, property_key: str, candidates: list[str] | None = None):
        super().__init__(
            f"Found several .sln files in {directory}. "
            f'Please set "{property_key}" to explicitly tell which one to use.',
            details={"candidates": candidates or []},
        )
        self.directory = Path(directory)
        self.property_key = property_key
        self.candidates = candidates or []


class ConflictingConfigurationError(BootstrapError):
    """Two mutually exclusive module discovery mechanisms are configured."""

    def __init__(self, property_key: str):
        super().__init__(
            f'Do not use the Visual Studio bootstrapper and set the "{property_key}" '
            "property at the same time."
        )
        self.property_key = property_key


class ConfigurationError(BootstrapError):
    """A configuration value is invalid."""

    def __init__(self, message: str, property_key: str, value: str | None = None):
        super().__init__(message, details={"property_key": property_key, "value": value})
        self.property_key = property_key
        self.value = value


class NoModulesFoundError(BootstrapError):
    """A solution was found but produced no module."""

    def __init__(self, solution_file: Path | str):
        super().__init__(
            "No Visual Studio projects were found.",
            details={"solution_file": str(solution_file)},
        )
        self.solution_file = Path(solution_file)
