"""Visual Studio solution and project file handling."""

from vs_bootstrapper.dotnet.solution import Solution, SolutionEntry, SolutionParser
from vs_bootstrapper.dotnet.project import ProjectConfiguration, ProjectFileParser, ProjectModel
from vs_bootstrapper.dotnet.assembly_locator import AssemblyLocator

__all__ = [
    "Solution",
    "SolutionEntry",
    "SolutionParser",
    "ProjectConfiguration",
    "ProjectFileParser",
    "ProjectModel",
    "AssemblyLocator",
]
