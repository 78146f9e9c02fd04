"""Build the analysis module tree from a Visual Studio solution."""

import re
import unicodedata
from pathlib import Path

from vs_bootstrapper.config import (
    ENABLE,
    MODULES,
    PROJECT_KEY_STRATEGY,
    SKIP,
    SKIPPED_PROJECTS,
    SOLUTION,
    TEST_PROJECT_PATTERN,
    AnalysisProperties,
)
from vs_bootstrapper.core.exceptions import (
    AmbiguousSolutionError,
    ConfigurationError,
    ConflictingConfigurationError,
    NoModulesFoundError,
    NotFoundError,
)
from vs_bootstrapper.core.module_definition import ModuleDefinition
from vs_bootstrapper.dotnet.assembly_locator import AssemblyLocator
from vs_bootstrapper.dotnet.project import ProjectFileParser, ProjectModel
from vs_bootstrapper.dotnet.solution import SolutionEntry, SolutionParser
from vs_bootstrapper.utils.logging import get_logger

logger = get_logger(__name__)

SOLUTION_EXTENSION = ".sln"
SUPPORTED_PROJECT_EXTENSIONS = (".csproj", ".vbproj")

# Properties set on each module for downstream analyzers
FXCOP_ASSEMBLY_PROPERTIES = ("sonar.cs.fxcop.assembly", "sonar.vbnet.fxcop.assembly")
RESHARPER_SOLUTION_FILE_PROPERTY = "sonar.resharper.solutionFile"
RESHARPER_PROJECT_NAME_PROPERTY = "sonar.resharper.projectName"
STYLECOP_PROJECT_FILE_PROPERTY = "sonar.stylecop.projectFilePath"

_UNSAFE_KEY_STRATEGY = "unsafe"


def escape_project_name(project_name: str) -> str:
    """
    Turn a project name into a module key fragment.

    Accents are dropped ("héhé" becomes "hehe") and spaces become
    underscores.
    """
    decomposed = unicodedata.normalize("NFD", project_name)
    stripped = "".join(c for c in decomposed if not unicodedata.category(c).startswith("M"))
    return stripped.replace(" ", "_")


def _relative_path(directory: Path, relative_path: str) -> Path:
    return directory / relative_path.replace("\\", "/")


def _is_in_directory(file: Path, directory: Path) -> bool:
    file = file.resolve()
    directory = directory.resolve()
    return file != directory and file.is_relative_to(directory)


class ModelBuilder:
    """
    Creates one module per C# or VB.NET project of a solution.

    Modules are attached to the root module in solution order, with their
    source or test files and the properties needed by the .NET analyzers.
    """

    def __init__(
        self,
        properties: AnalysisProperties | None = None,
        assembly_locator: AssemblyLocator | None = None,
        solution_parser: SolutionParser | None = None,
        project_parser: ProjectFileParser | None = None,
    ):
        """
        Initialize builder.

        Args:
            properties: Analysis properties of the root module
            assembly_locator: Locator used to find project assemblies
            solution_parser: Parser for .sln files
            project_parser: Parser for .csproj/.vbproj files
        """
        self.properties = properties or AnalysisProperties()
        self.assembly_locator = assembly_locator or AssemblyLocator(self.properties)
        self.solution_parser = solution_parser or SolutionParser()
        self.project_parser = project_parser or ProjectFileParser()

    def build(self, root: ModuleDefinition) -> None:
        """
        Populate the root module with one sub-module per project.

        Args:
            root: Module of the analyzed directory

        Raises:
            NotFoundError: If the configured solution file does not exist
            AmbiguousSolutionError: If several solution files were found
            ConflictingConfigurationError: If "sonar.modules" is also set
            ConfigurationError: If the test project pattern is invalid
            NoModulesFoundError: If no project of the solution was usable
        """
        if self._is_disabled():
            return

        solution_file = self._solution_file(root.base_dir)
        if solution_file is None:
            logger.info("No Visual Studio solution file found.")
            return

        logger.info(f"Using the following Visual Studio solution: {solution_file.absolute()}")

        if self.properties.has_key(MODULES):
            raise ConflictingConfigurationError(MODULES.preferred)

        root.reset_sources()
        root.reset_tests()

        test_pattern = self._test_project_pattern()
        skipped_projects = self._skipped_projects()

        solution = self.solution_parser.parse(solution_file)
        has_modules = False
        for entry in solution.projects:
            escaped_name = escape_project_name(entry.name)

            if not entry.path.lower().endswith(SUPPORTED_PROJECT_EXTENSIONS):
                logger.info(f"Skipping the unsupported project type: {entry.path}")
                continue

            if escaped_name in skipped_projects:
                logger.info(
                    f"Skipping the project \"{escaped_name}\" because it is listed "
                    f"in the property \"{SKIPPED_PROJECTS.preferred}\"."
                )
                continue

            project_file = _relative_path(solution_file.parent, entry.path)
            if not project_file.is_file():
                logger.warning(
                    f"Unable to find the Visual Studio project file {project_file.absolute()}"
                )
                continue

            project = self.project_parser.parse(project_file)
            self._build_module(root, entry, project_file, project, solution_file, test_pattern)
            has_modules = True

        if not has_modules:
            raise NoModulesFoundError(solution_file)

    def _is_disabled(self) -> bool:
        if self.properties.get_bool(SKIP):
            logger.info(
                f"Skipping the Visual Studio bootstrapping because \"{SKIP.preferred}\" is set."
            )
            return True

        if not self.properties.get_bool(ENABLE, default=True):
            logger.info(
                f"To enable the analysis bootstrapper for Visual Studio projects, "
                f"unset the property \"{ENABLE.preferred}\" or set it to \"true\"."
            )
            return True

        return False

    def _solution_file(self, base_dir: Path) -> Path | None:
        solution_path = self.properties.lookup(SOLUTION)
        if solution_path:
            solution_file = _relative_path(base_dir, solution_path)
            if not solution_file.is_file():
                raise NotFoundError(solution_file.absolute(), "configured solution file")
            return solution_file

        solution_files = sorted(
            child
            for child in base_dir.iterdir()
            if child.is_file() and child.suffix == SOLUTION_EXTENSION
        )
        if not solution_files:
            return None
        if len(solution_files) > 1:
            raise AmbiguousSolutionError(
                base_dir.absolute(),
                SOLUTION.preferred,
                [f.name for f in solution_files],
            )
        return solution_files[0]

    def _build_module(
        self,
        root: ModuleDefinition,
        entry: SolutionEntry,
        project_file: Path,
        project: ProjectModel,
        solution_file: Path,
        test_pattern: re.Pattern | None,
    ) -> None:
        escaped_name = escape_project_name(entry.name)
        project_dir = project_file.parent

        module = ModuleDefinition(
            key=f"{self._module_key_prefix(root.key)}:{escaped_name}",
            name=entry.name,
            base_dir=project_dir,
            work_dir=root.work_dir / f"{root.key.replace(':', '_')}_{escaped_name}",
        )
        root.add_sub_module(module)

        is_test_project = test_pattern is not None and test_pattern.fullmatch(entry.name) is not None

        for file_path in project.files:
            file = _relative_path(project_dir, file_path)
            if not file.is_file():
                logger.warning(f"Cannot find the file {file.absolute()} of project {entry.name}")
            elif not _is_in_directory(file, project_dir):
                logger.warning(
                    f"Skipping the file {file.absolute()} of project {entry.name} "
                    "located outside of the source directory."
                )
            elif is_test_project:
                module.add_test_file(file)
            else:
                module.add_source_file(file)

        for key, value in self.properties.with_prefix(f"{escaped_name}.").items():
            module.set_property(key, value)

        assembly = self.assembly_locator.locate(entry.name, project_file, project)
        if assembly is not None:
            for key in FXCOP_ASSEMBLY_PROPERTIES:
                module.set_property(key, str(assembly.absolute()))

        module.set_property(RESHARPER_SOLUTION_FILE_PROPERTY, str(solution_file.absolute()))
        module.set_property(RESHARPER_PROJECT_NAME_PROPERTY, entry.name)
        module.set_property(STYLECOP_PROJECT_FILE_PROPERTY, str(project_file.absolute()))

        logger.debug(
            f"Created module {module.key}: {len(module.source_files)} sources, "
            f"{len(module.test_files)} tests"
        )

    def _module_key_prefix(self, root_key: str) -> str:
        if self.properties.lookup(PROJECT_KEY_STRATEGY) != _UNSAFE_KEY_STRATEGY:
            return root_key

        separator = root_key.find(":")
        if separator == -1:
            logger.warning(
                f"Unset the deprecated unnecessary property \"{PROJECT_KEY_STRATEGY.preferred}\" "
                "used to analyze this project. Unsetting it will not affect this project."
            )
            return root_key

        unsafe_key = root_key[:separator]
        logger.warning(
            f"Unset the deprecated unnecessary property \"{PROJECT_KEY_STRATEGY.preferred}\" "
            f"used to analyze this project. You will need to update the project key "
            f"from the unsafe \"{unsafe_key}\" value to \"{root_key}\"."
        )
        return unsafe_key

    def _test_project_pattern(self) -> re.Pattern | None:
        pattern = self.properties.lookup(TEST_PROJECT_PATTERN)
        if pattern is None:
            return None

        try:
            return re.compile(pattern)
        except re.error as e:
            logger.error(
                f"The syntax of the regular expression of the "
                f"\"{TEST_PROJECT_PATTERN.preferred}\" property is invalid: {pattern}"
            )
            raise ConfigurationError(
                f"Invalid regular expression for \"{TEST_PROJECT_PATTERN.preferred}\": {e}",
                TEST_PROJECT_PATTERN.preferred,
                pattern,
            ) from e

    def _skipped_projects(self) -> set[str]:
        skipped = self.properties.lookup(SKIPPED_PROJECTS)
        if not skipped:
            return set()
        return {name.strip() for name in skipped.split(",") if name.strip()}
