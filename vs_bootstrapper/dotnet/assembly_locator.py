"""Locate the compiled assembly produced by a project."""

import stat
from dataclasses import dataclass
from pathlib import Path

from vs_bootstrapper.config import (
    BUILD_CONFIGURATION,
    BUILD_PLATFORM,
    OUTPUT_PATH,
    AnalysisProperties,
)
from vs_bootstrapper.dotnet.project import ProjectModel
from vs_bootstrapper.utils.logging import get_logger

logger = get_logger(__name__)

OUTPUT_TYPE_EXTENSIONS = {
    "library": "dll",
    "exe": "exe",
    "winexe": "exe",
}


@dataclass(frozen=True)
class ArtifactCandidate:
    """An existing assembly file and its modification time in nanoseconds."""

    path: Path
    last_modified: int


def output_type_extension(output_type: str | None) -> str | None:
    """Map an MSBuild OutputType to the assembly file extension."""
    if output_type is None:
        return None
    return OUTPUT_TYPE_EXTENSIONS.get(output_type.strip().lower())


def _host_path(path: str) -> str:
    return path.replace("\\", "/")


class AssemblyLocator:
    """
    Resolves the assembly that best represents a project.

    Either the configured output path override is used as is, or the
    output paths declared by the project are probed and the most recently
    built assembly wins.
    """

    def __init__(self, properties: AnalysisProperties | None = None):
        self.properties = properties or AnalysisProperties()

    def locate(
        self,
        project_name: str,
        project_file: Path,
        project: ProjectModel,
    ) -> Path | None:
        """
        Locate the assembly of a project.

        Args:
            project_name: Name of the project, used for logging only
            project_file: Path to the project file
            project: Parsed project file

        Returns:
            Path to the assembly, or None when it cannot be determined
        """
        if project.output_type is None or project.assembly_name is None:
            logger.debug(f"No output type or assembly name declared by project {project_name}")
            return None

        extension = output_type_extension(project.output_type)
        if extension is None:
            logger.debug(
                f"Unsupported output type \"{project.output_type}\" of project {project_name}"
            )
            return None

        file_name = f"{project.assembly_name}.{extension}"

        override = self.properties.lookup(OUTPUT_PATH)
        if override:
            logger.info(
                f"Using the assembly output path specified using the property "
                f"\"{OUTPUT_PATH.preferred}\" set to: {override}"
            )
            return Path(_host_path(override)) / file_name

        candidates = self._candidates(file_name, Path(project_file), project)
        if not candidates:
            logger.debug(f"No assembly {file_name} found for project {project_name}")
            return None

        return self._latest(candidates).path

    def _candidates(
        self,
        file_name: str,
        project_file: Path,
        project: ProjectModel,
    ) -> list[ArtifactCandidate]:
        build_filter = self._build_filter()
        project_dir = project_file.parent

        candidates = []
        for configuration in project.configurations:
            if build_filter is not None and not self._matches(configuration.condition, *build_filter):
                continue

            path = project_dir / _host_path(configuration.output_path) / file_name
            try:
                status = path.stat()
            except OSError:
                continue
            if stat.S_ISREG(status.st_mode):
                candidates.append(ArtifactCandidate(path=path, last_modified=status.st_mtime_ns))

        return candidates

    def _build_filter(self) -> tuple[str, str] | None:
        build_configuration = self.properties.lookup(BUILD_CONFIGURATION)
        build_platform = self.properties.lookup(BUILD_PLATFORM)
        if build_configuration is None or build_platform is None:
            return None

        logger.warning(
            f"The properties \"{BUILD_CONFIGURATION.preferred}\" and \"{BUILD_PLATFORM.preferred}\" "
            "are deprecated. The latest generated assembly is now picked up for analysis by default instead."
        )
        return build_configuration, build_platform

    @staticmethod
    def _matches(condition: str, build_configuration: str, build_platform: str) -> bool:
        # Plain substring containment, the MSBuild condition is not parsed
        return build_configuration in condition and build_platform in condition

    @staticmethod
    def _latest(candidates: list[ArtifactCandidate]) -> ArtifactCandidate:
        """Most recently modified candidate, the first one on equal times."""
        latest = candidates[0]
        for candidate in candidates[1:]:
            if candidate.last_modified > latest.last_modified:
                latest = candidate
        return latest
