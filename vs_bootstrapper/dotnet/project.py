"""Parse .csproj/.vbproj files (XML with MSBuild schema)."""

from dataclasses import dataclass, field
from pathlib import Path

from lxml import etree

from vs_bootstrapper.core.exceptions import (
    MalformedProjectError,
    MalformedXmlError,
    NotFoundError,
)
from vs_bootstrapper.utils.logging import get_logger

logger = get_logger(__name__)

# Item elements whose Include attribute names a file of the project
FILE_ITEM_ELEMENTS = ("Compile", "Content", "None")

# Item operations on previously included files rather than new files
_ITEM_OPERATION_ATTRIBUTES = ("Remove", "Update")


@dataclass(frozen=True)
class ProjectConfiguration:
    """One build configuration group: its raw condition and output path."""

    condition: str
    output_path: str


@dataclass
class ProjectModel:
    """
    Information extracted from a single project file.

    Should not be mixed with information coming from the solution file.
    Paths are kept exactly as written, with backslash separators.
    """

    files: list[str] = field(default_factory=list)
    output_type: str | None = None
    assembly_name: str | None = None
    configurations: list[ProjectConfiguration] = field(default_factory=list)

    @property
    def conditions(self) -> list[str]:
        return [c.condition for c in self.configurations]

    @property
    def output_paths(self) -> list[str]:
        return [c.output_path for c in self.configurations]


def _local_name(element: etree._Element) -> str:
    """Tag name without the MSBuild namespace."""
    return etree.QName(element).localname


class ProjectFileParser:
    """
    Parser for MSBuild project files.

    Handles both the legacy namespaced format and SDK-style files by
    matching elements on their local name.
    """

    def __init__(self):
        self._xml_parser = etree.XMLParser(
            resolve_entities=False,
            no_network=True,
            remove_comments=True,
            remove_pis=True,
        )

    def parse(self, path: Path | str) -> ProjectModel:
        """
        Parse a project file.

        Args:
            path: Path to the .csproj or .vbproj file

        Returns:
            ProjectModel with files, output metadata and configurations

        Raises:
            NotFoundError: If the file cannot be read
            MalformedXmlError: If the file is not well-formed XML
            MalformedProjectError: If a file item lacks its Include attribute
        """
        path = Path(path)
        try:
            with open(path, "rb") as f:
                tree = etree.parse(f, self._xml_parser)
        except OSError as e:
            raise NotFoundError(path, e.strerror) from e
        except etree.XMLSyntaxError as e:
            raise MalformedXmlError(path, e.lineno, e.msg) from e

        model = ProjectModel()
        for element in tree.getroot().iter(tag=etree.Element):
            name = _local_name(element)
            parent = element.getparent()
            parent_name = _local_name(parent) if parent is not None else None

            if parent_name == "ItemGroup" and name in FILE_ITEM_ELEMENTS:
                self._read_file_item(path, element, name, model)
            elif parent_name == "PropertyGroup":
                self._read_property(element, name, model)
            elif name == "PropertyGroup":
                self._read_configuration(element, model)

        logger.debug(
            f"Parsed {path}: {len(model.files)} files, "
            f"{len(model.configurations)} output paths"
        )
        return model

    @staticmethod
    def _read_file_item(
        path: Path,
        element: etree._Element,
        name: str,
        model: ProjectModel,
    ) -> None:
        include = element.get("Include")
        if include is not None:
            model.files.append(include)
            return

        if any(element.get(attr) is not None for attr in _ITEM_OPERATION_ATTRIBUTES):
            return

        raise MalformedProjectError(path, name, element.sourceline)

    @staticmethod
    def _read_property(element: etree._Element, name: str, model: ProjectModel) -> None:
        text = (element.text or "").strip()
        if not text:
            return

        if name == "OutputType" and model.output_type is None:
            model.output_type = text
        elif name == "AssemblyName" and model.assembly_name is None:
            model.assembly_name = text

    @staticmethod
    def _read_configuration(group: etree._Element, model: ProjectModel) -> None:
        for child in group.iterchildren(tag=etree.Element):
            if _local_name(child) == "OutputPath":
                model.configurations.append(
                    ProjectConfiguration(
                        condition=group.get("Condition", ""),
                        output_path=(child.text or "").strip(),
                    )
                )
                return
