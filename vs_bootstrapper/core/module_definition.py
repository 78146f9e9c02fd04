"""In-memory module tree populated by the model builder."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class ModuleDefinition:
    """
    A node of the analysis module tree.

    The root node describes the analyzed directory; the model builder
    attaches one sub-module per accepted Visual Studio project.
    """

    key: str
    base_dir: Path
    work_dir: Path
    name: str | None = None
    source_files: list[Path] = field(default_factory=list)
    test_files: list[Path] = field(default_factory=list)
    properties: dict[str, str] = field(default_factory=dict)
    sub_modules: list["ModuleDefinition"] = field(default_factory=list)
    _source_set: set[Path] = field(default_factory=set, init=False, repr=False, compare=False)
    _test_set: set[Path] = field(default_factory=set, init=False, repr=False, compare=False)

    def reset_sources(self) -> None:
        self.source_files.clear()
        self._source_set.clear()

    def reset_tests(self) -> None:
        self.test_files.clear()
        self._test_set.clear()

    def add_sub_module(self, module: "ModuleDefinition") -> None:
        self.sub_modules.append(module)

    def add_source_file(self, path: Path) -> None:
        if path not in self._source_set:
            self._source_set.add(path)
            self.source_files.append(path)

    def add_test_file(self, path: Path) -> None:
        if path not in self._test_set:
            self._test_set.add(path)
            self.test_files.append(path)

    def set_property(self, key: str, value: str) -> None:
        self.properties[key] = value

    def to_dict(self) -> dict[str, Any]:
        """Convert the module and its sub-modules to JSON-ready data."""
        return {
            "key": self.key,
            "name": self.name,
            "base_dir": str(self.base_dir),
            "work_dir": str(self.work_dir),
            "source_files": [str(p) for p in self.source_files],
            "test_files": [str(p) for p in self.test_files],
            "properties": dict(self.properties),
            "sub_modules": [m.to_dict() for m in self.sub_modules],
        }
