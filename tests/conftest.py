"""Shared fixtures for building solutions on disk."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from vs_bootstrapper.core.module_definition import ModuleDefinition

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")

CSHARP_TYPE_GUID = "{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}"


def write_solution(path: Path, projects: list[tuple[str, str]]) -> Path:
    """Write a .sln declaring (name, relative path) projects."""
    lines = [
        "",
        "Microsoft Visual Studio Solution File, Format Version 12.00",
        "# Visual Studio 2013",
    ]
    for index, (name, relative_path) in enumerate(projects):
        guid = "{%08X-0000-0000-0000-000000000000}" % index
        lines.append(f'Project("{CSHARP_TYPE_GUID}") = "{name}", "{relative_path}", "{guid}"')
        lines.append("EndProject")
    lines.extend(["Global", "EndGlobal", ""])

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\r\n".join(lines), encoding="utf-8")
    return path


def write_project(
    path: Path,
    files: list[str] = (),
    output_type: str | None = "Library",
    assembly_name: str | None = None,
    configurations: list[tuple[str, str]] = (),
) -> Path:
    """Write a legacy-style project file."""
    properties = []
    if output_type is not None:
        properties.append(f"    <OutputType>{output_type}</OutputType>")
    if assembly_name is not None:
        properties.append(f"    <AssemblyName>{assembly_name}</AssemblyName>")

    groups = [
        f'  <PropertyGroup Condition="{condition}">\n'
        f"    <OutputPath>{output_path}</OutputPath>\n"
        f"  </PropertyGroup>"
        for condition, output_path in configurations
    ]
    items = [f'    <Compile Include="{f}" />' for f in files]

    content = "\n".join([
        '<?xml version="1.0" encoding="utf-8"?>',
        '<Project ToolsVersion="4.0" xmlns="http://schemas.microsoft.com/developer/msbuild/2003">',
        "  <PropertyGroup>",
        *properties,
        "  </PropertyGroup>",
        *groups,
        "  <ItemGroup>",
        *items,
        "  </ItemGroup>",
        "</Project>",
        "",
    ])

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def touch(path: Path, mtime_ns: int | None = None) -> Path:
    """Create an empty file, optionally with a fixed modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"")
    if mtime_ns is not None:
        os.utime(path, ns=(mtime_ns, mtime_ns))
    return path


@pytest.fixture
def root_module(tmp_path: Path) -> ModuleDefinition:
    base_dir = tmp_path / "solution"
    base_dir.mkdir()
    return ModuleDefinition(
        key="solution:key",
        name="solution",
        base_dir=base_dir,
        work_dir=tmp_path / "work" / ".sonar",
    )
