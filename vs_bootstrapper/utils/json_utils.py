"""JSON handling utilities with orjson for performance."""

from pathlib import Path
from typing import Any

import orjson


class JsonHandler:
    """High-performance JSON handler using orjson."""

    @staticmethod
    def dump_file(data: Any, path: Path, pretty: bool = True) -> None:
        """
        Write data to JSON file.

        Args:
            data: Data to write
            path: File path
            pretty: Whether to format with indentation
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "wb") as f:
            f.write(orjson.dumps(data, option=JsonHandler._options(pretty)))

    @staticmethod
    def _options(pretty: bool) -> int:
        # Sorts dict keys only, module lists keep solution order
        options = orjson.OPT_SORT_KEYS
        if pretty:
            options |= orjson.OPT_INDENT_2
        return options
