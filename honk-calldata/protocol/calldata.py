"""Calldata artifact serialization.

The artifact is a pretty-printed JSON array of strings, one per calldata
element, in generator order. Consumers parse it positionally, so order is
part of the format.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, List, Union

from primitives.errors import MalformedArtifact

JSON_INDENT = 2


def _default_file_mode() -> int:
    """Mode a plain open() would create a file with under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def calldata_to_strings(elements: Iterable[Any]) -> List[str]:
    """Convert calldata elements to their canonical string form."""
    return [str(e) for e in elements]


def calldata_to_json(elements: Iterable[Any]) -> str:
    """Render calldata elements as an indented JSON array of strings.

    Matches JSON.stringify(arr, null, 2) byte for byte for string arrays.
    """
    return json.dumps(calldata_to_strings(elements), indent=JSON_INDENT, ensure_ascii=False)


def write_calldata(elements: Iterable[Any], path: Union[str, Path]) -> List[str]:
    """Write calldata elements to path as a JSON array, replacing prior content.

    The document is written to a temporary file in the same directory and
    renamed over path, so readers never observe a partial artifact. The file
    gets the usual umask-derived mode rather than mkstemp's 0600.

    Returns:
        The string forms that were written
    """
    path = Path(path)
    strings = calldata_to_strings(elements)
    text = calldata_to_json(strings)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.chmod(tmp_name, _default_file_mode())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return strings


def load_calldata(path: Union[str, Path]) -> List[str]:
    """Load a calldata artifact written by write_calldata."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list) or not all(isinstance(e, str) for e in data):
        raise MalformedArtifact(type(data).__name__, reason="calldata must be a JSON array of strings")
    return data
