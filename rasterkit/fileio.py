"""Reading whole files."""

from __future__ import annotations

import os
from typing import Union

__all__ = ["read_binary_file"]


def read_binary_file(path: Union[str, "os.PathLike[str]"]) -> bytes:
    """Return the full contents of the file at ``path``.

    Raises ``OSError`` (such as ``FileNotFoundError``) when it cannot be read.
    """
    with open(path, "rb") as handle:
        return handle.read()