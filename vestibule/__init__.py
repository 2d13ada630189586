"""
Vestibule - sandboxed, read-only views of directory subtrees.

Real paths are attached under virtual names; clients address files by
virtual path and can never reach outside what was attached.
"""

from vestibule import Config
from vestibule import NamespaceGate
from vestibule.NamespaceGate import Files, get_files

__version__ = "0.1.0"

__all__ = ["Config", "NamespaceGate", "Files", "get_files", "__version__"]
