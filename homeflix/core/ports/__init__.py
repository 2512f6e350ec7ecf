"""
Ports (interfaces abstraites) du domaine.

Exports:
- IFileSystem: Operations de lecture sur le systeme de fichiers
"""

from homeflix.core.ports.file_system import IFileSystem

__all__ = ["IFileSystem"]
