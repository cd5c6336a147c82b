"""Contracts of the collaborators the add workflow drives.

Declaration files, resolution, project files and installation live outside
this package; these base classes only fix the calls the workflow makes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional


class LockFile(ABC):
    """Resolved state produced by the resolver."""

    @property
    @abstractmethod
    def file_name(self) -> str:
        """Path of the lock file; its directory is the solution root."""


class DeclarationFile(ABC):
    """The dependency declaration file (package name + version text entries)."""

    @abstractmethod
    def add(self, package: str, version: str) -> "DeclarationFile":
        """Return a new declaration with the package added or updated."""

    @abstractmethod
    def save(self) -> None:
        """Persist the declaration."""

    @abstractmethod
    def all_package_sources(self) -> List[str]:
        """Package sources declared in the file."""


class DeclarationStore(ABC):
    """Reads declaration files from disk."""

    @abstractmethod
    def read(self, file_name: str) -> DeclarationFile:
        """Read the declaration file at ``file_name``."""


class Resolver(ABC):
    """Dependency resolution."""

    @abstractmethod
    def selective_update(self, declaration: DeclarationFile, package: Optional[str],
                         force: bool) -> LockFile:
        """Resolve, updating only ``package`` (or everything when None)."""


class Project(ABC):
    """A consuming project."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name used in prompts."""

    @abstractmethod
    def has_package_installed(self, package: str) -> bool:
        """True if the project already references the normalized package name."""

    @abstractmethod
    def add_reference(self, package: str) -> "Project":
        """Return the project with a reference to ``package`` added."""

    @abstractmethod
    def save(self) -> None:
        """Persist the project's reference file."""


class ProjectScanner(ABC):
    """Finds the projects below a directory."""

    @abstractmethod
    def find_all_projects(self, directory: str) -> Iterable[Project]:
        """Every project under ``directory``."""


class Installer(ABC):
    """Materializes a lock file's packages."""

    @abstractmethod
    def install(self, sources: List[str], force: bool, hard: bool, no_file_copy: bool,
                lock_file: LockFile) -> None:
        """Install the resolved packages; may raise."""
