"""Adding a package: declaration update, resolution, project wiring, install."""

from __future__ import annotations

import logging
import os
from typing import Callable

from common.logging_utils import extra_context, is_debug_enabled

from .collaborators import DeclarationStore, Installer, LockFile, ProjectScanner, Resolver
from .prompt import ask_yes_no

logger = logging.getLogger(__name__)


def normalize_package_name(package: str) -> str:
    """Package names compare case-insensitively."""
    return package.strip().lower()


class AddProcess:
    """Sequences the collaborators that add a package to a solution.

    Errors raised by any collaborator propagate unchanged and abort the
    remaining steps.
    """

    def __init__(self, declarations: DeclarationStore, resolver: Resolver,
                 projects: ProjectScanner, installer: Installer,
                 prompt: Callable[[str], bool] = ask_yes_no):
        self.declarations = declarations
        self.resolver = resolver
        self.projects = projects
        self.installer = installer
        self.prompt = prompt

    def add(self, dependencies_file_name: str, package: str, version: str, force: bool = False,
            hard: bool = False, interactive: bool = False, install_after: bool = False) -> LockFile:
        """Add ``package`` at ``version`` and resolve it.

        Args:
            dependencies_file_name: Path of the declaration file
            package: Package name as the user typed it
            version: Version text stored in the declaration file
            force: Force resolution and installation
            hard: Hard install (replace existing project references)
            interactive: Offer to reference the package from each project
            install_after: Install the resolved packages afterwards

        Returns:
            The lock file produced by resolution
        """
        declaration = self.declarations.read(dependencies_file_name).add(package, version)
        declaration.save()
        logger.info("Added %s %s to %s", package, version or "(any version)", dependencies_file_name)

        normalized = normalize_package_name(package)
        lock_file = self.resolver.selective_update(declaration, normalized, force)

        if interactive:
            self._add_to_projects(lock_file, package, normalized)

        if install_after:
            sources = declaration.all_package_sources()
            if is_debug_enabled(logger):
                logger.debug("Installing", extra=extra_context(
                    event="decision", component="add", action="install",
                    count=len(sources), force=force, hard=hard
                ))
            self.installer.install(sources, force, hard, False, lock_file)

        return lock_file

    def _add_to_projects(self, lock_file: LockFile, package: str, normalized: str) -> None:
        root = os.path.dirname(lock_file.file_name)
        for project in self.projects.find_all_projects(root):
            if project.has_package_installed(normalized):
                continue
            if self.prompt(f"  Install to {project.name}?"):
                project.add_reference(package).save()
                logger.info("Referenced %s from %s", package, project.name)
