"""Tests for the add-package workflow."""

from unittest.mock import MagicMock, call

import pytest

from workflow.add import AddProcess, normalize_package_name
from workflow.prompt import ask_yes_no


def make_project(name, installed=False):
    """A project mock whose add_reference returns itself."""
    project = MagicMock()
    project.name = name
    project.has_package_installed.return_value = installed
    project.add_reference.return_value = project
    return project


@pytest.fixture
def collaborators():
    """Mocks for every collaborator, wired to a shared call log."""
    manager = MagicMock()
    declaration = manager.declaration
    manager.store.read.return_value = manager.original
    manager.original.add.return_value = declaration
    declaration.all_package_sources.return_value = ["https://nuget.org/api/v2"]
    lock_file = manager.lock_file
    lock_file.file_name = "/repo/paket.lock"
    manager.resolver.selective_update.return_value = lock_file
    manager.scanner.find_all_projects.return_value = []
    return manager


def make_process(manager, prompt=None):
    """Build the AddProcess over the mocks."""
    return AddProcess(manager.store, manager.resolver, manager.scanner, manager.installer,
                      prompt=prompt or MagicMock(return_value=True))


class TestAddProcess:
    """Test step sequencing."""

    def test_declaration_saved_before_resolution(self, collaborators):
        """Test that the declaration file is updated before resolving."""
        lock = make_process(collaborators).add("/repo/paket.dependencies", "Newtonsoft.Json", "6.0.8")

        assert lock is collaborators.lock_file
        collaborators.store.read.assert_called_once_with("/repo/paket.dependencies")
        collaborators.original.add.assert_called_once_with("Newtonsoft.Json", "6.0.8")
        calls = collaborators.mock_calls
        save_index = calls.index(call.declaration.save())
        resolve_index = calls.index(
            call.resolver.selective_update(collaborators.declaration, "newtonsoft.json", False))
        assert save_index < resolve_index

    def test_no_projects_or_install_by_default(self, collaborators):
        """Test that optional steps are skipped."""
        make_process(collaborators).add("paket.dependencies", "A", "1.0")
        collaborators.scanner.find_all_projects.assert_not_called()
        collaborators.installer.install.assert_not_called()

    def test_force_is_passed_to_resolver(self, collaborators):
        """Test the force flag."""
        make_process(collaborators).add("paket.dependencies", "A", "1.0", force=True)
        collaborators.resolver.selective_update.assert_called_once_with(
            collaborators.declaration, "a", True)

    def test_interactive_adds_references(self, collaborators):
        """Test prompting for projects that lack the package."""
        has_it = make_project("Has.csproj", installed=True)
        accepts = make_project("Accepts.csproj")
        declines = make_project("Declines.csproj")
        collaborators.scanner.find_all_projects.return_value = [has_it, accepts, declines]
        prompt = MagicMock(side_effect=[True, False])

        make_process(collaborators, prompt).add("paket.dependencies", "Foo", "1.0", interactive=True)

        collaborators.scanner.find_all_projects.assert_called_once_with("/repo")
        assert prompt.call_args_list == [call("  Install to Accepts.csproj?"),
                                         call("  Install to Declines.csproj?")]
        has_it.add_reference.assert_not_called()
        accepts.add_reference.assert_called_once_with("Foo")
        accepts.save.assert_called_once_with()
        declines.add_reference.assert_not_called()
        has_it.has_package_installed.assert_called_once_with("foo")

    def test_install_after(self, collaborators):
        """Test installation with the declared sources."""
        make_process(collaborators).add("paket.dependencies", "A", "1.0", force=True, hard=True,
                                        install_after=True)
        collaborators.installer.install.assert_called_once_with(
            ["https://nuget.org/api/v2"], True, True, False, collaborators.lock_file)

    def test_resolution_failure_aborts(self, collaborators):
        """Test that errors propagate and stop later steps."""
        collaborators.resolver.selective_update.side_effect = RuntimeError("conflict")
        with pytest.raises(RuntimeError, match="conflict"):
            make_process(collaborators).add("paket.dependencies", "A", "1.0", interactive=True,
                                            install_after=True)
        collaborators.declaration.save.assert_called_once_with()
        collaborators.scanner.find_all_projects.assert_not_called()
        collaborators.installer.install.assert_not_called()

    def test_project_save_failure_aborts(self, collaborators):
        """Test that a project save error stops installation."""
        project = make_project("App.csproj")
        project.save.side_effect = OSError("read-only")
        collaborators.scanner.find_all_projects.return_value = [project]
        with pytest.raises(OSError):
            make_process(collaborators).add("paket.dependencies", "A", "1.0", interactive=True,
                                            install_after=True)
        collaborators.installer.install.assert_not_called()


class TestHelpers:
    """Test workflow helpers."""

    def test_normalize_package_name(self):
        """Test case-insensitive names."""
        assert normalize_package_name(" Newtonsoft.Json ") == "newtonsoft.json"

    def test_ask_yes_no_repeats_until_answered(self):
        """Test the console prompt."""
        answers = iter(["maybe", "", "Y"])
        questions = []

        def fake_input(question):
            questions.append(question)
            return next(answers)

        assert ask_yes_no("Continue?", input_func=fake_input) is True
        assert questions == ["Continue? [y/n] "] * 3

    def test_ask_yes_no_no(self):
        """Test a negative answer."""
        assert ask_yes_no("Continue?", input_func=lambda _: "no") is False
