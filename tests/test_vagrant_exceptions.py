"""Tests for exception classes."""

import pytest

from vagrant_dispatch import (
    ConfigError,
    EditorNotFound,
    MachineListingError,
    VagrantError,
    VagrantfileNotFound,
)


def test_vagrant_error_is_exception():
    assert issubclass(VagrantError, Exception)


def test_vagrantfile_not_found_inherits():
    assert issubclass(VagrantfileNotFound, VagrantError)


def test_machine_listing_error_inherits():
    assert issubclass(MachineListingError, VagrantError)


def test_config_error_inherits():
    assert issubclass(ConfigError, VagrantError)


def test_editor_not_found_inherits():
    assert issubclass(EditorNotFound, VagrantError)


def test_vagrantfile_not_found_keeps_start_dir():
    err = VagrantfileNotFound("/tmp/none")
    assert err.start_dir == "/tmp/none"
    assert "/tmp/none" in str(err)


def test_machine_listing_error_message():
    err = MachineListingError("/proj/.vagrant/machines", "Permission denied")
    assert err.path == "/proj/.vagrant/machines"
    assert "Permission denied" in str(err)


def test_raise_and_catch_as_base():
    with pytest.raises(VagrantError):
        raise VagrantfileNotFound("/somewhere")

    with pytest.raises(VagrantError):
        raise ConfigError("should be caught as base")
