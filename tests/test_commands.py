"""Tests for the command table and template rendering."""

from dataclasses import replace

import pytest

from vagrant_dispatch import COMMANDS, DispatchConfig, VagrantError, build_template


CONFIG = DispatchConfig()


@pytest.mark.parametrize(
    "name,expected",
    [
        ("list-boxes", "vagrant box list"),
        ("update-box", "vagrant box update"),
        ("up", "vagrant up"),
        ("provision", "vagrant provision"),
        ("destroy", "vagrant destroy"),
        ("destroy-force", "vagrant destroy --force"),
        ("reload", "vagrant reload"),
        ("resume", "vagrant resume"),
        ("ssh", "vagrant ssh"),
        ("status", "vagrant status"),
        ("global-status", "vagrant global-status"),
        ("suspend", "vagrant suspend"),
        ("halt", "vagrant halt"),
        ("sync", "vagrant rsync"),
        ("init-project", "vagrant init"),
    ],
)
def test_templates(name, expected):
    assert build_template(COMMANDS[name], CONFIG) == expected


def test_scope_and_prompt_flags():
    unscoped = {n for n, s in COMMANDS.items() if not s.scoped}
    interactive = {n for n, s in COMMANDS.items() if s.interactive}
    assert unscoped == {"list-boxes", "global-status", "init-project"}
    assert interactive == {"ssh", "ssh-command", "status", "suspend", "halt"}


def test_up_appends_options_verbatim():
    config = replace(CONFIG, up_options="--provider=virtualbox")
    assert build_template(COMMANDS["up"], config) == "vagrant up --provider=virtualbox"


def test_options_only_apply_to_up():
    config = replace(CONFIG, up_options="--provider=virtualbox")
    assert build_template(COMMANDS["reload"], config) == "vagrant reload"


def test_custom_vagrant_binary():
    config = replace(CONFIG, vagrant_bin="/opt/vagrant/bin/vagrant")
    assert build_template(COMMANDS["halt"], config) == "/opt/vagrant/bin/vagrant halt"


def test_ssh_command_quotes_argument():
    template = build_template(COMMANDS["ssh-command"], CONFIG, "ls -la /vagrant")
    assert template == "vagrant ssh -c 'ls -la /vagrant'"


def test_ssh_command_single_word():
    assert build_template(COMMANDS["ssh-command"], CONFIG, "uptime") == "vagrant ssh -c uptime"


@pytest.mark.parametrize("argument", [None, "", "  "])
def test_ssh_command_requires_argument(argument):
    with pytest.raises(VagrantError, match="requires a command"):
        build_template(COMMANDS["ssh-command"], CONFIG, argument)
