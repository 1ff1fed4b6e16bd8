"""Pytest configuration for vagrant-dispatch tests."""

import os

import pytest


class FakeViewer:
    def __init__(self, name, running=False):
        self.name = name
        self.running = running

    def is_running(self):
        return self.running


class FakeViewerHost:
    def __init__(self):
        self.viewers = {}
        self.opened = []
        self.closed = []

    def add(self, name, running=False):
        self.viewers[name] = FakeViewer(name, running)
        return self.viewers[name]

    def open(self, name):
        self.opened.append(name)
        return self.viewers.setdefault(name, FakeViewer(name))

    def list_open(self):
        return list(self.viewers.values())

    def close(self, viewer):
        del self.viewers[viewer.name]
        self.closed.append(viewer.name)


class FakeShell:
    def __init__(self):
        self.calls = []

    def run_async(self, command, cwd, viewer):
        self.calls.append((command, cwd, viewer.name))


@pytest.fixture(scope="function", autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep the user's config and working directory out of the tests."""
    for key in list(os.environ):
        if key.startswith("VAGRANT_DISPATCH_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def viewer_host():
    return FakeViewerHost()


@pytest.fixture
def shell():
    return FakeShell()


@pytest.fixture
def project(tmp_path):
    """A project with a Vagrantfile, a nested source dir and two machines."""
    root = tmp_path / "proj"
    (root / "src" / "x").mkdir(parents=True)
    (root / "Vagrantfile").write_text('Vagrant.configure("2") do |config|\nend\n')
    machines = root / ".vagrant" / "machines"
    (machines / "web").mkdir(parents=True)
    (machines / "db").mkdir()
    (machines / "readme.txt").write_text("not a machine")
    return root
