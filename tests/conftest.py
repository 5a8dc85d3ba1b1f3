"""Shared pytest configuration and fixtures for the profkit test suite.

Provides:
- an isolated profkit home and log directory for the whole session
- v1 profile tree and fake vault fixtures
- test markers
"""
import os
import sys
import tempfile
from pathlib import Path

import pytest
import yaml


project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

# Modules create a ConfigStore at import time; keep it out of the real home
_session_home = tempfile.mkdtemp(prefix="profkit-tests-")
os.environ["PROFKIT_HOME"] = _session_home
os.environ["XDG_STATE_HOME"] = _session_home


class FakeVault:
    """In-memory stand-in for CredentialVault"""

    service = "profkit"

    def __init__(self, secrets=None):
        self.secrets = dict(secrets or {})
        self.loaded = []
        self.saved = {}
        self.deleted = []

    async def load(self, key, optional=False):
        self.loaded.append(key)
        return self.secrets.get(key)

    async def save(self, key, secret):
        self.saved[key] = secret
        self.secrets[key] = secret

    async def delete(self, key):
        self.deleted.append(key)
        self.secrets.pop(key, None)


@pytest.fixture
def fake_vault():
    return FakeVault()


@pytest.fixture
def make_vault():
    return FakeVault


@pytest.fixture
def write_yaml():
    def _write(path: Path, data):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def profiles_root(tmp_path, write_yaml):
    """A v1 profiles tree with two zosmf profiles and one ssh profile"""
    root = tmp_path / "profiles"
    write_yaml(root / "zosmf" / "zosmf_meta.yaml", {"defaultProfile": "lpar1"})
    write_yaml(
        root / "zosmf" / "lpar1.yaml",
        {"host": "lpar1.example.com", "port": 443, "user": "managed by profkit",
         "password": "managed by profkit"},
    )
    write_yaml(root / "zosmf" / "lpar2.yaml", {"hostname": "lpar2.example.com", "port": 1443})
    write_yaml(root / "ssh" / "ssh_meta.yaml", {"defaultProfile": "dev"})
    write_yaml(root / "ssh" / "dev.yaml", {"host": "dev.example.com", "username": "ibmuser"})
    return root


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (slower)"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on their location."""
    for item in items:
        if "integration" not in item.nodeid:
            item.add_marker(pytest.mark.unit)
