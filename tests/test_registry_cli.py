"""Tests for the registry command line."""

import argparse
import importlib.util
from pathlib import Path

import pytest

from bond_registry.config import RegistryConfig
from bond_registry.exceptions import ArgumentError
from bond_registry.service import Registry, create_registry

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "registry.py"


@pytest.fixture(scope="module")
def cli():
    """scripts/registry.py loaded as a module."""
    spec = importlib.util.spec_from_file_location("registry_cli", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def registry() -> Registry:
    registry = create_registry(RegistryConfig())
    registry.repository.reset_index()
    return registry


def call(function: str, *args: str, command: str = "query") -> argparse.Namespace:
    return argparse.Namespace(command=command, function=function, args=list(args))


class TestRun:
    """Tests for run."""

    def test_ecert_written_raw(self, cli, registry: Registry, capsysbinary: pytest.CaptureFixture[bytes]) -> None:
        raw = b"\xff\xfe\x00DER"
        registry.store.put("alice", raw)

        assert cli.run(registry, call("get_ecert", "alice")) == 0

        assert capsysbinary.readouterr().out == raw + b"\n"

    def test_ping(self, cli, registry: Registry, capsysbinary: pytest.CaptureFixture[bytes]) -> None:
        assert cli.run(registry, call("ping", command="invoke")) == 0

        assert capsysbinary.readouterr().out == b"Hello, world!\n"

    def test_error_exit_code(self, cli, registry: Registry, capsysbinary: pytest.CaptureFixture[bytes]) -> None:
        assert cli.run(registry, call("get_bond_details", "9.9")) == 1

        captured = capsysbinary.readouterr()
        assert captured.out == b""
        assert b"9.9" in captured.err

    def test_init_rejects_index_key_credential(self, cli, registry: Registry) -> None:
        args = argparse.Namespace(command="init", credentials=["bondIDs", "CERT"], keep_existing=False)

        with pytest.raises(ArgumentError):
            cli.run(registry, args)
