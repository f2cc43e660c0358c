"""Smoke test to verify the project scaffolding works."""

from __future__ import annotations


def test_import() -> None:
    import taskagent

    assert taskagent.__version__ == "0.1.0"


def test_cli_entrypoint() -> None:
    from taskagent.cli import main

    assert callable(main)


def test_lazy_imports_from_taskagent() -> None:
    import taskagent

    assert taskagent.create_app is not None
    assert taskagent.TaskManager is not None
