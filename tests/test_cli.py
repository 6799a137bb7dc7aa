"""Tests for the management CLI."""

import asyncio
import json

import pytest

from invoiceflow.application.services import open_services
from invoiceflow.cli import main
from invoiceflow.config import get_settings, reset_settings


@pytest.fixture(autouse=True)
def cli_env(tmp_path, monkeypatch):
    """Point the global settings at a throwaway database."""
    monkeypatch.setenv("STORAGE_BACKEND", "sqlite")
    monkeypatch.setenv("STORAGE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("STORAGE_DB_NAME", "cli.db")
    reset_settings()
    yield
    reset_settings()


def run_cli(capsys, *argv):
    code = main(list(argv))
    out = capsys.readouterr().out
    return code, json.loads(out) if out.strip() else None


async def _seed(draft):
    services = await open_services(get_settings())
    try:
        await services.invoices.add(draft)
    finally:
        await services.close()


def test_next_number(capsys):
    assert run_cli(capsys, "next-number") == (0, "INV-0001")


def test_init_shows_default_profile(capsys):
    code, profile = run_cli(capsys, "init")
    assert code == 0
    assert profile["invoiceHeaderColor"] == "#739EDC"
    assert profile["themeAccentColor"] == "#149E8E"


def test_log_has_single_bootstrap_entry(capsys):
    run_cli(capsys, "init")
    code, entries = run_cli(capsys, "log")
    assert code == 0
    assert [e["action"] for e in entries] == ["Application Initialized / Loaded"]


def test_invoices_listing(capsys, sample_draft):
    asyncio.run(_seed(sample_draft))

    code, invoices = run_cli(capsys, "invoices", "--search", "globex")
    assert code == 0
    assert [inv["invoiceNumber"] for inv in invoices] == ["INV-0001"]
    assert run_cli(capsys, "invoices", "--status", "paid") == (0, [])
    assert run_cli(capsys, "next-number") == (0, "INV-0002")


def test_reset_log_requires_confirmation(capsys):
    run_cli(capsys, "init")
    assert run_cli(capsys, "reset-log") == (1, None)
    assert run_cli(capsys, "reset-log", "--yes") == (0, {"cleared": True})


def test_unknown_status_is_rejected(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["invoices", "--status", "lost"])
    assert exc_info.value.code == 2


def test_log_level_override(capsys):
    assert run_cli(capsys, "--log-level", "DEBUG", "next-number") == (0, "INV-0001")
