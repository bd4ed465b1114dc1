from __future__ import annotations

import logging
import runpy
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "github"))
sys.path.insert(0, str(ROOT / "apps" / "action"))

import setup_phpstan_action.__main__ as action_main
import setup_phpstan_action.cli as cli
from setup_phpstan_core.errors import InvalidVersionTarget
from setup_phpstan_core.host import ActionsHost


def test_main_passes_through_args(monkeypatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(action_main, "_cli_main", lambda argv=None: calls.append(list(argv or [])) or 0)

    rc = action_main.main(["--version", "1.10.0"])
    assert rc == 0
    assert calls == [["--version", "1.10.0"]]


def test_main_module_runpath_without_package_context() -> None:
    main_path = ROOT / "apps" / "action" / "setup_phpstan_action" / "__main__.py"
    result = runpy.run_path(str(main_path))
    assert "main" in result


def test_cli_reports_setup_error(monkeypatch, tmp_path, capsys) -> None:
    def fake_run(config, inputs, **kwargs):
        raise InvalidVersionTarget(inputs.version)

    monkeypatch.setattr(cli, "run", fake_run)
    monkeypatch.setattr(cli, "ActionsHost", lambda: ActionsHost(environ={}))
    monkeypatch.setattr(cli, "configure_logging", lambda config: logging.getLogger("setup_phpstan"))
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)

    rc = cli.main(["--version", "stable", "--install-path", str(tmp_path), "--cache-dir", str(tmp_path / "c")])

    assert rc == 1
    out = capsys.readouterr().out
    assert "::error::[Setup PHPStan] resolve-version: Invalid version target 'stable'" in out


def test_cli_wires_collaborators(monkeypatch, tmp_path) -> None:
    seen: dict[str, object] = {}

    def fake_run(config, inputs, *, service, cache, download, host):
        seen.update(inputs=inputs, service=service, cache=cache, download=download)
        return inputs.install_path / config.asset_name

    monkeypatch.setattr(cli, "run", fake_run)
    monkeypatch.setattr(cli, "ActionsHost", lambda: ActionsHost(environ={}))
    monkeypatch.setattr(cli, "configure_logging", lambda config: logging.getLogger("setup_phpstan"))
    monkeypatch.setenv("GITHUB_TOKEN", "tok")

    rc = cli.main(["--install-path", str(tmp_path), "--cache-dir", str(tmp_path / "c")])

    assert rc == 0
    assert seen["inputs"].version == "latest"
    assert seen["service"].token == "tok"
    assert seen["cache"].root == tmp_path / "c"
    assert callable(seen["download"])
