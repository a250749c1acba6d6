from __future__ import annotations

import pytest

from softcat import main as main_module
from softcat.domain.model import RecordKey, SourceKind
from softcat.domain.refresh import RefreshResult


def test_source_add_passes_arguments(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}

    def fake_add(slug: str, **kwargs: object) -> bool:
        captured.update(kwargs, slug=slug)
        return True

    monkeypatch.setattr(main_module, "add_source", fake_add)

    main_module.main(
        [
            "source",
            "add",
            "wikidata",
            "--kind",
            "wikidata",
            "--url",
            "https://www.wikidata.org/",
            "--priority",
            "1",
        ]
    )

    assert captured == {
        "slug": "wikidata",
        "kind": SourceKind.WIKIDATA,
        "url": "https://www.wikidata.org/",
        "priority": 1,
        "description": None,
    }
    assert "registered" in capsys.readouterr().out


def test_source_add_rejects_unknown_kind(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "add_source", lambda *_, **__: True)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(
            [
                "source",
                "add",
                "npm",
                "--kind",
                "npm",
                "--url",
                "https://www.npmjs.com/",
                "--priority",
                "3",
            ]
        )

    assert excinfo.value.code == 2


def test_invalid_values_exit_with_status_two(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_add(*_: object, **__: object) -> bool:
        raise ValueError("invalid literal for int()")

    monkeypatch.setattr(main_module, "add_source", fake_add)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(
            [
                "source",
                "add",
                "github",
                "--kind",
                "GitHub",
                "--url",
                "https://github.com/",
                "--priority",
                "5",
            ]
        )

    assert excinfo.value.code == 2


def test_refresh_defaults_to_every_record(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_refresh(**kwargs: object) -> RefreshResult:
        captured.update(kwargs)
        return RefreshResult(candidates=2, refreshed=2)

    monkeypatch.setattr(main_module, "refresh_catalog", fake_refresh)

    main_module.main(["refresh"])

    assert captured == {"staleness_minutes": None}


def test_refresh_with_failures_exits_non_zero(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def fake_refresh(**_: object) -> RefreshResult:
        return RefreshResult(
            candidates=2, refreshed=1, failed=1, failed_keys=(RecordKey("wikidata", "Q1"),)
        )

    monkeypatch.setattr(main_module, "refresh_catalog", fake_refresh)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["refresh", "--staleness-minutes", "30"])

    assert excinfo.value.code == 1
    assert "1 failed" in capsys.readouterr().out


def test_import_forwards_external_ids(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: list[tuple[str, list[str]]] = []

    def fake_import(source: str, external_ids: list[str]) -> list[object]:
        captured.append((source, external_ids))
        return []

    monkeypatch.setattr(main_module, "import_from_source", fake_import)

    main_module.main(["import", "wikidata", "Q1", "Q2"])

    assert captured == [("wikidata", ["Q1", "Q2"])]


def test_show_rejects_malformed_uuid() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["show", "not-a-uuid"])

    assert excinfo.value.code == 2


def test_show_missing_software_exits_non_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(main_module, "show_software", lambda _software_id: None)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["show", "0b7f1a3e-2f43-4c1d-9a55-3f6f1d0c2a10"])

    assert excinfo.value.code == 1


def test_unexpected_errors_exit_with_status_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_list(**_: object) -> list[object]:
        raise RuntimeError("database is locked")

    monkeypatch.setattr(main_module, "list_catalog", fake_list)

    with pytest.raises(SystemExit) as excinfo:
        main_module.main(["list", "--all"])

    assert excinfo.value.code == 1


def test_console_entry_point_loads_dotenv_and_traps_sigint(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    calls: list[object] = []
    monkeypatch.setattr(main_module, "load_dotenv", lambda: calls.append("dotenv"))
    monkeypatch.setattr(
        main_module, "signal", lambda signum, handler: calls.append((signum, handler))
    )
    monkeypatch.setattr(main_module, "main", lambda: calls.append("main"))

    main_module.run()

    assert calls == [
        "dotenv",
        (main_module.SIGINT, main_module.sigint_handler),
        "main",
    ]
