import json
from pathlib import Path
import pytest
from phrasebook.engine import Engine
from phrasebook_web.__main__ import main

@pytest.mark.e2e
def test_cli_add_import_and_query(tmp_path: Path, capsys):
    dsn = f"sqlite:///{tmp_path / 'cli.sqlite'}"
    src = tmp_path / "more.txt"
    src.write_text("Zinc plate\r\nZebra tape\n\n", encoding="utf-8")

    assert main(["--db", dsn, "--add", "Zeta box", "--import", str(src), "--q", "ze", "--json"]) == 0
    out = capsys.readouterr().out
    assert "imported 2 new phrases" in out
    rows = json.loads(out[out.index("["):])
    assert rows == ["Zeta box", "Zebra tape"]

    assert main(["--db", dsn, "--custom", "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == ["Zeta box", "Zinc plate", "Zebra tape"]

@pytest.mark.e2e
def test_cli_rows_and_export(tmp_path: Path, capsys, monkeypatch):
    dsn = f"sqlite:///{tmp_path / 'cli.sqlite'}"
    eng = Engine().open(dsn)
    eng.catalog.add("mine")
    eng.copy("A", lambda _t: None)
    eng.copy("B", lambda _t: None)
    eng.shutdown()

    assert main(["--db", dsn, "--rows", "row"]) == 0
    assert capsys.readouterr().out == "A\tB\n"

    monkeypatch.chdir(tmp_path)
    assert main(["--db", dsn, "--export-custom", "csv", "--clear-rows"]) == 0
    written = list(tmp_path.glob("custom-items-*.csv"))
    assert len(written) == 1
    assert written[0].read_text(encoding="utf-8") == '"mine"'

    eng = Engine().open(dsn)
    assert len(eng.rows) == 0
    eng.shutdown()
