import csv
import json
from pathlib import Path

import pytest

from tttduel.selfplay import SelfPlayArgs, run_selfplay


def _hide_parquet_deps(monkeypatch: pytest.MonkeyPatch) -> None:
    import importlib

    real_find_spec = importlib.util.find_spec

    def fake_find_spec(name: str, package=None):  # type: ignore[override]
        if name in {"pandas", "pyarrow"}:
            return None
        return real_find_spec(name, package)

    monkeypatch.setattr(importlib.util, "find_spec", fake_find_spec)


def test_export_creates_csv_and_manifest(tmp_path: Path):
    out = tmp_path / "exp"
    s = run_selfplay(SelfPlayArgs(games=6, x_policy="random", o_policy="random", seed=1, out=out))
    assert Path(s["out"]) == out
    games_csv = out / "games.csv"
    assert games_csv.exists()
    with games_csv.open() as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 6
    assert {r["result"] for r in rows} <= {"x", "o", "draw"}
    assert all(len(r["final_board"]) == 9 for r in rows)

    manifest = json.loads((out / "manifest.json").read_text())
    assert manifest["results_version"]
    assert manifest["args"]["games"] == 6
    assert sum(manifest["summary"].values()) == 6
    assert manifest["checksums"]["games_csv"]
    assert manifest["parquet_written"] is False


def test_format_both_graceful_without_parquet_deps(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _hide_parquet_deps(monkeypatch)
    out = tmp_path / "exp_both"
    run_selfplay(SelfPlayArgs(games=3, x_policy="random", o_policy="random", out=out, format="both"))
    assert (out / "games.csv").exists()
    assert not (out / "games.parquet").exists()
    manifest = json.loads((out / "manifest.json").read_text())
    assert manifest["parquet_written"] is False


def test_format_parquet_raises_without_deps(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _hide_parquet_deps(monkeypatch)
    out = tmp_path / "exp_parquet"
    with pytest.raises(RuntimeError):
        run_selfplay(SelfPlayArgs(games=3, x_policy="random", o_policy="random", out=out,
                                  format="parquet"))
    assert not out.exists()


def test_format_parquet_writes_file(tmp_path: Path):
    pytest.importorskip("pandas")
    pytest.importorskip("pyarrow")
    import pandas as pd

    out = tmp_path / "exp_pq"
    run_selfplay(SelfPlayArgs(games=4, x_policy="random", o_policy="random", out=out,
                              format="parquet"))
    df = pd.read_parquet(out / "games.parquet")
    assert len(df) == 4
    assert not (out / "games.csv").exists()
    assert json.loads((out / "manifest.json").read_text())["parquet_written"] is True
