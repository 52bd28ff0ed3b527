import csv
import json
from pathlib import Path

import pytest

from anagrams.engine import Constraints, InvalidPhrase
from anagrams.harness import run_case, run_batch, write_csv, write_manifest
from anagrams.harness.io import describe_output_path
from anagrams.solvers import DEFAULT_ENGINE

from apps.cli import run as cli_run
from apps.cli import run_batch as cli_batch

from conftest import WORDS


def _write(p: Path, lines):
    p.write_text("\n".join(lines) + "\n", encoding="utf-8")


def test_describe_output_path():
    c = Constraints.build(must_start_with="tr", max_words=3)
    p = describe_output_path("out/anagram_solutions.txt", "Dirty Room!", c)
    assert p == Path("out/anagram_solutions_dirtyroom_w3_l2_start-rt.txt")


def test_run_case_smoke(solver, tmp_path: Path):
    c = Constraints.build(max_words=2, min_word_length=1)
    r = run_case(solver, "anagram", c, output_base=tmp_path / "anagram_solutions.txt")
    assert r["status"] == "completed" and r["num_solutions"] == 3
    assert r["engine"] == DEFAULT_ENGINE
    assert r["solutions"][0] == ["AN", "AGRAM"]
    assert Path(r["output"]).read_text(encoding="utf-8").splitlines() == \
        ["AN AGRAM", "AGRAM AN", "ANAGRAM"]


def test_run_batch_skips_or_raises_invalid(solver):
    c = Constraints.build(max_words=2, min_word_length=1)
    with pytest.raises(InvalidPhrase):
        run_batch(solver, ["anagram", "???"], c)

    rows = run_batch(solver, ["anagram", "", "???"], c, skip_invalid=True)
    assert [r["phrase"] for r in rows] == ["anagram", "???"]
    assert rows[1]["status"].startswith("error:")


def test_run_batch_uses_progress_wrapper(solver):
    seen = []

    def progress(items):
        seen.extend(items)
        return items

    run_batch(solver, ["anagram", "man"], Constraints.build(min_word_length=1), progress=progress)
    assert seen == ["anagram", "man"]


def test_write_csv_and_manifest(solver, tmp_path: Path):
    rows = run_batch(solver, ["anagram"], Constraints.build(max_words=2, min_word_length=1))
    p = write_csv(rows, str(tmp_path / "run.csv"))
    with open(p, newline="", encoding="utf-8") as f:
        out = list(csv.DictReader(f))
    assert out[0]["first_solution"] == "AN AGRAM" and out[0]["num_solutions"] == "3"

    m = write_manifest({"run_id": "x", "results": rows}, str(tmp_path / "m.json"))
    assert json.loads(Path(m).read_text(encoding="utf-8"))["run_id"] == "x"


def test_cli_run_writes_solutions(tmp_path: Path, capsys):
    words = tmp_path / "words.txt"
    _write(words, WORDS)
    out = tmp_path / "solutions.txt"
    code = cli_run.main(["ANAGRAM", "--dict", str(words), "--max-words", "2",
                         "--min-length", "1", "--out", str(out), "--exact-out", "--manifest"])
    assert code == 0
    assert out.read_text(encoding="utf-8") == "AN AGRAM\nAGRAM AN\nANAGRAM\n"
    printed = capsys.readouterr().out
    assert "status=completed" in printed
    manifests = list(tmp_path.glob("solutions_*_manifest.json"))
    assert len(manifests) == 1
    manifest = json.loads(manifests[0].read_text(encoding="utf-8"))
    assert manifest["index"]["entries"] == len(WORDS)
    assert manifest["index"]["min_length"] == 1


def test_cli_run_describes_output_name(tmp_path: Path):
    words = tmp_path / "words.txt"
    _write(words, WORDS)
    code = cli_run.main(["anagram", "--dict", str(words), "--min-length", "1",
                         "--max-words", "2", "--out", str(tmp_path / "anagram_solutions.txt"),
                         "--show", "0"])
    assert code == 0
    assert (tmp_path / "anagram_solutions_anagram_w2_l1.txt").exists()


def test_cli_run_reports_invalid_input(tmp_path: Path, capsys):
    words = tmp_path / "words.txt"
    _write(words, WORDS)
    assert cli_run.main(["...", "--dict", str(words), "--out", str(tmp_path / "o.txt")]) == 2
    assert cli_run.main(["anagram", "--dict", str(words), "--max-words", "0",
                         "--out", str(tmp_path / "o.txt")]) == 2
    assert "error:" in capsys.readouterr().err


def test_cli_batch(tmp_path: Path):
    words = tmp_path / "words.txt"
    _write(words, WORDS)
    phrases = tmp_path / "phrases.txt"
    _write(phrases, ["anagram", "man"])
    outdir = tmp_path / "reports"
    code = cli_batch.main([str(phrases), "--dict", str(words), "--min-length", "1",
                           "--max-words", "2", "--outdir", str(outdir), "--progress", "off"])
    assert code == 0
    assert len(list(outdir.glob("run_*.csv"))) == 1
    assert (outdir / "anagram_solutions_man_w2_l1.txt").read_text(encoding="utf-8") == "MAN\n"
    (manifest_path,) = outdir.glob("run_*_manifest.json")
    manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
    assert manifest["index"] == {"entries": 7, "unique_words": 7, "min_length": 1, "max_length": 7}
