from pathlib import Path

from jobpool_scheduler.cli import main


def _write_pool(tmp_path: Path, text: str, name: str = "jobs.data") -> Path:
    p = tmp_path / name
    p.write_text(text)
    return p


def test_run_fcfs_writes_default_output(tmp_path: Path):
    pool = _write_pool(tmp_path, "2\n0 4\n0 2 0\n1 5 0\n")
    assert main(["run", str(pool)]) == 0
    assert (tmp_path / "output.data").read_text() == "0 2 P1\n2 7 P2\n"


def test_run_preemptive_pool_defaults_to_ppl(tmp_path: Path):
    pool = _write_pool(tmp_path, "2\n1 4\n0 5 1\n2 2 0\n")
    assert main(["run", str(pool)]) == 0
    assert (tmp_path / "output.data").read_text() == "0 4 P1\n4 6 P2\n6 7 P1\n"


def test_run_explicit_algorithm_and_output(tmp_path: Path):
    pool = _write_pool(tmp_path, "2\n1 4\n0 5 1\n2 2 0\n")
    out = tmp_path / "custom.txt"
    assert main(["run", str(pool), "-a", "fcfs", "-o", str(out)]) == 0
    assert out.read_text() == "0 5 P1\n5 7 P2\n"


def test_run_quantum_override(tmp_path: Path):
    pool = _write_pool(tmp_path, "1\n1 4\n0 5 0\n")
    assert main(["run", str(pool), "--quantum", "2"]) == 0
    assert (tmp_path / "output.data").read_text() == "0 2 P1\n2 4 P1\n4 5 P1\n"


def test_run_preemption_override(tmp_path: Path):
    pool = _write_pool(tmp_path, "2\n0 4\n0 5 1\n2 2 0\n")
    assert main(["run", str(pool), "--preemptive"]) == 0
    assert (tmp_path / "output.data").read_text() == "0 4 P1\n4 6 P2\n6 7 P1\n"


def test_run_show_prints_chart(tmp_path: Path, capsys):
    pool = _write_pool(tmp_path, "2\n0 4\n0 2 0\n1 5 0\n")
    assert main(["run", str(pool), "--show"]) == 0
    out = capsys.readouterr().out
    assert "Gantt Chart" in out
    assert "Per-process metrics" in out


def test_run_invalid_quantum_fails_without_output(tmp_path: Path, capsys):
    pool = _write_pool(tmp_path, "1\n1 0\n0 3 0\n")
    assert main(["run", str(pool)]) == 1
    assert not (tmp_path / "output.data").exists()
    assert "quantum" in capsys.readouterr().out


def test_run_count_mismatch_fails(tmp_path: Path):
    pool = _write_pool(tmp_path, "3\n0 2\n0 3 0\n")
    assert main(["run", str(pool)]) == 1
    assert not (tmp_path / "output.data").exists()


def test_run_unknown_algorithm_fails(tmp_path: Path, capsys):
    pool = _write_pool(tmp_path, "1\n0 2\n0 3 0\n")
    assert main(["run", str(pool), "-a", "rr"]) == 1
    assert "Unknown scheduling policy" in capsys.readouterr().out


def test_run_missing_file(tmp_path: Path):
    assert main(["run", str(tmp_path / "nope.data")]) == 1


def test_compare(tmp_path: Path, capsys):
    pool = _write_pool(tmp_path, "3\n1 2\n0 4 2\n1 3 0\n2 1 1\n")
    assert main(["compare", str(pool)]) == 0
    out = capsys.readouterr().out
    assert "FCFS" in out
    assert "P_PL" in out


def test_policies_lists_registry(capsys):
    assert main(["policies"]) == 0
    out = capsys.readouterr().out
    assert "FCFS" in out
    assert "P_PL" in out


def test_run_undecodable_pool_fails(tmp_path: Path, capsys):
    pool = tmp_path / "jobs.data"
    pool.write_bytes(b"1\n0 4\n0 2 \xff\n")
    assert main(["run", str(pool)]) == 1
    assert not (tmp_path / "output.data").exists()
    assert "UTF-8" in capsys.readouterr().out


def test_run_keeps_pool_named_output(tmp_path: Path):
    pool = _write_pool(tmp_path, "1\n0 4\n0 2 0\n", name="output.data")
    assert main(["run", str(pool)]) == 0
    assert pool.read_text() == "1\n0 4\n0 2 0\n"
    assert (tmp_path / "output.data.processed").read_text() == "0 2 P1\n"
