import pytest

from countdown_numbers import cli


def test_cli_prints_distinct_solutions(capsys):
    assert cli.main(["6", "1", "2", "3"]) == 0
    out = capsys.readouterr().out
    assert "Numbers:\n1  2  3\n" in out
    assert "Target: 6" in out
    assert "(3 * 2)\n" in out
    section = out.split("Solutions:\n")[1]
    solutions = section.split("There are")[0].split('\n')[:-1]
    assert solutions == sorted(set(solutions))
    assert f"There are {len(solutions)} 'distinct' solutions" in out


def test_cli_limit(capsys):
    assert cli.main(["6", "1", "2", "3", "--limit", "1"]) == 0
    out = capsys.readouterr().out
    printed = out.split("Solutions:\n")[1].split('\n')
    assert printed[1].startswith("There are")


def test_cli_no_solutions(capsys):
    assert cli.main(["10", "2", "3"]) == 0
    assert "There are 0 'distinct' solutions" in capsys.readouterr().out


def test_cli_rejects_too_few_numbers(capsys):
    assert cli.main(["10", "2"]) == 2
    assert "error:" in capsys.readouterr().err


def test_cli_rejects_negative_limit(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["6", "1", "2", "3", "--limit", "-1"])
    assert exc.value.code == 2
    assert "must not be negative" in capsys.readouterr().err


def test_cli_zero_limit_prints_only_count(capsys):
    assert cli.main(["6", "2", "3", "--limit", "0"]) == 0
    out = capsys.readouterr().out
    assert "Solutions:\nThere are 1 'distinct' solutions" in out


def test_cli_bad_settings_file(tmp_path, monkeypatch, capsys):
    path = tmp_path / 'bad.yaml'
    path.write_text('rules:\n  num_big: 3\n')
    monkeypatch.setenv('COUNTDOWN_SETTINGS', str(path))
    assert cli.main([]) == 2
    assert "Invalid rules" in capsys.readouterr().err
