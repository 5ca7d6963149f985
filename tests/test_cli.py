from carriage import __version__
from carriage.cli import main


def test_help_lists_commands(capsys):
    code = main(["--help"])
    assert code == 0
    assert "render" in capsys.readouterr().out


def test_version_flag(capsys):
    code = main(["--version"])
    assert code == 0
    assert __version__ in capsys.readouterr().out


def test_no_command_prints_help(capsys):
    code = main([])
    assert code == 0
    assert "usage:" in capsys.readouterr().out


def test_unknown_option_returns_error_code():
    assert main(["render", "--bogus"]) == 2


def test_only_render_subcommand_exists(capsys):
    # Running commands is left to the shell: `cmd | carriage render`
    assert main(["capture", "--cmd", "echo hi"]) == 2
    assert "invalid choice" in capsys.readouterr().err


def test_missing_config_file_is_reported(tmp_path, capsys):
    code = main(["--config", str(tmp_path / "nope.toml"), "render"])
    assert code == 2
    assert "[carriage] config:" in capsys.readouterr().err


def test_unknown_encoding_is_a_config_error(tmp_path, capsys):
    raw_path = tmp_path / "raw.log"
    raw_path.write_bytes(b"a\rb")
    out_path = tmp_path / "out.log"

    code = main(["--encoding", "bogus", "render", str(raw_path), "-o", str(out_path)])
    assert code == 2
    assert "unknown encoding: bogus" in capsys.readouterr().err
    # Nothing was half-written
    assert not out_path.exists()


def test_non_table_render_section_is_a_config_error(tmp_path, capsys):
    cfg_path = tmp_path / "carriage.toml"
    cfg_path.write_text('render = "fast"\n')
    code = main(["--config", str(cfg_path), "render"])
    assert code == 2
    assert "must be a table" in capsys.readouterr().err


def test_config_from_environment(tmp_path, monkeypatch, capsys):
    cfg_path = tmp_path / "carriage.toml"
    cfg_path.write_text('encoding = "nope"\n')
    monkeypatch.setenv("CARRIAGE_CONFIG", str(cfg_path))
    code = main(["render"])
    assert code == 2
    assert "unknown encoding: nope" in capsys.readouterr().err
