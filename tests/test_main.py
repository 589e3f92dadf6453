"""Command line entry point in headless mode."""

import pytest

import main


def test_headless_wander_run(capsys):
    assert main.main(["--scene", "wander", "--headless", "--ticks", "20", "--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert "Wander" in out


def test_headless_flock_with_custom_size(capsys):
    assert main.main(["--scene", "flock", "--boids", "12", "--headless", "--ticks", "5",
                      "--seed", "2"]) == 0
    assert "Agents: 12" in capsys.readouterr().out


def test_unknown_scene_is_rejected():
    with pytest.raises(SystemExit):
        main.main(["--scene", "orbit", "--headless"])
