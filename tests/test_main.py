"""Tests for the command line tool."""

from pathlib import Path

import yaml

from keeplayout.main import main

LAYOUT = Path(__file__).parent.parent / "assets" / "layouts" / "profile_card.yaml"


def test_tree_output(capsys):
    assert main([str(LAYOUT)]) == 0
    out = capsys.readouterr().out
    assert "Layout 'screen' (6 views):" in out
    assert "  - header: x=0 y=0 w=320 h=64" in out
    assert "    - name: x=92 y=16 w=100 h=20" in out


def test_yaml_output_in_root_coordinates(capsys):
    assert main([str(LAYOUT), "--format", "yaml", "--global"]) == 0
    data = yaml.safe_load(capsys.readouterr().out)
    assert data["name"] == "screen"
    assert data["frames"]["name"] == [112, 96, 100, 20]


def test_missing_file(capsys, tmp_path):
    assert main([str(tmp_path / "missing.yaml")]) == 1
    assert capsys.readouterr().err.startswith("Error:")


def test_unsatisfiable_layout(capsys, tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("frame: [0, 0, 100, 100]\nviews:\n  a:\n    keep:\n      width: 500\n      horizontal_insets: 0\n")
    assert main([str(path)]) == 1
    assert "could not be solved" in capsys.readouterr().err
