import csv

import pytest

from fmselect.cli import main
from fmselect.ingest import player_table_header, player_to_row
from fmselect.models import Footedness, Player, PlayerCategory


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("FMSELECT_TEAM_SIZE", "FMSELECT_ROLE_FILE", "FMSELECT_PLAYER_FILE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def squad(tmp_path):
    players = [
        Player(name="Kim Keeper", category=PlayerCategory.GOAL, role_ratings={"GK": 14.0}),
        Player(name="Dee Fender", category=PlayerCategory.CENTRAL_DEFENDER, role_ratings={"CD(d)": 12.5}),
        Player(name="Mo Mid", footedness=Footedness.BOTH, role_ratings={"BBM": 15.0, "CD(d)": 13.0}),
        Player(name="Benchwarmer", role_ratings={"BBM": 3.0}),
    ]
    player_path = tmp_path / "players.csv"
    with player_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(player_table_header())
        writer.writerows(player_to_row(p) for p in players)

    role_path = tmp_path / "roles.txt"
    role_path.write_text("[roles]\nGK\nCD(d)\nBBM\n", encoding="utf-8")
    return player_path, role_path


def test_cli_prints_team(squad, capsys):
    players, roles = squad

    code = main([str(players), "-r", str(roles), "--team-size", "3"])

    out = capsys.readouterr().out
    assert code == 0
    assert out == (
        "BBM -> Mo Mid (score: 15.0)\n"
        "CD(d) -> Dee Fender (score: 12.5)\n"
        "GK -> Kim Keeper (score: 14.0)\n"
        "Total Score: 41.5\n"
    )


def test_cli_writes_csv(squad, tmp_path, capsys):
    players, roles = squad
    output = tmp_path / "team.csv"

    code = main([str(players), "-r", str(roles), "--team-size", "0", "--format", "csv", "--output", str(output)])

    assert code == 0
    rows = list(csv.reader(output.read_text(encoding="utf-8").splitlines()))
    assert rows[0] == ["role", "player", "footedness", "category", "score"]
    assert [row[1] for row in rows[1:]] == ["Mo Mid", "Dee Fender", "Kim Keeper"]
    assert "Wrote team" in capsys.readouterr().out


def test_cli_reports_role_count_mismatch(squad, capsys):
    players, roles = squad

    code = main([str(players), "-r", str(roles)])

    err = capsys.readouterr().err
    assert code == 1
    assert err.startswith("error: [E510]")
    assert len(err.strip().splitlines()) == 1


def test_cli_missing_role_file(squad, tmp_path, capsys):
    players, _ = squad

    code = main([str(players), "-r", str(tmp_path / "nope.txt"), "--team-size", "0"])

    assert code == 1
    assert capsys.readouterr().err.startswith("error: [E104]")


def test_cli_without_role_file(squad, capsys):
    players, _ = squad
    assert main([str(players)]) == 1
    assert capsys.readouterr().err.startswith("error: [E102]")


def test_cli_unwritable_output(squad, tmp_path, capsys):
    players, roles = squad

    code = main([str(players), "-r", str(roles), "--team-size", "0", "--output", str(tmp_path)])

    captured = capsys.readouterr()
    assert code == 1
    assert captured.err.strip().splitlines()[-1].startswith("error: [E104]")
    assert captured.out == ""
