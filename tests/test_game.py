import io
import random

import pytest

from seabattle.field import CellStatus
from seabattle.game import Game, GameController, GameOver, main
from seabattle.output import Output
from seabattle.reader import Command, InputReader
from seabattle.state import GameState


def make_game(text, tmp_path, seed=0):
    out = io.StringIO()
    err = io.StringIO()
    output = Output(out, err)
    reader = InputReader(io.StringIO(text), output)
    game = Game(reader, output, tmp_path / "save.json", random.Random(seed))
    return game, out, err


def ship_cells(field):
    return sum(
        field.status(x, y) is CellStatus.SHIP
        for y in range(field.rows)
        for x in range(field.cols)
    )


def known_cells(field):
    return sum(
        field.status(x, y) is not CellStatus.UNKNOWN
        for y in range(field.rows)
        for x in range(field.cols)
    )


def small_state():
    state = GameState(3, 3, [1])
    state.comp_field.add_ship(0, 0, state.comp_ships[0], 0)
    state.user_field.add_ship(2, 2, state.user_ships[0], 0)
    return state


def test_set_field_computer_places_every_ship(tmp_path):
    game, _, _ = make_game("", tmp_path)
    game.set_field_computer()
    assert ship_cells(game.state.comp_field) == sum(game.state.sizes)
    assert game.state.computer_score == len(game.state.sizes)


def test_set_field_user_retries_on_intersection(tmp_path):
    game, out, _ = make_game("0 0\n0 0\n2 0\n0 2\n0 4\n", tmp_path)
    game.set_field_user()
    assert "There is a problem: There is a ship 0, 0" in out.getvalue()
    assert game.state.user_field.status(2, 0) is CellStatus.SHIP
    assert game.state.user_field.status(1, 4) is CellStatus.SHIP
    assert ship_cells(game.state.user_field) == sum(game.state.sizes)


def test_turn_user_miss_then_computer_attacks(tmp_path):
    game, _, _ = make_game("2 2\n", tmp_path)
    game.state = small_state()
    game.turn_user()
    assert game.state.comp_field.status(2, 2) is CellStatus.EMPTY
    assert known_cells(game.state.user_field) - ship_cells(game.state.user_field) <= 1
    user_ship = game.state.user_ships[0]
    marked = known_cells(game.state.user_field) - 1 + (
        user_ship.segment(0).state.value != "Intact"
    )
    assert marked == 1
    assert game.state.user_score == 1


def test_turn_user_destroying_last_ship_starts_round(tmp_path):
    game, out, _ = make_game("0 0\n", tmp_path)
    game.state = small_state()
    before = len(game.state.abilities)
    game.state.abilities.set_double_hit()
    game.turn_user()
    text = out.getvalue()
    assert "New ability!" in text
    assert "Congratulations" in text
    assert len(game.state.abilities) == before + 1
    assert game.state.computer_score == len(game.state.sizes)
    assert known_cells(game.state.user_field) == 1


def test_turn_user_rejects_out_of_field(tmp_path):
    game, out, _ = make_game("9 9\n1 1\n", tmp_path)
    game.state = small_state()
    game.turn_user()
    assert "There is a problem: The coordinates out of field: 9, 9" in out.getvalue()
    assert game.state.comp_field.status(1, 1) is CellStatus.EMPTY


def test_turn_comp_skips_destroyed_segments(tmp_path):
    game, _, _ = make_game("", tmp_path)
    state = GameState(2, 1, [1])
    state.user_field.add_ship(0, 0, state.user_ships[0], 0)
    state.user_field.hit(0, 0, True)
    state.user_score = 5
    game.state = state
    game.turn_comp()
    assert state.user_field.status(1, 0) is CellStatus.EMPTY


def test_use_ability_without_abilities_reports_error(tmp_path):
    game, _, err = make_game("", tmp_path)
    game.state = small_state()
    game.state.abilities.resize(0)
    game.use_ability()
    assert "No abilities available." in err.getvalue()
    assert "Try again" in err.getvalue()
    assert known_cells(game.state.comp_field) == 1


def test_save_and_load_round_trip(tmp_path):
    game, out, _ = make_game("", tmp_path)
    game.set_field_computer()
    game.state.user_score = 2
    game.save()
    assert "Game state saved successfully" in out.getvalue()

    other, other_out, _ = make_game("", tmp_path, seed=1)
    other.load()
    assert "loaded successfully" in other_out.getvalue()
    assert other.state.comp_field.to_json() == game.state.comp_field.to_json()
    assert other.state.user_score == 2
    assert other.state.abilities.reader is other.reader


def test_load_missing_file_reports_error(tmp_path):
    game, _, err = make_game("", tmp_path)
    game.load()
    assert "Failed to load the game: Error loading: File not found." in err.getvalue()


def test_check_end_when_nobody_lost(tmp_path):
    game, _, _ = make_game("", tmp_path)
    assert game.check_end() is False


def test_check_end_user_lost_and_quits(tmp_path):
    game, out, _ = make_game("n\n", tmp_path)
    game.state.user_score = 0
    with pytest.raises(GameOver):
        game.check_end()
    assert "Exiting the game. Thank you for playing!" in out.getvalue()


def test_begin_new_game(tmp_path):
    game, _, _ = make_game("n\n4 4\n1\n2\n0 0\n", tmp_path)
    game.begin_game()
    assert (game.state.cols, game.state.rows) == (4, 4)
    assert game.state.sizes == [2]
    assert game.state.user_field.status(1, 0) is CellStatus.SHIP
    assert ship_cells(game.state.comp_field) == 2
    assert game.state.computer_score == 1


def test_controller_process_command(tmp_path):
    game, _, _ = make_game("", tmp_path)
    controller = GameController(game.reader, game)
    controller.process_command(Command.SAVE_GAME)
    assert (tmp_path / "save.json").is_file()
    with pytest.raises(GameOver):
        controller.process_command(Command.END)


def test_controller_run(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    game, _, err = make_game("s\ne\n", tmp_path)
    controller = GameController(game.reader, game)
    with pytest.raises(GameOver):
        controller.run()
    assert (tmp_path / "save.json").is_file()
    assert "The command file cannot be opened." in err.getvalue()


def test_main_ends_on_command(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO("s\ne\n"))
    assert main(["--save-file", str(tmp_path / "game.json")]) == 1
    assert (tmp_path / "game.json").is_file()
    assert "Exiting the game" in capsys.readouterr().out


def test_main_stops_at_end_of_input(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    assert main([]) == 0