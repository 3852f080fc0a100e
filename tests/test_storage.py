"""Tests for the snapshot codec and the in-memory game repository."""

import json

import pytest
import numpy as np

from extgol.core.coord import Coord
from extgol.core.errors import InconsistentBoard, InvalidMoodOrType
from extgol.core.game import Game
from extgol.core.rules import CellType, Mood
from extgol.patterns import create_glider_pattern
from extgol.storage import GameRepository, dumps, game_from_dict, game_to_dict, loads


def seeded_game():
    game = Game.create(6, 6, initial_life_points=3)
    game.board.load_pattern(create_glider_pattern(), 1, 1)
    game.board.cell_at(Coord(2, 1)).mood = Mood.VAMPIRE
    game.board.cell_at(Coord(3, 3)).mood = Mood.HEALER
    game.board.cell_at(Coord(1, 3)).cell_type = CellType.HIGHLANDER
    game.board.cell_at(Coord(5, 5)).cell_type = CellType.SOCIAL
    return game


def cell_state(game):
    return [
        (c.coord, c.alive, c.life_points, c.mood, c.cell_type,
         c.min_threshold, c.max_threshold, c.skipped_gen,
         [g.index for g in c.generations])
        for c in game.board.cells()
    ]


class TestSnapshotCodec:
    """Encoding and decoding full game state."""

    def test_round_trip_preserves_state(self):
        game = seeded_game()
        game.run(2)

        restored = loads(dumps(game))

        assert cell_state(restored) == cell_state(game)
        assert restored.current_index == 2
        assert [g.alive for g in restored.generations] == [g.alive for g in game.generations]

    def test_restored_game_evolves_identically(self):
        game = seeded_game()
        game.step()
        restored = game_from_dict(game_to_dict(game))

        for _ in range(3):
            game.step()
            restored.step()
            np.testing.assert_array_equal(restored.board.to_array(), game.board.to_array())
        assert cell_state(restored) == cell_state(game)

    def test_restored_cells_are_bound_to_new_board(self):
        restored = loads(dumps(seeded_game()))
        restored.board.validate()

    def test_output_is_plain_json(self):
        data = json.loads(dumps(seeded_game()))
        assert data["width"] == 6
        assert len(data["cells"]) == 36
        assert data["cells"][0]["mood"] == "NAIVE"

    def test_unknown_format_rejected(self):
        data = game_to_dict(seeded_game())
        data["format"] = 99
        with pytest.raises(ValueError, match="Unsupported snapshot format"):
            game_from_dict(data)

    def test_unknown_mood_rejected(self):
        data = game_to_dict(seeded_game())
        data["cells"][0]["mood"] = "ZEALOT"
        with pytest.raises(InvalidMoodOrType):
            game_from_dict(data)

    def test_dangling_history_rejected(self):
        game = seeded_game()
        game.step()
        data = game_to_dict(game)
        data["generations"] = []
        with pytest.raises(InconsistentBoard, match="unknown generations"):
            game_from_dict(data)


class TestGameRepository:
    """In-memory loader/saver behaviour."""

    def setup_method(self):
        self.repo = GameRepository()

    def test_ids_are_unique(self):
        first = self.repo.save(seeded_game())
        second = self.repo.save(seeded_game())

        assert first != second
        assert self.repo.ids() == [first, second]
        assert len(self.repo) == 2

    def test_load_returns_independent_copy(self):
        game = seeded_game()
        game_id = self.repo.save(game)

        loaded = self.repo.load(game_id)
        loaded.step()
        game.board.cell_at(Coord(0, 0)).life_points = 100

        again = self.repo.load(game_id)
        assert again.current_index == 0
        assert again.board.cell_at(Coord(0, 0)).life_points == 3

    def test_save_after_step_overwrites(self):
        game = seeded_game()
        game_id = self.repo.save(game)
        game.step()

        assert self.repo.save(game, game_id) == game_id
        assert self.repo.load(game_id).current_index == 1

    def test_overwrite_unknown_id_rejected(self):
        with pytest.raises(KeyError):
            self.repo.save(seeded_game(), 42)

    def test_load_missing(self):
        assert self.repo.load(7) is None
        assert self.repo.load_board(7) is None
        assert self.repo.load_alive_cells(7) is None

    def test_load_alive_cells(self):
        game_id = self.repo.save(seeded_game())
        alive = self.repo.load_alive_cells(game_id)
        assert {c.coord for c in alive} == {Coord(2, 1), Coord(3, 2), Coord(1, 3), Coord(2, 3), Coord(3, 3)}

    def test_delete(self):
        game_id = self.repo.save(seeded_game())
        assert game_id in self.repo
        assert self.repo.delete(game_id) is True
        assert self.repo.delete(game_id) is False
        assert game_id not in self.repo

    def test_counters(self):
        game_id = self.repo.save(seeded_game())
        self.repo.load(game_id)
        self.repo.load(999)
        assert (self.repo.saves, self.repo.loads) == (1, 1)
