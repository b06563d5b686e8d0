"""Tests for turn resolution: moves, items, capture and victory."""

from __future__ import annotations

from dataclasses import replace

import pytest

from gardenmystery.state.actors import ALERT, CHASE, PATROL, SLEEP, Cat
from gardenmystery.state.level import LOST, ONGOING, WON

RIGHT, LEFT, UP, DOWN = (1, 0), (-1, 0), (0, -1), (0, 1)

CORRIDORS = [
    "##########",
    "#P......T#",  # player side
    "##########",
    "#........#",  # cat side
    "##########",
]


def shuffle(engine, state, n):
    """Move right/left alternately *n* times; returns every intermediate state."""
    states = []
    for i in range(n):
        result = engine.move(state, RIGHT if i % 2 == 0 else LEFT)
        assert result.accepted
        state = result.state
        states.append(state)
    return states


class TestMoveValidation:
    def test_wall_is_rejected_without_change(self, build, engine) -> None:
        state = build(CORRIDORS)
        result = engine.move(state, UP)
        assert not result.accepted
        assert result.state is state

    def test_non_cardinal_vector_is_rejected(self, build, engine) -> None:
        state = build(CORRIDORS)
        assert not engine.move(state, (1, 1)).accepted
        assert not engine.move(state, (0, 0)).accepted

    def test_legal_move_updates_position_facing_and_counter(self, build, engine) -> None:
        state = build(CORRIDORS)
        result = engine.move(state, RIGHT)
        assert result.accepted
        assert result.state.player.pos == (2, 1)
        assert result.state.player.facing == RIGHT
        assert result.state.moves == 1
        assert ("dust", (1, 1)) in result.effects

    def test_terminal_round_rejects_everything(self, build, engine) -> None:
        state = replace(build(CORRIDORS), outcome=LOST)
        assert not engine.move(state, RIGHT).accepted
        assert not engine.use_item(state, "yarn").accepted
        assert not engine.use_item(state, "toy").accepted


class TestGracePeriod:
    def test_cat_first_moves_on_fifth_move(self, build, engine) -> None:
        cat = Cat("cat-0", (8, 3), route=((1, 3), (8, 3)))
        state = build(CORRIDORS, cats=[cat])
        states = shuffle(engine, state, 5)
        for s in states[:4]:
            assert s.cats[0].pos == (8, 3)
        assert states[4].cats[0].pos == (7, 3)
        assert states[4].moves == 5

    def test_parsed_cat_starts_on_first_waypoint(self, build) -> None:
        state = build(CORRIDORS, patrols=[[(8, 3), (1, 3)]])
        assert state.cats[0].pos == (8, 3)
        assert state.cats[0].state == PATROL


class TestCapture:
    def test_walking_into_a_cat_loses_even_during_grace(self, build, engine) -> None:
        state = build(CORRIDORS, cats=[Cat("cat-0", (2, 1), route=((2, 1),))])
        result = engine.move(state, RIGHT)
        assert result.state.outcome == LOST
        assert result.state.moves == 1
        assert "Caught by the Grumpy Cat! Oh no!" in result.messages

    def test_cat_stepping_onto_player_loses(self, build, engine) -> None:
        rows = ["########", "#P.....#", "########"]
        cat = Cat("cat-0", (3, 1), route=((3, 1),))
        state = build(rows, cats=[cat], moves=10)
        result = engine.move(state, RIGHT)  # player lands next to the cat, which pounces
        assert result.state.player.pos == (2, 1)
        assert result.state.cats[0].pos == (2, 1)
        assert result.state.outcome == LOST

    def test_fleeing_keeps_the_chase_going(self, build, engine) -> None:
        rows = ["########", "#.P....#", "########"]
        cat = Cat("cat-0", (4, 1), route=((4, 1),))
        result = engine.move(build(rows, cats=[cat], moves=10), LEFT)
        assert result.state.cats[0].state == CHASE
        assert result.state.cats[0].pos == (3, 1)
        assert result.state.outcome == ONGOING

    def test_swapping_cells_counts_as_capture(self, build, engine) -> None:
        # player hides in grass on the cat's cell while the cat walks into the player's cell
        rows = ["#######", "#.P,..#", "#######"]
        cat = Cat("cat-0", (3, 1), route=((1, 1),))
        state = build(rows, cats=[cat], moves=10)
        result = engine.move(state, RIGHT)
        assert result.state.player.pos == (3, 1)
        assert result.state.cats[0].pos == (2, 1)
        assert result.state.outcome == LOST

    def test_passing_by_is_safe(self, build, engine) -> None:
        state = build(CORRIDORS, cats=[Cat("cat-0", (5, 3), route=((1, 3),))], moves=10)
        result = engine.move(state, RIGHT)
        assert result.state.outcome == ONGOING


class TestCollectibles:
    def test_last_treat_wins_without_running_cats(self, build, engine) -> None:
        rows = ["########", "#PT....#", "########"]
        cat = Cat("cat-0", (5, 1), route=((5, 1),))
        state = build(rows, cats=[cat], moves=10)
        result = engine.move(state, RIGHT)
        assert result.state.outcome == WON
        assert result.state.cats == state.cats
        assert result.state.moves == state.moves
        assert not result.disturbance
        assert result.state.treats_left == 0

    def test_treat_that_is_not_the_last_keeps_playing(self, build, engine) -> None:
        rows = ["########", "#PT..T.#", "########"]
        result = engine.move(build(rows), RIGHT)
        assert result.state.outcome == ONGOING
        assert result.state.treats_left == 1
        assert ("sparkle", (2, 1)) in result.effects

    def test_pickups_refill_charges(self, build, engine) -> None:
        rows = ["########", "#PYS..T#", "########"]
        state = build(rows)
        first = engine.move(state, RIGHT).state
        assert (first.player.yarn, first.player.toys) == (state.player.yarn + 1, state.player.toys)
        second = engine.move(first, RIGHT).state
        assert second.player.toys == state.player.toys + 1
        assert all(e.collected for e in second.items if not e.is_treat)

    def test_collected_pickup_is_inert(self, build, engine) -> None:
        rows = ["########", "#PY...T#", "########"]
        state = engine.move(build(rows), RIGHT).state
        state = engine.move(state, LEFT).state
        again = engine.move(state, RIGHT).state
        assert again.player.yarn == state.player.yarn


class TestDisturbance:
    def test_spotting_player_reports_disturbance(self, build, engine) -> None:
        rows = ["##########", "#P.......#", "##########"]
        cat = Cat("cat-0", (6, 1), route=((6, 1),))
        result = engine.move(build(rows, cats=[cat], moves=10), RIGHT)
        assert result.state.cats[0].state == CHASE
        assert result.disturbance

    def test_quiet_turn_has_no_disturbance(self, build, engine) -> None:
        cat = Cat("cat-0", (8, 3), route=((1, 3),))
        result = engine.move(build(CORRIDORS, cats=[cat], moves=10), RIGHT)
        assert not result.disturbance


class TestCollision:
    def test_cats_use_pre_turn_positions(self, build, engine) -> None:
        a = Cat("cat-0", (2, 3), route=((8, 3),))
        b = Cat("cat-1", (3, 3), route=((8, 3),))
        result = engine.move(build(CORRIDORS, cats=[a, b], moves=10), RIGHT)
        assert [c.pos for c in result.state.cats] == [(2, 3), (4, 3)]


class TestItems:
    def test_yarn_alerts_every_cat_to_landing_cell(self, build, engine) -> None:
        rows = ["##########", "#P.......#", "##########", "#........#", "##########"]
        hidden = Cat("cat-1", (8, 3), route=((8, 3),), state=CHASE)
        state = build(rows, patrols=[[(4, 1)]], moves=10)
        state = replace(state, cats=state.cats + (hidden,))
        result = engine.use_item(state, "yarn")
        assert result.accepted
        target = (4, 1)
        for cat in result.state.cats:
            assert cat.state == ALERT
            assert cat.last_known == target
            assert cat.timer == 5
        assert [c.pos for c in result.state.cats] == [c.pos for c in state.cats]
        assert result.state.moves == state.moves
        assert result.state.player.yarn == state.player.yarn - 1
        assert result.disturbance
        assert ("sparkle", target) in result.effects
        assert result.messages == ("Threw a yarn ball!",)

    def test_yarn_follows_facing(self, build, engine) -> None:
        rows = ["######", "#....#", "#....#", "#....#", "#P...#", "######"]
        state = build(rows, cats=[Cat("cat-0", (4, 1), route=((4, 1),))], facing=UP)
        result = engine.use_item(state, "yarn")
        assert result.state.cats[0].last_known == (1, 1)

    def test_yarn_landing_is_clamped_to_map(self, build, engine) -> None:
        rows = ["####", "#P..", "####"]
        state = build(rows, cats=[Cat("cat-0", (2, 1), route=((2, 1),))])
        result = engine.use_item(state, "yarn")
        assert result.state.cats[0].last_known == (3, 1)

    def test_yarn_thrown_into_hedge_drops_on_nearest_open_tile(self, build, engine) -> None:
        rows = ["#####", "#P..#", "#####"]
        state = build(rows, cats=[Cat("cat-0", (1, 1), route=((1, 1),))])
        result = engine.use_item(state, "yarn")
        assert result.state.cats[0].last_known == (3, 1)
        assert ("sparkle", (3, 1)) in result.effects

    def test_yarn_flies_over_a_hedge_onto_open_ground(self, build, engine) -> None:
        rows = ["######", "#P.#.#", "######"]
        state = build(rows, cats=[Cat("cat-0", (2, 1), route=((2, 1),))])
        result = engine.use_item(state, "yarn")
        assert result.state.cats[0].last_known == (4, 1)

    def test_cats_give_up_on_yarn_they_cannot_reach(self, build, engine) -> None:
        # thrown at the hedge overhead: the ball stays on the player's tile,
        # which the cat in the lower corridor has no route to
        cat = Cat("cat-0", (8, 3), route=((1, 3),))
        state = build(CORRIDORS, cats=[cat], moves=10, facing=UP)
        thrown = engine.use_item(state, "yarn")
        assert thrown.state.cats[0].last_known == (1, 1)

        states = shuffle(engine, thrown.state, 6)
        assert [s.cats[0].timer for s in states[:4]] == [4, 3, 2, 1]
        assert (states[4].cats[0].state, states[4].cats[0].pos) == (PATROL, (8, 3))
        assert states[5].cats[0].pos == (7, 3)

    def test_empty_pouch_is_rejected(self, build, engine) -> None:
        state = build(CORRIDORS, yarn=0, toys=0)
        assert not engine.use_item(state, "yarn").accepted
        assert not engine.use_item(state, "toy").accepted

    def test_unknown_item_raises(self, build, engine) -> None:
        with pytest.raises(KeyError):
            engine.use_item(build(CORRIDORS), "catnip")

    def test_toy_puts_chasing_cat_to_sleep_for_eight_turns(self, build, engine) -> None:
        cat = Cat("cat-0", (8, 3), route=((1, 3), (8, 3)), state=CHASE, last_known=(8, 3))
        state = build(CORRIDORS, cats=[cat], moves=10)
        result = engine.use_item(state, "toy")
        assert result.accepted and result.disturbance
        assert result.state.cats[0].state == SLEEP
        assert result.state.cats[0].timer == 8
        assert result.state.player.toys == state.player.toys - 1
        assert result.state.moves == state.moves

        states = shuffle(engine, result.state, 9)
        for s in states[:8]:
            assert s.cats[0].pos == (8, 3)
            assert s.cats[0].state == SLEEP
        woke = states[8].cats[0]
        assert woke.state == PATROL
        assert woke.route_index == 0
        assert woke.pos == (7, 3)
