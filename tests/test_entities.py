import random

import pytest

from starshooter.entities import (
    ALIEN_SHOT_H,
    ALIEN_SHOT_W,
    BUFFER_H,
    BUFFER_W,
    EXPLOSION_FRAMES,
    FX_N,
    SHIP_SHOT_SPEED,
    SHIP_SHOT_W,
    SHOTS_N,
    SPARKS_FRAMES,
    Effects,
    Keyboard,
    Shots,
    between,
    between_f,
    collide,
)


class ScriptedRng:
    def __init__(self, values, fraction=0.5):
        self.values = list(values)
        self.fraction = fraction

    def randrange(self, n):
        return self.values.pop(0) % n

    def random(self):
        return self.fraction


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, name, volume, speed):
        self.calls.append((name, volume, speed))


def test_between_stays_in_half_open_range():
    rng = random.Random(3)
    values = [between(rng, -2, 2) for _ in range(500)]
    assert all(-2 <= v < 2 for v in values)
    assert set(values) == {-2, -1, 0, 1}


def test_between_f_stays_in_range():
    rng = random.Random(4)
    values = [between_f(rng, 1.5, 1.6) for _ in range(500)]
    assert all(1.5 <= v <= 1.6 for v in values)


@pytest.mark.parametrize(
    "boxes, expected",
    [
        ((0, 0, 10, 10, 10, 10, 20, 20), True),
        ((0, 0, 10, 10, 5, 5, 6, 6), True),
        ((0, 0, 10, 10, 11, 0, 20, 10), False),
        ((0, 0, 10, 10, 0, 11, 10, 20), False),
        ((20, 20, 30, 30, 0, 0, 19, 19), False),
    ],
)
def test_collide(boxes, expected):
    assert collide(*boxes) is expected


def test_keyboard_press_survives_release_until_tick():
    keyboard = Keyboard()
    keyboard.press("x")
    keyboard.release("x")
    assert keyboard.held("x") is True
    keyboard.tick()
    assert keyboard.held("x") is False


def test_keyboard_held_key_survives_tick():
    keyboard = Keyboard()
    keyboard.press("left")
    keyboard.tick()
    assert keyboard.held("left") is True
    keyboard.release("left")
    assert keyboard.held("left") is False
    assert keyboard.held("right") is False


def test_spark_lives_for_twice_its_frames():
    effects = Effects(random.Random(1))
    effects.add(True, 10, 20)
    for _ in range(SPARKS_FRAMES * 2 - 1):
        effects.update()
    assert len(effects) == 1
    assert next(iter(effects)).sprite_index == SPARKS_FRAMES - 1
    effects.update()
    assert len(effects) == 0


def test_explosion_lives_longer_and_plays_sound():
    sound = Recorder()
    effects = Effects(random.Random(1), sound)
    effects.add(False, 0, 0)
    assert len(sound.calls) == 1
    name, volume, speed = sound.calls[0]
    assert name in {"explode1", "explode2"}
    assert volume == 0.75
    for _ in range(EXPLOSION_FRAMES * 2 - 1):
        effects.update()
    assert len(effects) == 1
    effects.update()
    assert len(effects) == 0


def test_spark_is_silent():
    sound = Recorder()
    effects = Effects(random.Random(1), sound)
    effects.add(True, 0, 0)
    assert sound.calls == []


def test_effects_capacity():
    effects = Effects(random.Random(1))
    results = [effects.add(True, 0, 0) for _ in range(FX_N)]
    assert all(results)
    assert effects.add(True, 0, 0) is False
    assert len(effects) == FX_N


def test_ship_shot_is_centred_and_moves_up():
    sound = Recorder()
    shots = Shots(Effects(random.Random(1)), random.Random(1), sound)
    assert shots.add(True, False, 100, 50) is True
    shot = next(iter(shots))
    assert shot.x == 100 - SHIP_SHOT_W // 2
    assert shot.y == 50
    assert sound.calls == [("shot", 0.3, 1.0)]
    shots.update()
    assert shot.y == 50 - SHIP_SHOT_SPEED
    assert shot.frame == 1


def test_ship_shot_leaves_top_of_screen():
    shots = Shots(Effects(random.Random(1)), random.Random(1))
    shots.add(True, False, 100, 0)
    shots.update()
    assert len(shots) == 1
    shots.update()
    assert len(shots) == 0


def test_alien_shot_pitch_is_raised():
    sound = Recorder()
    shots = Shots(Effects(random.Random(1)), random.Random(2), sound)
    shots.add(False, True, 50, 50)
    name, _, speed = sound.calls[0]
    assert name == "shot"
    assert 1.5 <= speed <= 1.6


def test_straight_alien_shot_falls():
    shots = Shots(Effects(random.Random(1)), random.Random(1))
    shots.add(False, True, 50, 60)
    shot = next(iter(shots))
    assert (shot.dx, shot.dy) == (0, 2)
    assert (shot.x, shot.y) == (50 - ALIEN_SHOT_W // 2, 60 - ALIEN_SHOT_H // 2)


def test_motionless_alien_shot_is_dropped():
    shots = Shots(Effects(random.Random(1)), ScriptedRng([2, 2]))
    assert shots.add(False, False, 50, 50) is True
    assert len(shots) == 0


def test_aimed_alien_shot_uses_random_direction():
    shots = Shots(Effects(random.Random(1)), ScriptedRng([0, 3]))
    shots.add(False, False, 50, 50)
    shot = next(iter(shots))
    assert (shot.dx, shot.dy) == (-2, 1)


def test_alien_shot_removed_off_screen():
    shots = Shots(Effects(random.Random(1)), random.Random(1))
    shots.add(False, True, 50, BUFFER_H)
    shots.update()
    assert len(shots) == 0
    shots.add(False, True, BUFFER_W // 2, BUFFER_H // 2)
    shots.update()
    assert len(shots) == 1


def test_collide_removes_opposing_shot_and_sparks():
    effects = Effects(random.Random(1))
    shots = Shots(effects, random.Random(1))
    shots.add(False, True, 50, 50)
    shot = next(iter(shots))
    assert shots.collide(True, 40, 40, 12, 13) is True
    assert len(shots) == 0
    effect = next(iter(effects))
    assert effect.spark is True
    assert (effect.x, effect.y) == (
        shot.x + ALIEN_SHOT_W // 2,
        shot.y + ALIEN_SHOT_H // 2,
    )


def test_collide_ignores_own_shots_and_misses():
    effects = Effects(random.Random(1))
    shots = Shots(effects, random.Random(1))
    shots.add(True, False, 50, 50)
    assert shots.collide(True, 40, 40, 20, 20) is False
    assert shots.collide(False, 200, 200, 10, 10) is False
    assert len(shots) == 1
    assert len(effects) == 0


def test_shots_capacity():
    shots = Shots(Effects(random.Random(1)), random.Random(1))
    assert all(shots.add(True, False, 10, 10) for _ in range(SHOTS_N))
    assert shots.add(True, False, 10, 10) is False
    assert len(shots) == SHOTS_N