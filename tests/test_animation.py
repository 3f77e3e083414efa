import pytest

from starfall import assets
from starfall.animation import Animation, Frame, FrameSequence, advance_animations
from starfall.errors import InvalidArgument


@pytest.fixture
def sequence():
    return FrameSequence('sheet', (Frame(0.1, 0, 0), Frame(0.2, 16, 0)), 16, 16)


def test_sequence_rejects_bad_input():
    with pytest.raises(InvalidArgument):
        FrameSequence('sheet', (), 16, 16)
    with pytest.raises(InvalidArgument):
        FrameSequence('sheet', (Frame(0.1, 0, 0),), 0, 16)
    with pytest.raises(InvalidArgument):
        FrameSequence('sheet', (Frame(0, 0, 0),), 16, 16)


def test_sequence_stores_frames_as_tuple():
    seq = FrameSequence('sheet', [Frame(0.1, 0, 0)], 8, 8)
    assert isinstance(seq.frames, tuple)


def test_grid_reads_rows_in_order():
    seq = FrameSequence.grid('sheet', columns=2, rows=2, cell=10, duration=0.5)
    assert [(f.x, f.y) for f in seq.frames] == [(0, 0), (10, 0), (0, 10), (10, 10)]
    assert seq.total_duration == pytest.approx(2.0)


def test_explosion_asset():
    assert len(assets.EXPLOSION.frames) == 8
    assert assets.EXPLOSION.frame_width == 64
    assert assets.EXPLOSION.total_duration == pytest.approx(0.32)
    assert assets.EXPLOSION.frames[5].x == 64
    assert assets.EXPLOSION.frames[5].y == 64


def test_animation_size_defaults_to_frame_size(sequence):
    anim = Animation(sequence, 5, 6)
    assert anim.dest_rect() == (5, 6, 16, 16)
    assert Animation(sequence, 0, 0, 40, 30).dest_rect() == (0, 0, 40, 30)


def test_animation_rejects_negative_size(sequence):
    with pytest.raises(InvalidArgument):
        Animation(sequence, 0, 0, -1, 10)


def test_animation_advances_and_finishes(sequence):
    anim = Animation(sequence, 0, 0)
    anim.update(0.06)
    assert anim.current == 0
    anim.update(0.06)
    assert anim.current == 1
    assert anim.source_rect() == (16, 0, 16, 16)
    anim.update(0.15)
    assert not anim.finished
    anim.update(0.1)
    assert anim.finished
    assert anim.current == 1


def test_draw_uses_current_frame(sequence, sink):
    anim = Animation(sequence, 3, 4)
    anim.draw(sink)
    assert sink.calls == [('sprite', 'sheet', (3, 4, 16, 16), (0, 0, 16, 16), 1.0)]


def test_finished_animation_draws_nothing(sequence, sink):
    anim = Animation(sequence, 0, 0)
    anim.update(10)
    anim.update(10)
    assert anim.finished
    anim.draw(sink)
    assert sink.calls == []


def test_advance_animations_evicts_finished():
    quick = FrameSequence('sheet', (Frame(0.1, 0, 0),), 8, 8)
    slow = FrameSequence('sheet', (Frame(1.0, 0, 0),), 8, 8)
    anims = [Animation(quick, 0, 0), Animation(slow, 0, 0)]

    remaining = advance_animations(anims, 0.5)

    assert len(remaining) == 1
    assert remaining[0].sequence is slow


def test_explosion_plays_for_eight_frames():
    anim = Animation(assets.EXPLOSION, 0, 0)
    for _ in range(7):
        anim.update(0.04)
    assert anim.current == 7
    assert not anim.finished
    anim.update(0.04)
    assert anim.finished
