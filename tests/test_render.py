import pytest

from starfall import assets
from starfall.components import Health, ParticleTrail, Particle
from starfall.render import (
    FIELD_COLOR, STAT_BAR_COLOR, RenderSink, draw_game, draw_trail
)


def test_frame_layout(game, sink):
    game.draw(sink)

    first = sink.calls[0]
    assert first == ('rect', (0, 0, 450, 600), FIELD_COLOR, 0.3)
    assert ('rect', (450, 0, 150, 600), STAT_BAR_COLOR, 1.0) in sink.calls
    assert sink.texts() == [
        'Stats',
        'HP: 50',
        '# of kills: 0',
        'Time: 00:00',
        'Score: 0',
        'Enemies: 0',
        'Bombs: 3',
    ]
    positions = [call[2] for call in sink.of_type('text')]
    assert positions[0] == (500, 20)
    assert positions[1:] == [(465, 50 + i * 30) for i in range(6)]


def test_ship_is_drawn_at_natural_size(game, sink):
    game.draw(sink)
    [ship] = [c for c in sink.of_type('sprite') if c[1] is assets.SHIP]
    assert ship[2] == (225, 500, 34, 37)


def test_lasers_are_color_fills(game, sink):
    game.create_laser()
    game.draw(sink)
    assert ('rect', (242, 500, 4, 10), '#1eff00', 1.0) in sink.calls


def test_hints_fade_out(game, sink):
    draw_game(game, sink)
    assert assets.ARROW_KEYS in sink.sprites()

    game.hint_time = 5.0
    later = type(sink)()
    draw_game(game, later)
    assert assets.ARROW_KEYS not in later.sprites()


def test_explosions_are_drawn_from_the_sheet(game, sink, place_enemy):
    place_enemy(game.world, 20, 100)
    game.bomb_screen()
    game.draw(sink)
    sheet_calls = [c for c in sink.of_type('sprite') if c[1] is assets.EXPLOSION_SHEET]
    assert len(sheet_calls) == 2
    assert sheet_calls[0][2] == (0, 75, 450, 450)
    assert sheet_calls[0][3] == (0, 0, 64, 64)


def test_retry_prompt_only_after_game_over(game, sink):
    game.draw(sink)
    assert assets.RETRY_KEY not in sink.sprites()

    game.world.get_component(game.player_id, Health).current = 0
    game.check_game_over()
    after = type(sink)()
    game.draw(after)
    assert assets.RETRY_KEY in after.sprites()
    assert assets.SHIP not in after.sprites()


def test_trail_uses_particle_opacity(sink):
    trail = ParticleTrail([Particle(1, 2, 0, 0, opacity=0.5),
                           Particle(3, 4, 0, 0, opacity=None)])
    draw_trail(trail, sink)
    assert sink.calls == [('rect', (1, 2, 5, 5), '#ffffff', 0.5)]
    assert sink.alpha == 1.0


def test_sink_primitives_are_abstract():
    base = RenderSink()
    with pytest.raises(NotImplementedError):
        base.fill_rect((0, 0, 1, 1), '#000000')
    with pytest.raises(NotImplementedError):
        base.draw_text('x', (0, 0))
