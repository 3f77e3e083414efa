"""
Particle Trails
================
Exhaust particles emitted behind the player and the enemies.

Each particle drifts opposite to its parent's motion and fades as
sqrt(lifetime - age). Once that value is undefined the particle is
evicted from the trail, so a trail never grows without bound.
"""

import math
import random
from typing import Optional

from .components import Particle, ParticleTrail, Position, Size, Velocity
from .config import GameConfig


def particle_opacity(age: float, lifetime: float) -> Optional[float]:
    """Opacity at a given age, or None once the particle has faded out."""
    remaining = lifetime - age
    if remaining < 0:
        return None
    return math.sqrt(remaining)


def emit_particle(trail: ParticleTrail, pos: Position, size: Size, vel: Velocity,
                  config: GameConfig, rng: random.Random) -> Particle:
    """Append a particle leaving the rear of the parent."""
    jitter = (rng.random() - 0.5) * config.particle_jitter
    particle = Particle(
        x=pos.x + size.width / 2,
        y=pos.y + size.height - 10,
        vx=vel.x * config.particle_damping + jitter,
        vy=vel.y * config.particle_damping,
    )
    particle.opacity = particle_opacity(0.0, config.particle_lifetime)
    trail.particles.append(particle)
    return particle


def update_trail(trail: ParticleTrail, dt: float, config: GameConfig) -> int:
    """
    Age and move every particle, then drop the faded ones.

    Returns the number of evicted particles.
    """
    for particle in trail.particles:
        particle.age += dt
        particle.opacity = particle_opacity(particle.age, config.particle_lifetime)
        particle.x += particle.vx
        particle.y += particle.vy

    before = len(trail.particles)
    trail.particles = [p for p in trail.particles if p.opacity is not None]
    return before - len(trail.particles)


def tick_emitter(trail: ParticleTrail, dt: float, pos: Position, size: Size,
                 vel: Velocity, config: GameConfig, rng: random.Random) -> bool:
    """Advance the emission timer and emit when the interval has passed."""
    trail.since_emit += dt
    if trail.since_emit > config.particle_interval:
        emit_particle(trail, pos, size, vel, config, rng)
        trail.since_emit = 0.0
        return True
    return False
