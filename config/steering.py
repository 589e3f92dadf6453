"""Configuration for the 2D steering demos."""

import math

WINDOW = {
    "width": 640,
    "height": 480,
    "title": "Steering Behaviors"
}

COLORS = {
    "background": (1.0, 1.0, 1.0, 1.0),
    "boid": (0.1, 0.1, 0.12),
    "crumb": (0.0, 0.0, 1.0),
    "target": (0.85, 0.15, 0.15),
    "text": (40, 40, 40)
}

SIMULATION = {
    "max_dt": 0.05,             # Cap dt to prevent physics explosion on lag
    "fps_limit": 60,
    "seed": None,               # None = fresh entropy each run
    "headless_dt": 1.0 / 60.0,
}

BOID = {
    "size": 12.0,               # Triangle length in pixels
    "start": (400.0, 300.0),
}

# Mouse-velocity matching
VELOCITY_MATCH = {
    "time_to_target": 1.0,
    "max_acceleration": None,   # None = unclamped
    "min_dt": 1e-6,             # Frames shorter than this are skipped
    "heading_speed": 0.01,      # Orient along velocity above this speed
}

# Click-to-arrive presets
ARRIVE = {
    "arrive": {
        "max_acceleration": 300.0,
        "max_speed": 250.0,
        "target_radius": 5.0,
        "slow_radius": 200.0,
        "time_to_target": 0.05,
    },
    "arrive-fast": {
        "max_acceleration": 200.0,
        "max_speed": 300.0,
        "target_radius": 15.0,
        "slow_radius": 20.0,
        "time_to_target": 0.2,
    },
}

ALIGN = {
    "arrive": {
        "max_angular_acceleration": 18.0,
        "max_rotation": math.pi,
        "satisfaction_radius": 0.05,
        "deceleration_radius": 0.5,
        "time_to_target": 0.1,
    },
    "arrive-fast": {
        "max_angular_acceleration": 200.0,
        "max_rotation": math.pi / 4.0,
        "satisfaction_radius": 0.1,
        "deceleration_radius": 0.1,
        "time_to_target": 0.1,
    },
}

# Caller-side arrival policy
ARRIVAL = {
    "freeze_distance": 1.0,     # Snap and freeze inside this distance...
    "freeze_speed": 0.1,        # ...when also slower than this
    "stop_distance": 5.0,       # Zero velocity and rotation inside this distance
    "face_distance": 0.001,     # Below this, keep the current orientation
}

WANDER = {
    "max_acceleration": 50.0,
    "max_speed": 100.0,
    "wander_offset": 20.0,
    "wander_radius": 100.0,
    "wander_rate": 2.0,
    "time_to_target": 0.1,
    "target_radius": 5.0,
    "start": (300.0, 300.0),
    "initial_velocity": (50.0, 0.0),
}

FLOCKING = {
    "count": 150,
    "width": 800,
    "height": 600,
    "neighbor_radius": 20.0,
    "separation_radius": 20.0,
    "separation_weight": 5.0,
    "alignment_weight": 1.0,
    "cohesion_weight": 1.0,
    "max_acceleration": 250.0,
    "initial_speed": 13.0,
    "max_speed": 13.0,

    # Fallback when a boid has no neighbors
    "wander_max_acceleration": 5.0,
    "wander_max_speed": 7.0,
    "wander_offset": 10.0,
    "wander_radius": 15.0,
    "wander_rate": 1.0,
    "wander_time_to_target": 0.1,
}

TRAIL = {
    "velocity": {"capacity": 0, "interval": 0.2},
    "arrive": {"capacity": 150, "interval": 0.2},
    "arrive-fast": {"capacity": 50, "interval": 0.2},
    "wander": {"capacity": 20, "interval": 0.2},
    "flock": {"capacity": 10, "interval": 0.3, "first_drop": 0.1},
    "crumb_size": 4.0,
}
