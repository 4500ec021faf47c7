# nestedfst/machines/traffic_light.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Reference machine: a traffic light with a nested pedestrian signal.

The traffic light cycles Green -> Yellow -> PedestrianRed -> Red -> Green.
Entering PedestrianRed instantiates the pedestrian signal, which steps
Stop -> Walk -> Flashing -> Stop on each PedestrianTimer. PedestrianRed is a
super-state: the light holds there until the pedestrian signal is back at
Stop, then moves to Red and discards the pedestrian signal.
"""

from enum import Enum, auto
from typing import Optional

from nestedfst.core.transducer import Transducer
from nestedfst.core.transition import TableBuilder


class Light(str, Enum):
    GREEN = "Green"
    YELLOW = "Yellow"
    PEDESTRIAN_RED = "PedestrianRed"
    RED = "Red"


class PedestrianSymbol(str, Enum):
    STOP = "Stop"
    WALK = "Walk"
    FLASHING = "Flashing"


class Signal(str, Enum):
    TIMER = "Timer"
    PEDESTRIAN_TIMER = "PedestrianTimer"


class TrafficEffect(Enum):
    UPDATE_LIGHT_COLOR = auto()
    UPDATE_PEDESTRIAN_SYMBOL = auto()


PEDESTRIAN_LIGHT_NAME = "pedestrian_light"


def build_pedestrian_light() -> Transducer:
    table = (
        TableBuilder()
        .add(PedestrianSymbol.STOP, Signal.PEDESTRIAN_TIMER, PedestrianSymbol.WALK,
             [TrafficEffect.UPDATE_PEDESTRIAN_SYMBOL])
        .add(PedestrianSymbol.WALK, Signal.PEDESTRIAN_TIMER, PedestrianSymbol.FLASHING,
             [TrafficEffect.UPDATE_PEDESTRIAN_SYMBOL])
        .add(PedestrianSymbol.FLASHING, Signal.PEDESTRIAN_TIMER, PedestrianSymbol.STOP,
             [TrafficEffect.UPDATE_PEDESTRIAN_SYMBOL])
    )
    return Transducer(PEDESTRIAN_LIGHT_NAME, table, initial=PedestrianSymbol.STOP)


def build_traffic_light(pedestrian_light: Optional[Transducer] = None) -> Transducer:
    if pedestrian_light is None:
        pedestrian_light = build_pedestrian_light()
    table = (
        TableBuilder()
        .add(Light.GREEN, Signal.TIMER, Light.YELLOW, [TrafficEffect.UPDATE_LIGHT_COLOR])
        .add(Light.YELLOW, Signal.TIMER, Light.PEDESTRIAN_RED, [TrafficEffect.UPDATE_LIGHT_COLOR],
             spawn=[pedestrian_light.name])
        .add(Light.PEDESTRIAN_RED, Signal.PEDESTRIAN_TIMER, Light.RED, [TrafficEffect.UPDATE_LIGHT_COLOR],
             route=pedestrian_light.name,
             completes_on={PedestrianSymbol.STOP},
             retire=[pedestrian_light.name])
        .add(Light.RED, Signal.TIMER, Light.GREEN, [TrafficEffect.UPDATE_LIGHT_COLOR])
    )
    return Transducer("traffic_light", table, initial=Light.GREEN, children=[pedestrian_light])


PEDESTRIAN_LIGHT = build_pedestrian_light()
TRAFFIC_LIGHT = build_traffic_light(PEDESTRIAN_LIGHT)
