"""Intcode virtual machine, I/O ports and amplifier networks."""

from . import debug
from .arcade import ArcadePort, Tile, run_cabinet
from .channel import Channel
from .config import VMConfig
from .decoder import Instruction, Mode, Opcode, Parameter, decode
from .errors import (
    ChannelError,
    DecodeError,
    HaltedError,
    IntcodeError,
    LoadError,
    NetworkError,
    OperandError,
    PortClosed,
    PortError,
    RunawayError,
    StageFailure,
)
from .executor import Executor, run_program
from .loader import load_program, parse_program
from .pipeline import AmplifierNetwork, NetworkState, best_phase_setting, run_amplifiers
from .ports import ConsolePort, IOPort, QueuePort, ScriptedPort
from .tape import MemoryTape

__version__ = "0.1.0"

__all__ = [
    "AmplifierNetwork",
    "ArcadePort",
    "Channel",
    "ChannelError",
    "ConsolePort",
    "DecodeError",
    "Executor",
    "HaltedError",
    "IOPort",
    "Instruction",
    "IntcodeError",
    "LoadError",
    "MemoryTape",
    "Mode",
    "NetworkError",
    "NetworkState",
    "Opcode",
    "OperandError",
    "Parameter",
    "PortClosed",
    "PortError",
    "QueuePort",
    "RunawayError",
    "ScriptedPort",
    "StageFailure",
    "Tile",
    "VMConfig",
    "best_phase_setting",
    "debug",
    "decode",
    "load_program",
    "parse_program",
    "run_amplifiers",
    "run_cabinet",
    "run_program",
]
