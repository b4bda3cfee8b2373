"""PomoClock: a work/break interval timer with session statistics."""

__version__ = "0.1.0"
