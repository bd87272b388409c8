"""
CLI commands package for SkinWatch
"""

from .watch import watch_command
from .resolve import resolve_command
from .bench import bench_command
from .init_config import init_config_command

__all__ = [
    'watch_command',
    'resolve_command',
    'bench_command',
    'init_config_command',
]
