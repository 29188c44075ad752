"""Utility functions for presenting dispatch traces."""

from .formatters import format_node, format_phase, format_path
from .tree_builder import build_node_tree
from .cli_helpers import print_error, print_warning, print_info

__all__ = [
    'format_node',
    'format_phase',
    'format_path',
    'build_node_tree',
    'print_error',
    'print_warning',
    'print_info',
]
