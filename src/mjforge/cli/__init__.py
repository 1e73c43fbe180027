"""
CLI Command Modules

Each module contains a logical group of related commands.
"""

from mjforge.cli import markup, mutations

__all__ = ['markup', 'mutations']
