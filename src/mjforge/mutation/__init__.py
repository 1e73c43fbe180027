"""
Mutation package: edits on source markup addressed by logical id.

Locates components through weak, possibly duplicated identifiers and
performs atomic update / duplicate / delete operations.
"""

from .facade import MutationFacade
from .locator import ComponentLocator
from .editor import TreeEditor
from .validator import ContentValidator
from .history import EditHistory
from .config import MUTATION_CONFIG, ContentPolicy

__all__ = [
    # Main facade
    "MutationFacade",

    # Components
    "ComponentLocator",
    "TreeEditor",
    "ContentValidator",
    "EditHistory",

    # Configuration
    "MUTATION_CONFIG",
    "ContentPolicy",
]
