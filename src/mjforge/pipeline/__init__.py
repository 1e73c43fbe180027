"""
Pipeline package: render passes and the edit session controller.
"""

from .render import RenderPipeline, Transformer
from .session import EditSession

__all__ = [
    "RenderPipeline",
    "Transformer",
    "EditSession",
]
