from .blockable import Blockable, BlockedReason
from .triggerable import Triggerable

__all__ = [
    "Blockable",
    "BlockedReason",
    "Triggerable",
]
