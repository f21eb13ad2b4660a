from .guard import GenerationGuard, Ticket
from .logger import setup_logger

__all__ = ["GenerationGuard", "Ticket", "setup_logger"]
