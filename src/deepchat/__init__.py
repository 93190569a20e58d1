"""deepchat - JSON Mode response normalization for chat-completion clients."""

__version__ = "0.1.0"
