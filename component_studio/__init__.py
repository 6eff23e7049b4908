"""Component Studio: session state and generation turns for a chat-driven UI component builder."""

__version__ = "0.1.0"
