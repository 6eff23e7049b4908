"""Core domain logic: exception taxonomy and the code-generation pipeline."""
