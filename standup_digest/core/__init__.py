"""
Core domain layer.

Summarization algorithms, the model factory and the exception hierarchy.
No HTTP or external API concerns live here.
"""
