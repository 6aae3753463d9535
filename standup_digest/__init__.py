"""
Standup Digest.

Turns Slack standup threads and GitHub issue activity into a structured
project-status report, using a single-pass or map-reduce LLM summarizer
chosen by input size.
"""

__version__ = "0.1.0"
