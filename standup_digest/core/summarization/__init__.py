"""
Summarization engine.

Exports:
  - Algorithm, select_algorithm: stuff vs map-reduce decision
  - StuffSummarizer: single-pass summarizer
  - MapReduceSummarizer, MapReduceConfig, PipelineState: map-reduce pipeline
  - ProjectSummary, TaskDetails, REPORT_SCHEMA_VERSION: report contract
  - TokenCounter, DocumentSplitter: token accounting and chunking

Dependencies: langchain_core, langchain_text_splitters, tiktoken
System role: Core summarization algorithms
"""

from standup_digest.core.summarization.algorithm import Algorithm, select_algorithm
from standup_digest.core.summarization.map_reduce import (
    MapReduceConfig,
    MapReduceSummarizer,
    PipelineState,
    split_into_groups,
)
from standup_digest.core.summarization.report_schema import (
    REPORT_SCHEMA_VERSION,
    ProjectSummary,
    TaskDetails,
    parse_report,
)
from standup_digest.core.summarization.stuff import StuffSummarizer
from standup_digest.core.summarization.text_splitter import DocumentSplitter
from standup_digest.core.summarization.token_counter import TokenCounter

__all__ = [
    "Algorithm",
    "select_algorithm",
    "MapReduceConfig",
    "MapReduceSummarizer",
    "PipelineState",
    "split_into_groups",
    "REPORT_SCHEMA_VERSION",
    "ProjectSummary",
    "TaskDetails",
    "parse_report",
    "StuffSummarizer",
    "DocumentSplitter",
    "TokenCounter",
]
