"""Command-line interface modules for autostat pipeline execution.

This package contains core execution logic, making scripts/ optional and deletable.
"""

from autostat.cli.run_analysis import run_analysis_pipeline, main

__all__ = ['run_analysis_pipeline', 'main']
