"""Pipeline modules.

- orchestrator: Runs the full analysis and collects the results
"""

from autostat.pipeline.orchestrator import PipelineOrchestrator, AnalysisResults

__all__ = [
    "PipelineOrchestrator",
    "AnalysisResults",
]
