"""`autostat` - exploratory and comparative statistics over automobile data.

Subpackages:
- schemas: Layered pydantic configuration (param < user < CLI)
- contracts: Stage invariants enforced between pipeline steps
- data: Dataset schema and loading
- analysis: Inspection, summaries, derivations, comparisons, aggregation, ranking
- visualization: Plotting
- reporting: HTML and PDF report rendering
- pipeline: Orchestrator that runs one analysis end to end
- cli: Command-line runner
"""

__version__ = "0.1.0"
