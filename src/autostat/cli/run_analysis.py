"""Core analysis pipeline execution logic.

This module contains the pipeline runner and the ``autostat`` console
entry point. Scripts are thin wrappers; this is the real implementation.
"""

import sys
import json
import logging
import argparse
import importlib.util
from pathlib import Path
from typing import Optional, Dict, Any, Sequence

from autostat.exceptions import AutostatError
from autostat.setup_directories import setup_output_directories
from autostat.pipeline.orchestrator import PipelineOrchestrator, AnalysisResults
from autostat.schemas import resolve_config, ParamConfig, UserConfig, CLIConfig


logger = logging.getLogger(__name__)


def load_user_config_dict(config_path: str) -> dict:
    """Load user config dict from Python file.

    Returns the raw dict before Pydantic validation.

    Parameters
    ----------
    config_path : str
        Path to user config Python file containing CONFIG dict.

    Returns
    -------
    dict
        Raw user configuration dictionary.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If no CONFIG dict found in file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    spec = importlib.util.spec_from_file_location("config_module", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    # Find CONFIG dict
    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict found in {path}")


def run_analysis_pipeline(
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    verbose: bool = False
) -> AnalysisResults:
    """Execute the automobile analysis pipeline.

    1. Loads and resolves configuration (Param < User < CLI)
    2. Sets up output directories
    3. Runs the orchestrator once and returns its results

    Parameters
    ----------
    user_config_path : str, optional
        Path to user config file (Python file with CONFIG dict). If None,
        expert defaults are used.
    cli_args : dict, optional
        CLI argument overrides. Keys: source, base_dir, formats, log_level.
        All optional.
    verbose : bool, optional
        If True, enable DEBUG logging and print full resolved config.

    Returns
    -------
    AnalysisResults

    Raises
    ------
    FileNotFoundError
        If user_config_path does not exist.
    pydantic.ValidationError
        If configuration validation fails.
    AutostatError
        If the dataset or a required column cannot be found.

    Examples
    --------
    Run on the bundled sample::

        run_analysis_pipeline()

    Run with a user config and CLI overrides::

        run_analysis_pipeline(
            "config/my_config.py",
            cli_args={"source": "data/cars.csv", "formats": ["html"]},
        )
    """
    param_cfg = ParamConfig()

    user_cfg = None
    if user_config_path is not None:
        user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))

    cli_args = dict(cli_args or {})
    if verbose and "log_level" not in cli_args:
        cli_args["log_level"] = "DEBUG"

    # Filter None values
    cli_dict = {k: v for k, v in cli_args.items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    config = resolve_config(param_cfg, user_cfg, cli_cfg)

    output_dirs = setup_output_directories(config.output.base_dir)

    print(f"\n{'='*60}")
    print("Automobile Statistical Analysis")
    print('='*60)
    print(f"Config:  {user_config_path or '(defaults)'}")
    print(f"Source:  {config.dataset.source}")
    print(f"Formats: {', '.join(config.report.formats) or '(none)'}")
    print(f"Output:  {output_dirs['base']}")
    print('='*60)

    if verbose:
        print("\nFull Internal Configuration:")
        print(json.dumps(config.model_dump(), indent=2))
        print('='*60)

    orchestrator = PipelineOrchestrator(config, output_dirs)
    return orchestrator.run()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the automobile statistical analysis")
    parser.add_argument("config", nargs="?", help="Path to user config file")
    parser.add_argument("--source", help="Dataset name or CSV/TSV path")
    parser.add_argument("--base-dir", help="Output directory")
    parser.add_argument("--format", dest="formats", action="append", choices=["html", "pdf"],
                        help="Report format (repeatable)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    cli_args = {
        "source": args.source,
        "base_dir": args.base_dir,
        "formats": args.formats,
    }

    try:
        results = run_analysis_pipeline(args.config, cli_args=cli_args, verbose=args.verbose)
    except AutostatError as e:
        logger.error("Analysis failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for fmt, path in results.reports.items():
        print(f"{fmt.upper()} report: {path}")
    for step, message in results.failures.items():
        print(f"Warning: {step} failed: {message}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
