"""
Directory setup for the analysis pipeline.

Layout under the base directory:
- reports/  HTML and PDF documents
- plots/    figures
- logs/     run log
"""

from pathlib import Path

__all__ = ['setup_output_directories', 'DEFAULT_BASE_DIR']

DEFAULT_BASE_DIR = "output"


def setup_output_directories(base_dir=None):
    """
    Set up the output directory structure.

    Parameters
    ----------
    base_dir : str or Path, optional
        Base output directory. If None, ``./output`` is used.

    Returns
    -------
    dict
        Dictionary with paths: 'base', 'reports', 'plots', 'logs'
    """
    if base_dir is None:
        base_dir = Path.cwd() / DEFAULT_BASE_DIR

    base_dir = Path(base_dir).expanduser().resolve()

    directories = {
        "base": base_dir,
        "reports": base_dir / "reports",
        "plots": base_dir / "plots",
        "logs": base_dir / "logs",
    }

    for path in directories.values():
        path.mkdir(parents=True, exist_ok=True)

    return directories
