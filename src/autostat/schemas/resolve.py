"""Turn the three configuration layers into one frozen ``InternalConfig``.

Layers, weakest first:

* ``ParamConfig``: every section (dataset, filter, tiers, summary,
  comparison, ranking, visualization, report, output, logging) with defaults.
* ``UserConfig``: the user's CONFIG dict, e.g. ``MIN_HORSEPOWER`` or a nested
  ``ranking`` block.
* ``CLIConfig``: ``--source``, ``--base-dir``, ``--format`` and ``--verbose``.

A stronger layer only replaces the keys it names. ``{"ranking": {"top_n": 5}}``
changes ``top_n`` and leaves ``ranking.metric`` at its default.
"""

from typing import Optional, Type, TypeVar, Union

from pydantic import BaseModel

from autostat.schemas.param import ParamConfig
from autostat.schemas.user import UserConfig
from autostat.schemas.cli import CLIConfig
from autostat.schemas.internal import InternalConfig

ModelT = TypeVar("ModelT", bound=BaseModel)


def deep_merge(base: dict, *overrides: dict) -> dict:
    """Merge override dicts into a copy of ``base``, section by section.

    A key whose old and new values are both dicts is merged recursively; any
    other value is replaced outright (lists such as ``report.formats`` are not
    concatenated). ``base`` and the overrides are left untouched.

    Examples
    --------
    >>> defaults = {"ranking": {"metric": "Power_to_Weight", "top_n": 10}}
    >>> deep_merge(defaults, {"ranking": {"top_n": 5}}, {"report": {"formats": ["html"]}})
    {'ranking': {'metric': 'Power_to_Weight', 'top_n': 5}, 'report': {'formats': ['html']}}
    """
    merged = dict(base)
    for layer in overrides:
        for section, value in layer.items():
            current = merged.get(section)
            if isinstance(current, dict) and isinstance(value, dict):
                merged[section] = deep_merge(current, value)
            else:
                merged[section] = value
    return merged


def _as_model(value, model: Type[ModelT]) -> ModelT:
    # None and {} both mean "this layer sets nothing"
    if isinstance(value, model):
        return value
    return model.model_validate(value or {})


def resolve_config(
    param_cfg: Union[dict, ParamConfig],
    user_cfg: Optional[Union[dict, UserConfig]] = None,
    cli_cfg: Optional[Union[dict, CLIConfig]] = None,
) -> InternalConfig:
    """Validate each layer and merge them into the runtime config.

    Parameters
    ----------
    param_cfg : dict or ParamConfig
        Defaults for every section.
    user_cfg : dict or UserConfig, optional
        The user's overrides; flat upper-case keys are accepted.
    cli_cfg : dict or CLIConfig, optional
        Command-line overrides, applied last.

    Returns
    -------
    InternalConfig
        Frozen config read by the loader, the analysis stages and the reporters.

    Raises
    ------
    pydantic.ValidationError
        If a layer, or the merged result, is invalid (for instance
        ``tiers.medium_min >= tiers.high_min``).

    Examples
    --------
    >>> from autostat.schemas import resolve_config, ParamConfig, UserConfig
    >>> config = resolve_config(ParamConfig(), UserConfig(min_horsepower=250, top_n=5))
    >>> config.filter.min_horsepower
    250.0
    >>> config.ranking.top_n
    5
    """
    param = _as_model(param_cfg, ParamConfig)
    user = _as_model(user_cfg, UserConfig)
    cli = _as_model(cli_cfg, CLIConfig)

    merged = deep_merge(
        param.model_dump(),
        user.to_internal_overrides(),
        cli.to_internal_overrides(),
    )
    return InternalConfig.model_validate(merged)
