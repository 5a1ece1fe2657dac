from typing import TypedDict, List
from pathlib import Path

import yaml


class DatasetSpec(TypedDict):
    name: str
    path: str

class RandomizeConfig(TypedDict):
    n_randomizations: int
    swaps_per_edge: float
    attempts_per_swap: int
    remove_self_loops: bool
    largest_component: bool
    min_component_size: int
    overwrite: bool

class LoggingConfig(TypedDict):
    logging_folder: str
    log_every: int

class PipelineConfig(TypedDict):
    seed: int
    output_folder: str
    randomize: RandomizeConfig
    logging: LoggingConfig
    datasets: List[DatasetSpec]

DEFAULT_RANDOMIZE: RandomizeConfig = {
    "n_randomizations": 1,
    "swaps_per_edge": 10.0,
    "attempts_per_swap": 100,
    "remove_self_loops": True,
    "largest_component": False,
    "min_component_size": 1,
    "overwrite": False,
}

def load_config(path: Path) -> PipelineConfig:
    """
    Read a pipeline YAML file, filling missing ``randomize`` keys with
    :py:data:`DEFAULT_RANDOMIZE`.
    """
    cfg = yaml.safe_load(Path(path).read_text())
    if not isinstance(cfg, dict):
        raise ValueError(f"Config file {path} must contain a mapping.")
    for key in ("seed", "datasets"):
        if key not in cfg:
            raise ValueError(f"Config file {path} is missing required key '{key}'.")

    cfg["randomize"] = {**DEFAULT_RANDOMIZE, **(cfg.get("randomize") or {})}
    cfg.setdefault("output_folder", "results/randomized")
    cfg.setdefault("logging", None)
    return cfg # type: ignore

def clean_filename(name: str) -> str:
    """
    Clean the name of all special characters and spaces, replacing them with underscores.
    """

    name = name.replace(":", "_")
    name = name.replace(".", "_")
    name = name.replace(",", "_")
    name = name.replace(" ", "_")

    return name

def randomized_graph_path(
    base_dir: Path,
    data_spec: DatasetSpec,
    index: int,
) -> Path:
    """
    Path of the *index*-th randomized copy of a dataset, e.g.
    ``<base_dir>/<name>/randomized_003.edges``.
    """
    return base_dir / clean_filename(data_spec["name"]) / f"randomized_{index:03d}.edges"
