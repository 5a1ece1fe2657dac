# src/graphops/pipelines/randomize_graphs.py
import argparse
from pathlib import Path
from time import time

import numpy as np
from tqdm import tqdm

from graphops.io import GraphLoader, GraphWriter
from graphops.graph import graph_to_csr
from graphops.edges import remove_self_loops
from graphops.selection import filter_components, largest_component
from graphops.subgraph import induce
from graphops.randomize import randomize_endpoints
from graphops.errors import UnsatisfiableSwapRequest
from graphops.metrics import REGISTRY
from graphops.utils.logger import SwapLogger

from graphops.utils.pipeline_utils import (
    load_config,
    clean_filename,
    randomized_graph_path,
    PipelineConfig,
)

def main(config_path: str) -> list:
    """
    Build degree-preserving randomized copies of every configured dataset.

    :return: Paths of the randomized edge lists written (or kept) on disk.
    """
    cfg: PipelineConfig = load_config(Path(config_path))
    rand_cfg = cfg["randomize"]
    logging_cfg = cfg["logging"]
    out_base = Path(cfg["output_folder"])

    rng = np.random.default_rng(cfg["seed"])

    jobs = [
        (ds, i)
        for ds in cfg["datasets"]
        for i in range(rand_cfg["n_randomizations"])
    ]
    iterator = tqdm(jobs, desc="Randomizing graphs", total=len(jobs))

    written = []
    prepared = {}
    for ds, i in iterator:
        if ds["name"] not in prepared:
            g = GraphLoader.load(Path(ds["path"]))
            if rand_cfg["remove_self_loops"]:
                n_loops = remove_self_loops(g)
                if n_loops:
                    print(f"{ds['name']}: removed {n_loops} self-loops")
            if rand_cfg["largest_component"]:
                g = largest_component(g)
            elif rand_cfg["min_component_size"] > 1:
                g = filter_components(g, rand_cfg["min_component_size"])
            prepared[ds["name"]] = g
            print(f"{ds['name']}: {g.num_vertices()} vertices, {g.num_edges()} edges")
        base = prepared[ds["name"]]

        out_path = randomized_graph_path(out_base, ds, i)
        if out_path.exists() and not rand_cfg["overwrite"]:
            written.append(out_path)
            continue

        # fresh copy, the base graph is reused for every randomization
        g = induce(base, range(base.num_vertices()))
        swap_count = int(round(rand_cfg["swaps_per_edge"] * g.num_edges()))
        max_attempts = swap_count * int(rand_cfg["attempts_per_swap"])

        try:
            if logging_cfg:
                log_path = Path(logging_cfg["logging_folder"]) / f"{clean_filename(ds['name'])}_{i:03d}.csv"
                with SwapLogger(log_path, log_every=logging_cfg["log_every"]) as logger:
                    stats = randomize_endpoints(g, swap_count, rng, max_attempts=max_attempts, logger=logger)
            else:
                stats = randomize_endpoints(g, swap_count, rng, max_attempts=max_attempts)
        except UnsatisfiableSwapRequest as err:
            print(
                f"{ds['name']} #{i}: skipped, only {err.accepted} of {err.requested} swaps "
                f"accepted after {err.attempts} attempts"
            )
            continue

        tic = time()
        GraphWriter.save_edgelist(out_path, g)
        toc = time()

        scores = "no vertices"
        if g.num_vertices():
            emp_adj, sur_adj = graph_to_csr(base), graph_to_csr(g)
            scores = ", ".join(
                f"{name} = {metric(emp_adj, sur_adj):.4f}" for name, metric in REGISTRY.items()
            )
        print(
            f"{ds['name']} #{i}: {stats.accepted} swaps in {stats.elapsed_seconds:.2f}s "
            f"(acceptance {stats.acceptance_rate:.3f}), saved in {toc - tic:.2f}s, {scores}"
        )
        written.append(out_path)

    return written


if __name__ == "__main__":
    p = argparse.ArgumentParser()
    p.add_argument("--config", type=str, help="Path to the configuration file.")
    args = p.parse_args()

    main(config_path=args.config)
