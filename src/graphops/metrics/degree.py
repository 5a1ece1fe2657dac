""" 
Degree distribution distance between an empirical graph and a randomized
reference graph. A degree-preserving randomization must score exactly 0.
"""
# metrics/degree.py
import numpy as np
from scipy.stats import wasserstein_distance #  1-D EMD
from scipy.sparse import csr_array

def degree_distance(
        emp_adj: csr_array,
        sur_adj: csr_array,
    ) -> float:
    """ 
    Earth-mover (1-D Wasserstein) distance between the degree distributions
    of two undirected graphs.

    Parameters
    ----------
    emp_adj, sur_adj : scipy.sparse.csr_array
        Symmetric adjacency of the empirical and surrogate graphs.
    Returns
    -------
    float
        Distance (lower = more similar).
    """
    emp_degrees = np.asarray(emp_adj.sum(axis=0)).flatten().astype(int)
    sur_degrees = np.asarray(sur_adj.sum(axis=0)).flatten().astype(int)

    if emp_degrees.size == 0 or sur_degrees.size == 0:
        raise ValueError("Degree distance is undefined for graphs without vertices.")

    return float(wasserstein_distance(emp_degrees, sur_degrees))
