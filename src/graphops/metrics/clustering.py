""" 
Average clustering coefficient difference between two graphs. Swapping
edges destroys triangles, so a well-mixed randomization of a clustered
graph shows a clear difference here.
"""

# metrics/clustering.py
import networkx as nx
from scipy.sparse import csr_array

###############################################################################
# Average clustering coefficient difference -------------------------------
###############################################################################
def avg_clustering_difference(
    emp_adj: csr_array,
    sur_adj: csr_array,
) -> float:
    """Absolute difference in *average* clustering coefficient."""
    emp_C = nx.average_clustering(nx.from_scipy_sparse_array(emp_adj))
    sur_C = nx.average_clustering(nx.from_scipy_sparse_array(sur_adj))
    return abs(emp_C - sur_C)
