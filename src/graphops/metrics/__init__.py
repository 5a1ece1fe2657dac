from .degree import degree_distance
from .clustering import avg_clustering_difference



# registry maps a short name -> call-able
REGISTRY = {
    "degree": degree_distance,
    "avg_clustering": avg_clustering_difference,
}
