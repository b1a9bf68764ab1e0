from pmcim.graphs.io import build_influence_graph, read_graph
