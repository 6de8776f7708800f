import json
import os
import pickle

import networkx as nx


def build_dependency_schema(records, builtins=()):
    """Turn resolution records into file -> extension nodes and edges."""
    nodes = {}
    edges = {}
    for rec in records:
        file_id = rec["file_path"]
        ext_id = rec["module"]
        nodes.setdefault(file_id, {"id": file_id, "kind": "file"})
        nodes.setdefault(ext_id, {"id": ext_id, "kind": "extension", "builtin": ext_id in builtins})
        edge = edges.setdefault((file_id, ext_id), {"from": file_id, "to": ext_id, "relation": "requires", "symbols": []})
        if rec["symbol"] not in edge["symbols"]:
            edge["symbols"].append(rec["symbol"])
    return {"nodes": list(nodes.values()), "edges": list(edges.values())}


def build_graph_from_schema(schema):
    G = nx.DiGraph()

    for node in schema["nodes"]:
        nid = node["id"]
        attrs = {}
        for (k, v) in node.items():
            if k == "id":
                continue
            if v is None:
                attrs[k] = ""
            elif isinstance(v, (str, int, float, bool)):
                attrs[k] = v
            else:
                attrs[k] = json.dumps(v)
        G.add_node(nid, **attrs)

    for edge in schema["edges"]:
        attrs = {"relation": edge.get("relation") or ""}
        if edge.get("symbols"):
            attrs["symbols"] = ",".join(edge["symbols"])
        G.add_edge(edge["from"], edge["to"], **attrs)

    return G


def write_graph(G, graph_path):
    parent = os.path.dirname(graph_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    if graph_path.endswith(".gpickle"):
        with open(graph_path, "wb") as f:
            pickle.dump(G, f)
    elif graph_path.endswith(".graphml"):
        nx.write_graphml(G, graph_path)
    else:
        raise RuntimeError(f"Unsupported graph format: {graph_path}")
