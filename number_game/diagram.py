# https://networkx.org/documentation/stable/reference/classes/digraph.html

from collections import defaultdict
from typing import Dict, Iterable, Optional, Tuple

import matplotlib.pyplot as plt
import networkx as nx

from .search import Path
from .state import Role, Side, format_sequence
from .tree import GameNode, find_node, optimal_path

MAX_DIAGRAM_DEPTH = 3

COLOR_CURRENT = "#ffd166"
COLOR_PATH = "#90ee90"
COLOR_OPTIMAL = "#d4f7d4"
COLOR_PRUNED = "#eeeeee"
COLOR_OTHER = "#c5d6ff"


def node_id(path: Path) -> str:
    """"ROOT" for the root, otherwise the moves as letters, e.g. "LRL"."""
    if not path:
        return "ROOT"
    return "".join("L" if s is Side.LEFT else "R" for s in path)


def _is_pruned(path: Path, pruned: Iterable[Path]) -> bool:
    return any(path[:len(p)] == p for p in pruned)


def tree_graph(root: GameNode, focus: Path = (), max_depth: int = MAX_DIAGRAM_DEPTH,
               pruned_paths: Iterable[Path] = ()) -> nx.DiGraph:
    """
    Window of the tree as a DiGraph: the chain from the root down to `focus`
    plus up to `max_depth` levels below it. Node attributes carry what the
    drawing needs (label, kind, on_path, optimal, pruned).
    """
    pruned_paths = list(pruned_paths)
    canonical = {n.path for n in optimal_path(root)}
    G = nx.DiGraph()

    def add(n: GameNode):
        kind = "LEAF" if n.is_leaf else ("MAX" if n.to_move is Role.MAX else "MIN")
        G.add_node(node_id(n.path), kind=kind, minimax=n.minimax,
                   label=_label(n), on_path=n.path in canonical, optimal=n.is_optimal,
                   pruned=_is_pruned(n.path, pruned_paths), current=n.path == focus)

    node = root
    add(node)
    for side in focus:
        nxt = node.child(side)
        add(nxt)
        G.add_edge(node_id(node.path), node_id(nxt.path), side=side.value, taken=nxt.taken)
        node = nxt

    frontier = [node]
    for _ in range(max_depth):
        below = []
        for n in frontier:
            for c in n.children:
                add(c)
                G.add_edge(node_id(n.path), node_id(c.path), side=c.move.value, taken=c.taken)
                below.append(c)
        frontier = below
    return G


def _label(n: GameNode) -> str:
    head = "start" if n.move is None else f"{n.move.value[0].upper()}:{n.taken}"
    return f"{head}\n{format_sequence(n.sequence)}\n{n.score_max}–{n.score_min}\nv={n.minimax}"


def hierarchy_pos(G, root, width=2.8, vert_gap=0.28, vert_loc=1.0, xcenter=0.0, sibling_sep=0.0):
    """Place nodes in a tidy top-down hierarchy."""
    children = defaultdict(list)
    for u, v in G.edges():
        children[u].append(v)

    leaves: Dict[str, int] = {}
    def count_leaves(n):
        if not children[n]:
            leaves[n] = 1
        else:
            leaves[n] = sum(count_leaves(c) for c in children[n])
        return leaves[n]
    count_leaves(root)

    pos: Dict[str, Tuple[float, float]] = {}
    def place(n, left, right, y):
        pos[n] = ((left + right) / 2.0, y)
        k = len(children[n])
        if k == 0:
            return
        avail = max((right - left) - sibling_sep * (k - 1), 0.0)
        start = left
        for i, c in enumerate(children[n]):
            w = avail * leaves[c] / leaves[n]
            place(c, start, start + w, y - vert_gap)
            start += w
            if i < k - 1:
                start += sibling_sep

    place(root, xcenter - width/2, xcenter + width/2, vert_loc)
    return pos


def node_colors(G) -> Dict[str, str]:
    colors = {}
    for nid, data in G.nodes(data=True):
        if data["current"]:
            colors[nid] = COLOR_CURRENT
        elif data["pruned"]:
            colors[nid] = COLOR_PRUNED
        elif data["on_path"]:
            colors[nid] = COLOR_PATH
        elif data["optimal"]:
            colors[nid] = COLOR_OPTIMAL
        else:
            colors[nid] = COLOR_OTHER
    return colors


def draw_game_tree(root: GameNode, focus: Path = (), max_depth: int = MAX_DIAGRAM_DEPTH,
                   pruned_paths: Iterable[Path] = (), title: Optional[str] = None,
                   compact: bool = True):
    """Draw the window from `tree_graph` and return the matplotlib figure."""
    find_node(root, focus)  # KeyError early for a path that is not in the tree
    G = tree_graph(root, focus, max_depth, pruned_paths)
    n_leaves = sum(1 for n in G.nodes if G.out_degree(n) == 0)
    fig_w = 8.0 if compact else 10.5
    fig_h = 5.0 if compact else 6.2
    node_size = max(500, 1800 - 60 * n_leaves) if compact else 2000
    font_size = 7 if compact else 9

    pos = hierarchy_pos(G, "ROOT", width=5.0, vert_gap=0.34, sibling_sep=0.10)
    colors = node_colors(G)
    edge_colors = []
    widths = []
    for u, v in G.edges():
        data = G.nodes[v]
        if data["pruned"]:
            edge_colors.append("#cccccc"); widths.append(1.0)
        elif data["on_path"] and G.nodes[u]["on_path"]:
            edge_colors.append("#2a9d8f"); widths.append(2.6)
        else:
            edge_colors.append("#333333"); widths.append(1.0)

    fig = plt.figure(figsize=(fig_w, fig_h))
    ax = plt.gca()
    ax.margins(0.05 if compact else 0.15)

    nx.draw(G, pos, ax=ax, with_labels=False,
            node_color=[colors[n] for n in G.nodes()],
            edge_color=edge_colors, width=widths, node_size=node_size, arrows=False)
    nx.draw_networkx_labels(
        G, pos, {n: d["label"] for n, d in G.nodes(data=True)}, ax=ax, font_size=font_size,
        bbox=dict(facecolor="none", edgecolor="none", alpha=0.7, pad=0.3 if compact else 0.5)
    )

    if title:
        ax.set_title(title)
    fig.tight_layout()
    return fig
