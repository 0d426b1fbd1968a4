"""Build NetworkX call graphs from assembly modules."""

from __future__ import annotations

import networkx as nx

from asmsplit.asm.catalog import list_functions
from asmsplit.asm.references import extract_calls


def build_call_graph(modules: dict[str, str]) -> nx.DiGraph:
    """Build a directed graph of function references across *modules*.

    *modules* maps module paths to their text.  Nodes are symbol names.
    Functions cataloged in a module carry ``module``, ``start_line``,
    ``end_line`` and ``defined=True``; symbols that are only referenced get
    ``defined=False``.  Edges run from the referencing function to the
    referenced symbol.

    A name defined more than once keeps its first definition (module paths
    are visited in sorted order) and records every location in
    ``locations``.
    """
    G = nx.DiGraph()
    refs: list[tuple[str, list[str]]] = []

    for path in sorted(modules):
        for fn in list_functions(modules[path]):
            loc = (path, fn.start_line)
            if fn.name in G:
                G.nodes[fn.name]["locations"].append(loc)
            else:
                G.add_node(
                    fn.name,
                    defined=True,
                    module=path,
                    start_line=fn.start_line,
                    end_line=fn.end_line,
                    locations=[loc],
                )
            refs.append((fn.name, extract_calls(fn.code)))

    for caller, callees in refs:
        for callee in callees:
            if callee == caller:
                continue
            if callee not in G:
                G.add_node(callee, defined=False)
            G.add_edge(caller, callee, kind="reference")

    return G


def callees(G: nx.DiGraph, name: str) -> list[str]:
    if name not in G:
        return []
    return sorted(G.successors(name))


def callers(G: nx.DiGraph, name: str) -> list[str]:
    if name not in G:
        return []
    return sorted(G.predecessors(name))


def external_symbols(G: nx.DiGraph) -> list[str]:
    """Symbols referenced but not defined in any scanned module."""
    return sorted(n for n, d in G.nodes(data=True) if not d.get("defined"))


def find_cycles(G: nx.DiGraph, min_size: int = 2) -> list[list[str]]:
    """Mutually recursive groups of functions, largest first."""
    sccs = [sorted(c) for c in nx.strongly_connected_components(G) if len(c) >= min_size]
    sccs.sort(key=lambda c: (-len(c), c))
    return sccs


def dependency_order(G: nx.DiGraph) -> list[str]:
    """Defined functions ordered so that callees come before their callers.

    Members of a cycle are emitted together in name order.  Useful for
    working through a module leaf-first.
    """
    if len(G) == 0:
        return []
    cond = nx.condensation(G)
    order: list[str] = []
    for comp in reversed(list(nx.lexicographical_topological_sort(cond, key=lambda c: min(cond.nodes[c]["members"])))):
        members = sorted(cond.nodes[comp]["members"])
        order.extend(m for m in members if G.nodes[m].get("defined"))
    return order
