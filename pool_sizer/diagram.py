# diagram.py
#
# Aggregated Graphviz diagram of a planned pool.

from typing import Optional

from graphviz import Digraph

from pool_sizer.models import ErasureSummary, LayoutPlan
from pool_sizer.units import K8S_UNITS, from_bytes


def _size_label(n: int) -> str:
    size = from_bytes(n, K8S_UNITS, show_decimals=True)
    return f"{size.value}{size.unit}"


def build_pool_graph(
    plan: LayoutPlan,
    summary: Optional[ErasureSummary] = None,
    name: str = "pool-0",
) -> Digraph:
    """
    Build a simplified diagram:

      Pool                    (top)
      Servers
      Drives / volumes        (bottom)

    The erasure code line is only drawn for a successful summary.
    """
    dot = Digraph(comment=f"{name} layout")
    dot.attr(rankdir="TB", splines="polyline")
    dot.attr("node", shape="box")

    pool_node = f"{name}_pool"
    pool_label = f"Pool {name}\n(raw = {_size_label(plan.raw_capacity_bytes)})"
    if summary is not None and summary.ok:
        default = summary.option(summary.default_ec)
        pool_label += (
            f"\n{summary.default_ec}, stripe set = {summary.erasure_stripe_set_size}"
        )
        if default is not None:
            pool_label += f"\n(usable = {_size_label(default.usable_capacity_bytes)})"
    dot.node(pool_node, pool_label)

    servers_node = f"{name}_servers"
    dot.node(servers_node, f"Servers\n(count = {plan.nodes})")
    dot.edge(pool_node, servers_node)

    drives_node = f"{name}_drives"
    dot.node(
        drives_node,
        f"Volumes\n(per server = {plan.volumes_per_node}, "
        f"total = {plan.total_volumes}, "
        f"size = {_size_label(plan.volume_size_bytes)})",
    )
    dot.edge(servers_node, drives_node)

    return dot
