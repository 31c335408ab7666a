# app.py
#
# Streamlit-based storage pool sizer
# Run with: streamlit run app.py

import streamlit as st

from pool_sizer import (
    DEFAULT_PARITY_OPTIONS,
    GIB,
    K8S_UNITS,
    CapacityRequest,
    LayoutConstraints,
    analyze_parity,
    from_bytes,
    plan_layout,
    plan_memory,
    setup_logging,
    to_bytes,
)
from pool_sizer.diagram import build_pool_graph

setup_logging()


def nice_size(n: int) -> str:
    size = from_bytes(n, K8S_UNITS, show_decimals=True)
    return f"{size.value} {size.unit}"


SIZE_UNITS = [unit for unit in K8S_UNITS.symbols if unit not in ("B", "Ki", "Mi")]

# ------------------------------
# Streamlit UI
# ------------------------------

st.set_page_config(
    page_title="Storage Pool Sizer",
    layout="wide",
)

st.title("Storage Pool Sizer")

st.markdown(
    """
This tool lays out an object-storage pool from a desired capacity:

- **Servers and drives** per server, with a uniform volume size
- **Erasure code parity** trade-offs between usable capacity and failures tolerated
- **Memory** request and limit per server
"""
)

# ---- Sidebar inputs ----
st.sidebar.header("Pool inputs")

st.sidebar.subheader("Capacity")
capacity_value = st.sidebar.number_input(
    "Total size",
    min_value=0.0,
    value=100.0,
    step=1.0,
)
capacity_unit = st.sidebar.selectbox(
    "Unit",
    options=SIZE_UNITS,
    index=SIZE_UNITS.index("Ti"),
)

st.sidebar.subheader("Servers and drives")
num_nodes = st.sidebar.number_input(
    "Number of servers",
    min_value=1,
    value=4,
    step=1,
)
drives_per_node = st.sidebar.number_input(
    "Drives per server (0 = choose for me)",
    min_value=0,
    value=0,
    step=1,
)

max_cluster_value = st.sidebar.number_input(
    "Maximum cluster size",
    min_value=1.0,
    value=1.0,
    step=1.0,
)
max_cluster_unit = st.sidebar.selectbox(
    "Maximum cluster size unit",
    options=SIZE_UNITS,
    index=SIZE_UNITS.index("Pi"),
)

st.sidebar.subheader("Erasure code")
parity_options = st.sidebar.multiselect(
    "Parity options (most protective first)",
    options=["EC:8", "EC:7", "EC:6", "EC:5", "EC:4", "EC:3", "EC:2", "EC:1"],
    default=list(DEFAULT_PARITY_OPTIONS),
)

st.sidebar.subheader("Memory")
memory_gib = st.sidebar.number_input(
    "Memory request per server (Gi)",
    min_value=0,
    value=8,
    step=1,
)
max_memory_gib = st.sidebar.number_input(
    "Memory available per server (Gi)",
    min_value=0,
    value=64,
    step=1,
)

# ------------------------------
# Calculations
# ------------------------------

request = CapacityRequest(amount=capacity_value, unit=capacity_unit)
constraints = LayoutConstraints(
    max_cluster_bytes=to_bytes(max_cluster_value, max_cluster_unit, K8S_UNITS),
    forced_node_count=int(num_nodes),
    forced_drives_per_node=int(drives_per_node) or None,
)

layout = plan_layout(request, constraints)

# ------------------------------
# Output
# ------------------------------

st.header("Pool layout")

if not layout.ok:
    st.error(layout.message)
    st.stop()

col1, col2, col3, col4 = st.columns(4)
with col1:
    st.metric("Servers", layout.nodes)
with col2:
    st.metric("Drives per server", layout.volumes_per_node)
with col3:
    st.metric("Total volumes", layout.total_volumes)
with col4:
    st.metric("Volume size", nice_size(layout.volume_size_bytes))

st.caption(f"Raw capacity: {nice_size(layout.raw_capacity_bytes)}")

summary = analyze_parity(parity_options, layout.total_volumes, layout.volume_size_bytes)

st.header("Erasure code parity")

if summary.ok:
    st.write(
        f"**Stripe set size:** {summary.erasure_stripe_set_size} "
        f"(maximum parity {summary.max_ec}, default {summary.default_ec})"
    )
    st.table(
        [
            {
                "Erasure code": option.erasure_code,
                "Storage factor": f"{float(option.storage_factor):.2f}",
                "Usable capacity": nice_size(option.usable_capacity_bytes),
                "Drive failures tolerated": option.max_failure_tolerations,
            }
            for option in summary.options
        ]
    )
else:
    st.warning("No usable parity options selected.")

st.header("Memory per server")

memory = plan_memory(memory_gib, layout.raw_capacity_bytes, max_memory_gib * GIB)
if memory.ok:
    mem_col1, mem_col2 = st.columns(2)
    with mem_col1:
        st.metric("Request", nice_size(memory.request_bytes))
    with mem_col2:
        st.metric("Limit", nice_size(memory.limit_bytes))
else:
    st.error(memory.message)

st.header("Topology")
st.graphviz_chart(build_pool_graph(layout, summary))

st.info(
    "Note: the layout and parity figures are **sizing approximations** based on the requested "
    "capacity and per-volume size limits. They are intended as a planning aid, not as a "
    "provisioning plan."
)
