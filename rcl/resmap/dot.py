"""GraphViz rendering of a leveled resolution map."""
from __future__ import annotations

from typing import List

from rcl.config import validate_label_mode
from rcl.resmap.models import LeveledGraph


def _quote(name: str) -> str:
    return '"' + name.replace("\\", "\\\\").replace('"', '\\"') + '"'


def _node_labels(graph: LeveledGraph, label: str) -> List[str]:
    lines = []
    for name, node in graph.nodes.items():
        if label == "size":
            text = str(node.size)
        elif label == "ival":
            text = str(int(node.value))
        elif label == "leaf":
            if not node.leaf:
                continue
            text = node.leaf
        else:
            continue
        lines.append(f"{_quote(name)} [label={_quote(text)}];")
    return lines


def render_dot(graph: LeveledGraph, label: str = "size", xlabel_remainder: bool = False) -> str:
    """Emit a digraph with an invisible ruler of levels and one band per rung."""
    validate_label_mode(label)
    top = graph.max_rung

    ruler = [f"lev{i}" for i in range(top + 2)]
    ruler += [f"lev{i} -> lev{i + 1} [minlen=1.0]" for i in range(top + 1)]

    bands = []
    for rung, names in graph.bands().items():
        members = " ".join(_quote(n) for n in names)
        bands.append(f"{{ rank = same; lev{rung} {members}; }}")

    labels = _node_labels(graph, label)
    if xlabel_remainder:
        for name in graph.parents:
            missing = graph.nodes[name].missing
            labels.append(
                f'{_quote(name)} [xlabel=< <font point-size="40">[{missing:g}]</font> >];'
            )

    out = [
        "digraph g {",
        '  node [shape="circle", width=1.0, fixedsize=true, label="" ];',
        "  edge [arrowhead=none]",
        "  ranksep = 0.2;",
        "  subgraph levels {",
        '    label="levels";',
        '    node [style="invis", shape=point, width=0.01];',
        '    edge [style="invis"];',
    ]
    out += [f"    {line}" for line in ruler]
    out += [
        "  }",
        "  subgraph tree {",
        "    node [width=2, fontsize=40];",
    ]
    out += [f"    {line}" for line in bands + labels]
    out += [f"    {_quote(p)} -> {_quote(c)}" for p, c in graph.edges]
    out += ["  }", "}"]
    return "\n".join(out) + "\n"
