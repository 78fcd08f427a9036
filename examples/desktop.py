"""Build the desktop start-up graph in code and print its execution order."""

from rich.console import Console

import depsolve as ds

console = Console()

builder: ds.GraphBuilder[str] = ds.GraphBuilder()

boot = builder.add_node("boot")
xorg = builder.add_node("xorg", [boot])
dwm = builder.add_node("dwm", [xorg])
net = builder.add_node("net", [boot])
firefox = builder.add_node("firefox", [net, xorg])

# xorg waits for the window manager to register, which closes a cycle
builder.add_deps(xorg, [dwm])

graph = builder.build()
report = graph.solve_report()

if __name__ == "__main__":
    console.print(f"The solution is {graph.values(report.order)}")
    for step in report.repairs:
        console.print(f"[yellow]Broke cycle at {graph[step.node]}[/yellow] (from {graph.values(step.cleared_from)})")
