"""Pydantic models describing a graph document read from TOML."""

from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

NodeName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class NodeEntry(BaseModel):
    """A single node of a graph document.

    Example:
        # In TOML
        [[nodes]]
        name = "firefox"
        depends = ["net", "xorg"]

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: NodeName
    depends: tuple[NodeName, ...] = ()


class GraphDocument(BaseModel):
    """A list of named nodes and the names they depend on.

    Dependencies may name nodes that appear later in the document.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    nodes: tuple[NodeEntry, ...] = Field(default=())

    @model_validator(mode="after")
    def _check_names(self) -> Self:
        """Reject duplicate node names and dependencies on unknown nodes."""
        seen: set[str] = set()
        for entry in self.nodes:
            if entry.name in seen:
                msg = f"Duplicate node name '{entry.name}'"
                raise ValueError(msg)
            seen.add(entry.name)

        for entry in self.nodes:
            missing = [dep for dep in entry.depends if dep not in seen]
            if missing:
                msg = f"Node '{entry.name}' depends on unknown nodes: {', '.join(missing)}"
                raise ValueError(msg)
        return self
