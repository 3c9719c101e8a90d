from __future__ import annotations


class FakeNode:
    """Minimal stand-in for a tree-sitter Node."""

    def __init__(
        self,
        node_type: str,
        *,
        text: str = "",
        start_byte: int = 0,
        end_byte: int | None = None,
        fields: dict[str, FakeNode] | None = None,
        children: list[FakeNode] | None = None,
        is_named: bool = True,
    ) -> None:
        self.type = node_type
        self.text = text.encode("utf-8")
        self.start_byte = start_byte
        self.end_byte = start_byte + len(self.text) if end_byte is None else end_byte
        self.fields = fields or {}
        self.children = children if children is not None else list(self.fields.values())
        self.is_named = is_named

    def child_by_field_name(self, name: str) -> FakeNode | None:
        return self.fields.get(name)


def member(obj: str, prop: str, *, start: int = 0) -> FakeNode:
    """`obj.prop` as tree-sitter-javascript shapes it."""

    object_node = FakeNode("identifier", text=obj, start_byte=start)
    dot = FakeNode(".", text=".", start_byte=start + len(obj), is_named=False)
    property_node = FakeNode("property_identifier", text=prop, start_byte=start + len(obj) + 1)
    return FakeNode(
        "member_expression",
        text=f"{obj}.{prop}",
        start_byte=start,
        fields={"object": object_node, "property": property_node},
        children=[object_node, dot, property_node],
    )
