"""Document-tree builders shared by the adf2md tests."""

from typing import Any


def text(value: str, *marks: Any) -> dict[str, Any]:
    """Build a text node, marks given as type names or mark dictionaries."""
    node: dict[str, Any] = {"type": "text", "text": value}
    if marks:
        node["marks"] = [m if isinstance(m, dict) else {"type": m} for m in marks]
    return node


def para(*content: Any) -> dict[str, Any]:
    """Build a paragraph; plain strings become text nodes."""
    return {"type": "paragraph", "content": [text(c) if isinstance(c, str) else c for c in content]}


def doc(*content: dict[str, Any]) -> dict[str, Any]:
    return {"type": "doc", "version": 1, "content": list(content)}


def bullet_list(*items: dict[str, Any]) -> dict[str, Any]:
    return {"type": "bulletList", "content": list(items)}


def ordered_list(*items: dict[str, Any], order: int | None = None) -> dict[str, Any]:
    node: dict[str, Any] = {"type": "orderedList", "content": list(items)}
    if order is not None:
        node["attrs"] = {"order": order}
    return node


def list_item(*content: dict[str, Any]) -> dict[str, Any]:
    return {"type": "listItem", "content": list(content)}


def code_block(code: str, language: str | None = None) -> dict[str, Any]:
    node: dict[str, Any] = {"type": "codeBlock", "content": [text(code)] if code else []}
    if language is not None:
        node["attrs"] = {"language": language}
    return node


def table(*rows: list[dict[str, Any]]) -> dict[str, Any]:
    return {"type": "table", "content": [{"type": "tableRow", "content": list(cells)} for cells in rows]}


def cell(value: str, header: bool = False) -> dict[str, Any]:
    return {"type": "tableHeader" if header else "tableCell", "content": [para(value)]}

