# result_decoder.py
import base64
from typing import Any, Callable, Dict

from MCPAdapter.core.errors import (
    EmptyResult,
    ExecutionFailed,
    MalformedContent,
    UnsupportedContentType,
    UnsupportedResource,
)


def _field(obj: Any, key: str) -> Any:
    """Read ``key`` from an mcp.types model or from a plain mapping."""
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def _required(item: Any, key: str) -> str:
    value = _field(item, key)
    if value is None:
        raise MalformedContent(_field(item, "type"), key)
    return value


def _decode_text(item: Any) -> str:
    return _required(item, "text")


def _decode_image(item: Any) -> str:
    # already base64 encoded by the server
    return _required(item, "data")


def _decode_resource(item: Any) -> str:
    res = _field(item, "resource")
    text = _field(res, "text")
    if text is not None:
        return text

    blob = _field(res, "blob")
    if blob is not None:
        if isinstance(blob, (bytes, bytearray, memoryview)):
            return base64.b64encode(bytes(blob)).decode("ascii")
        return str(blob)

    raise UnsupportedResource(_field(res, "type"))


_DECODERS: Dict[str, Callable[[Any], str]] = {
    "text": _decode_text,
    "image": _decode_image,
    "resource": _decode_resource,
}


def decode_tool_result(result: Any) -> str:
    """
    Flatten an MCP ``CallToolResult`` into one string.

    Parts are decoded in order and concatenated without separators. The
    first part that cannot be decoded aborts the whole result.

    Raises
    ------
    ExecutionFailed
        The server flagged the result with ``isError``.
    EmptyResult
        The result has no content parts.
    UnsupportedResource
        An embedded resource has neither ``text`` nor ``blob``.
    UnsupportedContentType
        A part has a type tag other than text, image or resource.
    MalformedContent
        A text or image part lacks its ``text`` or ``data``.
    """
    content = _field(result, "content")

    if _field(result, "isError"):
        raise ExecutionFailed(f"Tool execution failed: {content}")
    if not content:
        raise EmptyResult("Tool execution returned no content")

    decoded = []
    for item in content:
        content_type = _field(item, "type")
        decoder = _DECODERS.get(content_type)
        if decoder is None:
            raise UnsupportedContentType(content_type)
        decoded.append(decoder(item))
    return "".join(decoded)
